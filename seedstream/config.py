# seedstream/config.py

"""
Global configuration for the seedstream package.

This module centralizes:
  - the generator used when a caller does not pass one,
  - numeric limits shared by generators and distributions,
  - where (and how loudly) the package logs.

Everything here is a plain constant. Nothing is read from the
environment or from disk; applications that want different defaults
pass explicit arguments instead.
"""

from __future__ import annotations

import logging
from pathlib import Path


# -------------------------------------------------------------------
# Generators
# -------------------------------------------------------------------

# Name of the generator built by utils.rng.make_generator() and by the
# Randomizer facade when no generator is supplied.
DEFAULT_GENERATOR: str = "xorshift128"

# 32-bit limits. Seeds are unsigned 32-bit values; "int" results follow
# the signed 32-bit range.
INT_MAX: int = 2**31 - 1
INT_MIN: int = -(2**31)
UINT_MAX: int = 2**32 - 1


# -------------------------------------------------------------------
# Numerics
# -------------------------------------------------------------------

# Absolute tolerance used by utils.tmath when comparing doubles.
TOLERANCE: float = 1e-6


# -------------------------------------------------------------------
# Logging
# -------------------------------------------------------------------

# Directory for log files, used only if file logging is switched on.
LOGS_DIR: Path = Path.cwd() / "logs"

LOG_FILENAME: str = "seedstream.log"

LOG_LEVEL: int = logging.INFO
