# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
bcryptkit: password hashing around the bcrypt algorithm.
"""
from bcryptkit.calibrate import Calibrator, calibrate
from bcryptkit.config import Settings
from bcryptkit.engine import DEFAULT_COST, Engine
from bcryptkit.errors import (
    BCryptError,
    InvalidCost,
    InvalidHash,
    InvalidSalt,
    InvalidSecret,
)
from bcryptkit.format import is_valid_hash, is_valid_salt
from bcryptkit.password import PasswordHash

__version__ = "1.0.0"

__all__ = [
    "BCryptError",
    "Calibrator",
    "DEFAULT_COST",
    "Engine",
    "InvalidCost",
    "InvalidHash",
    "InvalidSalt",
    "InvalidSecret",
    "PasswordHash",
    "Settings",
    "calibrate",
    "is_valid_hash",
    "is_valid_salt",
]
