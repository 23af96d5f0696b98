# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Error taxonomy for bcryptkit.

Assumptions:
- Every error is a caller-input validation failure
- Errors are deterministic and never retried
- All errors derive from ValueError so generic handlers still catch them
"""


class BCryptError(ValueError):
    """Base class for all bcryptkit validation errors."""
    pass


class InvalidSecret(BCryptError):
    """Raised when the secret passed to the hash primitive is absent."""
    pass


class InvalidSalt(BCryptError):
    """Raised when a salt does not match the bcrypt salt grammar."""
    pass


class InvalidHash(BCryptError):
    """Raised when a stored hash does not match the canonical hash grammar."""
    pass


class InvalidCost(BCryptError):
    """Raised when a cost factor is non-numeric or not positive."""
    pass
