# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Salt generation and hashing using bcrypt.

The Engine is the only code that calls the hash primitive (``bcrypt.hashpw``).
Every call is gated by structural validation, because the primitive is a
native boundary that should never see malformed input.

Assumptions:
- Uses bcrypt for the Blowfish-based hash computation
- Randomness comes from an injected callable (secrets.token_bytes by default)
- The Engine holds no mutable state; one instance can be shared freely
"""
import numbers
import secrets
from typing import Any, Callable, Optional, Union

import bcrypt

from bcryptkit.config import Settings
from bcryptkit.errors import InvalidCost, InvalidSalt, InvalidSecret
from bcryptkit.format import encode_salt, is_valid_salt as _is_valid_salt
from bcryptkit.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_COST = 10
MAX_SALT_LENGTH = 16
# bcrypt only keys on the first 72 bytes of a secret
MAX_SECRET_LENGTH = 72

Secret = Union[str, bytes]
HashPrimitive = Callable[[bytes, bytes], bytes]
RandomBytes = Callable[[int], bytes]


def _coerce_cost(cost: Any) -> int:
    """Return ``cost`` as a positive int or raise InvalidCost.

    Integral strings such as "12" are accepted.
    """
    if isinstance(cost, bool):
        raise InvalidCost("cost must be numeric and > 0")
    if isinstance(cost, str):
        try:
            cost = int(cost.strip())
        except ValueError:
            raise InvalidCost("cost must be numeric and > 0") from None
    if not isinstance(cost, numbers.Integral):
        if isinstance(cost, numbers.Real) and float(cost).is_integer():
            cost = int(cost)
        else:
            raise InvalidCost("cost must be numeric and > 0")
    if cost <= 0:
        raise InvalidCost("cost must be numeric and > 0")
    return int(cost)


class Engine:
    """Wrapper around the bcrypt primitive.

    Args:
        settings: Hashing settings; a fresh Settings() when omitted
        random_bytes: Callable returning n cryptographically random bytes
        primitive: Callable with the signature of bcrypt.hashpw
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        random_bytes: Optional[RandomBytes] = None,
        primitive: Optional[HashPrimitive] = None,
    ):
        self.settings = settings or Settings()
        self._random_bytes = random_bytes or secrets.token_bytes
        self._primitive = primitive or bcrypt.hashpw

    @staticmethod
    def is_valid_salt(salt: Any) -> bool:
        """Return True if ``salt`` is a valid bcrypt salt."""
        return _is_valid_salt(salt)

    @staticmethod
    def is_valid_secret(secret: Any) -> bool:
        """Return True if ``secret`` can be hashed. Only None is rejected."""
        return secret is not None

    def hash(self, secret: Secret, salt: str) -> str:
        """Hash a secret with a valid salt.

        Args:
            secret: Plain text secret (str is UTF-8 encoded); may be empty
            salt: Salt string, e.g. from generate_salt()

        Returns:
            str: Canonical bcrypt hash string produced by the primitive

        Raises:
            InvalidSecret: If secret is None
            InvalidSalt: If salt is malformed or rejected by the primitive

        Assumptions:
        - The primitive is never called on unvalidated input
        - Secrets longer than 72 bytes are truncated, as bcrypt always has
        """
        if not self.is_valid_secret(secret):
            logger.warning("secret_rejected", reason="secret is None")
            raise InvalidSecret("invalid secret")
        if not self.is_valid_salt(salt):
            logger.warning("salt_rejected", reason="malformed salt")
            raise InvalidSalt("invalid salt")

        if isinstance(secret, (bytes, bytearray, memoryview)):
            secret_bytes = bytes(secret)
        else:
            secret_bytes = str(secret).encode("utf-8")
        try:
            hashed = self._primitive(secret_bytes[:MAX_SECRET_LENGTH], salt.encode("ascii"))
        except ValueError as exc:
            # Structurally valid but unsupported, e.g. version "2x" or cost 99
            logger.warning("salt_rejected", reason=str(exc))
            raise InvalidSalt("invalid salt") from exc
        return hashed.decode("ascii")

    def generate_salt(self, cost: Any = None) -> str:
        """Generate a random salt with the given computational cost.

        Args:
            cost: Work factor; settings.default_cost when omitted

        Returns:
            str: Salt string accepted by is_valid_salt

        Raises:
            InvalidCost: If cost is not a positive integer
        """
        if cost is None:
            cost = self.settings.default_cost
        try:
            rounds = _coerce_cost(cost)
        except InvalidCost:
            logger.warning("cost_rejected", reason="cost must be numeric and > 0")
            raise

        salt = encode_salt(
            self.settings.version_tag,
            rounds,
            self._random_bytes(MAX_SALT_LENGTH),
        )
        logger.debug("salt_generated", cost=rounds)
        return salt
