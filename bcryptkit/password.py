# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Stored password hashes and verification.

Example:

    password_hash = PasswordHash.create("my grand secret")
    user.password_hash = str(password_hash)

    # later, after reading it back
    stored = PasswordHash(user.password_hash)
    stored.equals("my grand secret")   # True
    stored.equals("a paltry guess")    # False

Assumptions:
- Instances only exist for strings that passed the canonical hash grammar
- Instances are immutable
- Verification reuses the stored salt (and therefore version and cost)
"""
import hmac
from typing import Any, Optional

from bcryptkit.engine import Engine, Secret
from bcryptkit.errors import InvalidHash, InvalidSalt
from bcryptkit.format import is_valid_hash, split_hash
from bcryptkit.logging_config import get_logger

logger = get_logger(__name__)


class PasswordHash:
    """A parsed bcrypt hash.

    Attributes:
        version: bcrypt version tag, e.g. "2b"
        cost: Work factor the hash was computed with
        salt: First 29 characters (version, cost and salt payload)
        digest: Trailing 31 characters
    """

    __slots__ = ("_raw", "_version", "_cost", "_salt", "_digest", "_engine")

    def __init__(self, raw_hash: str, engine: Optional[Engine] = None):
        """Initialize from a stored hash string.

        Raises:
            InvalidHash: If raw_hash is not a canonical bcrypt hash
        """
        if not is_valid_hash(raw_hash):
            logger.warning("hash_rejected", reason="malformed hash")
            raise InvalidHash("invalid hash")
        version, cost, salt, digest = split_hash(raw_hash)
        object.__setattr__(self, "_raw", raw_hash)
        object.__setattr__(self, "_version", version)
        object.__setattr__(self, "_cost", cost)
        object.__setattr__(self, "_salt", salt)
        object.__setattr__(self, "_digest", digest)
        object.__setattr__(self, "_engine", engine)

    @classmethod
    def create(
        cls,
        secret: Secret,
        cost: Any = None,
        engine: Optional[Engine] = None,
    ) -> "PasswordHash":
        """Hash a secret with a freshly generated salt.

        Args:
            secret: Plain text secret
            cost: Work factor; the engine's default cost when omitted
            engine: Engine to use; a default Engine when omitted

        Returns:
            PasswordHash: The new hash

        Raises:
            InvalidCost: If cost is not a positive integer
            InvalidSecret: If secret is None
        """
        engine = engine or Engine()
        return cls(engine.hash(secret, engine.generate_salt(cost)), engine=engine)

    @property
    def version(self) -> str:
        return self._version

    @property
    def cost(self) -> int:
        return self._cost

    @property
    def salt(self) -> str:
        return self._salt

    @property
    def digest(self) -> str:
        return self._digest

    def equals(self, candidate: Secret) -> bool:
        """Return True if ``candidate`` is the secret this hash was made from.

        Returns False when bcrypt refuses the stored salt (e.g. cost 03 or an
        unsupported version tag), since no secret can match such a hash.

        Raises:
            InvalidSecret: If candidate is None
        """
        engine = self._engine or Engine()
        try:
            recomputed = engine.hash(candidate, self._salt)
        except InvalidSalt:
            return False
        return hmac.compare_digest(recomputed.encode("ascii"), self._raw.encode("ascii"))

    is_password = equals

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __str__(self) -> str:
        return self._raw

    def __repr__(self) -> str:
        return f"PasswordHash(version={self._version!r}, cost={self._cost})"
