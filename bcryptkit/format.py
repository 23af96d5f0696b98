# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Structural parsing and encoding of bcrypt strings.

A salt string looks like ``$2b$12$R9h/cIPz0gi.URNNX3kh2O`` and a hash string
appends the 31-character digest to it::

    $2b$12$R9h/cIPz0gi.URNNX3kh2OPST9/PgBkqquzi.Ss7KIUgO2t0jWMUW

Here the version is ``2b``, the cost ``12``, the salt the first 29 characters
(``$2b$12$R9h/cIPz0gi.URNNX3kh2O``) and the digest the remaining 31.

Two grammars are accepted:

- Salts are admitted with "at least" bounds (version tag of 1+ characters,
  cost of 2+ digits, payload of 22+ radix-64 characters) because callers may
  build them by hand or receive them from other bcrypt implementations.
- Hashes must be in the exact canonical form (2-character version, 2-digit
  cost, 53-character payload). This is the trust boundary for stored
  credentials.

Assumptions:
- No cryptography happens here
- Parsers raise InvalidSalt/InvalidHash with a reason; predicates wrap them
- split_hash is only ever called on input that passed is_valid_hash
"""
import base64
from dataclasses import dataclass
from typing import Any, Tuple

from bcryptkit.errors import InvalidHash, InvalidSalt

# bcrypt's radix-64 alphabet. Same bit layout as standard base64, different
# character order and no padding.
RADIX64_ALPHABET = "./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
_STD_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_TO_RADIX64 = str.maketrans(_STD_ALPHABET, RADIX64_ALPHABET)
_FROM_RADIX64 = str.maketrans(RADIX64_ALPHABET, _STD_ALPHABET)

_RADIX64_CHARS = frozenset(RADIX64_ALPHABET)
_VERSION_CHARS = frozenset("0123456789abcdefghijklmnopqrstuvwxyz")
_DIGITS = frozenset("0123456789")

SALT_PAYLOAD_LENGTH = 22
DIGEST_LENGTH = 31
HASH_PAYLOAD_LENGTH = SALT_PAYLOAD_LENGTH + DIGEST_LENGTH
# "$2b$12$" plus the 22-character salt payload
SALT_PREFIX_LENGTH = 7 + SALT_PAYLOAD_LENGTH
ENTROPY_LENGTH = 16

# Cost range the primitive accepts
MIN_PRIMITIVE_COST = 4
MAX_PRIMITIVE_COST = 31


@dataclass(frozen=True)
class ParsedSalt:
    """Fields of a structurally valid salt string."""
    version: str
    cost: int
    payload: str


@dataclass(frozen=True)
class ParsedHash:
    """Fields of a structurally valid canonical hash string."""
    version: str
    cost: int
    salt: str
    digest: str


def _fields(value: Any, error: type) -> Tuple[str, str, str]:
    """Split ``$version$cost$payload`` into its three fields."""
    if not isinstance(value, str):
        raise error(f"expected str, got {type(value).__name__}")
    if not value.startswith("$"):
        raise error("missing leading '$'")
    parts = value[1:].split("$")
    if len(parts) != 3:
        raise error(f"expected 3 '$'-delimited fields, got {len(parts)}")
    return parts[0], parts[1], parts[2]


def _check_field(
    field: str,
    name: str,
    alphabet: frozenset,
    error: type,
    min_length: int,
    exact: bool = False,
) -> None:
    if exact and len(field) != min_length:
        raise error(f"{name} must be exactly {min_length} characters")
    if len(field) < min_length:
        raise error(f"{name} must be at least {min_length} characters")
    if not set(field) <= alphabet:
        raise error(f"{name} contains invalid characters")


def parse_salt(value: Any) -> ParsedSalt:
    """Parse a salt string against the salt grammar.

    Args:
        value: Candidate salt string

    Returns:
        ParsedSalt: version, cost and radix-64 payload

    Raises:
        InvalidSalt: If the string is not a well-formed salt

    Assumptions:
    - Version tag is 1+ lowercase alphanumerics (covers "2", "2a", "2b", "2y")
    - Cost is 2+ digits; its range is not checked here
    - Payload is 22+ radix-64 characters
    """
    version, cost, payload = _fields(value, InvalidSalt)
    _check_field(version, "version", _VERSION_CHARS, InvalidSalt, 1)
    _check_field(cost, "cost", _DIGITS, InvalidSalt, 2)
    _check_field(payload, "payload", _RADIX64_CHARS, InvalidSalt, SALT_PAYLOAD_LENGTH)
    return ParsedSalt(version=version, cost=int(cost), payload=payload)


def parse_hash(value: Any) -> ParsedHash:
    """Parse a hash string against the canonical hash grammar.

    Args:
        value: Candidate hash string, typically read back from storage

    Returns:
        ParsedHash: version, cost, salt and digest

    Raises:
        InvalidHash: If the string is not in canonical form

    Assumptions:
    - Cost is exactly 2 digits and at least 1; bcrypt may still refuse it
    """
    version, cost, payload = _fields(value, InvalidHash)
    _check_field(version, "version", _VERSION_CHARS, InvalidHash, 2, exact=True)
    _check_field(cost, "cost", _DIGITS, InvalidHash, 2, exact=True)
    if int(cost) < 1:
        raise InvalidHash("cost must be >= 1")
    _check_field(
        payload, "payload", _RADIX64_CHARS, InvalidHash, HASH_PAYLOAD_LENGTH, exact=True
    )
    return ParsedHash(*split_hash(value))


def is_valid_salt(value: Any) -> bool:
    """Return True if ``value`` is a well-formed bcrypt salt."""
    try:
        parse_salt(value)
    except InvalidSalt:
        return False
    return True


def is_valid_hash(value: Any) -> bool:
    """Return True if ``value`` is a canonical bcrypt hash."""
    try:
        parse_hash(value)
    except InvalidHash:
        return False
    return True


def split_hash(value: str) -> Tuple[str, int, str, str]:
    """Split a validated hash into version, cost, salt and digest.

    Performs no bounds checking; callers validate first.
    """
    _, version, cost, _ = value.split("$")
    return version, int(cost), value[:SALT_PREFIX_LENGTH], value[-DIGEST_LENGTH:]


def encode_radix64(data: bytes) -> str:
    """Encode bytes with bcrypt's radix-64 alphabet, without padding."""
    encoded = base64.b64encode(data).decode("ascii").rstrip("=")
    return encoded.translate(_TO_RADIX64)


def decode_radix64(text: str) -> bytes:
    """Decode bcrypt radix-64 text back to bytes.

    Raises:
        ValueError: If the text has characters outside the alphabet or an
            impossible length
    """
    if not set(text) <= _RADIX64_CHARS or len(text) % 4 == 1:
        raise ValueError("invalid radix-64 text")
    padded = text.translate(_FROM_RADIX64) + "=" * (-len(text) % 4)
    return base64.b64decode(padded)


def encode_salt(version: str, cost: int, entropy: bytes) -> str:
    """Encode raw entropy into a bcrypt salt string.

    Args:
        version: Version tag written into the salt (e.g. "2b")
        cost: Work factor; clamped to the range the primitive supports
        entropy: Exactly 16 random bytes

    Returns:
        str: Salt string such as ``$2b$10$<22 radix-64 chars>``

    Raises:
        ValueError: If entropy is not 16 bytes

    Assumptions:
    - Cost clamping follows OpenBSD's bcrypt_gensalt (min 4, max 31)
    - 16 bytes encode to exactly 22 radix-64 characters
    """
    if len(entropy) != ENTROPY_LENGTH:
        raise ValueError(f"salt entropy must be {ENTROPY_LENGTH} bytes, got {len(entropy)}")
    rounds = min(max(cost, MIN_PRIMITIVE_COST), MAX_PRIMITIVE_COST)
    return f"${version}${rounds:02d}${encode_radix64(entropy)}"
