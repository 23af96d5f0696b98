# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Pytest configuration and shared fixtures.

Assumptions:
- Real bcrypt is used wherever a test checks hash correctness
- Real hashing runs at cost 4 to keep the suite fast
- Calibration tests use a fake clock and a fake primitive whose run time
  doubles with every cost step
"""
import pytest
import structlog

from bcryptkit.config import Settings
from bcryptkit.engine import Engine
from bcryptkit.format import RADIX64_ALPHABET, parse_salt

FIXED_ENTROPY = bytes(range(16))


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast unit tests")
    config.addinivalue_line("markers", "hypothesis: property-based tests")


class FakeClock:
    """Clock returning seconds that only moves when advanced."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture
def settings():
    """Settings with a cheap default cost."""
    return Settings(default_cost=4)


@pytest.fixture
def engine(settings):
    """Engine backed by the real bcrypt primitive."""
    return Engine(settings=settings)


@pytest.fixture
def fixed_engine(settings):
    """Engine whose randomness always returns the same 16 bytes.
    
    Assumptions:
    - Records every request for entropy in ``requests``
    """
    requests = []

    def random_bytes(n):
        requests.append(n)
        return FIXED_ENTROPY[:n]

    engine = Engine(settings=settings, random_bytes=random_bytes)
    engine.requests = requests
    return engine


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def timed_engine(settings, fake_clock):
    """Engine with a fake primitive that takes 0.1ms * 2**cost.
    
    Assumptions:
    - Output is a structurally valid hash for the given salt
    - Cost is read back from the salt, so clamping is taken into account
    """
    def primitive(secret: bytes, salt: bytes) -> bytes:
        parsed = parse_salt(salt.decode("ascii"))
        fake_clock.advance_ms(0.1 * 2 ** parsed.cost)
        return (salt.decode("ascii")[:29] + RADIX64_ALPHABET[:31]).encode("ascii")

    return Engine(settings=settings, primitive=primitive)


@pytest.fixture
def reset_logging():
    """Restore structlog defaults after a test reconfigures it."""
    yield
    structlog.reset_defaults()
