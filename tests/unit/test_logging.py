# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Unit tests for logging.

Assumptions:
- Rejections are logged as warnings with a reason
- Secrets and digests never appear in log entries
"""
import pytest
from structlog.testing import capture_logs

from bcryptkit.errors import InvalidCost, InvalidHash, InvalidSalt, InvalidSecret


@pytest.mark.unit
def test_configure_logging(reset_logging):
    import structlog

    from bcryptkit.logging_config import configure_logging

    configure_logging(log_level="DEBUG", json_output=False)

    assert structlog.is_configured()


@pytest.mark.unit
def test_add_log_level():
    from bcryptkit.logging_config import add_log_level

    assert add_log_level(None, "warning", {})["level"] == "WARNING"


@pytest.mark.unit
def test_rejections_are_logged(fixed_engine):
    from bcryptkit.password import PasswordHash

    with capture_logs() as logs:
        with pytest.raises(InvalidSecret):
            fixed_engine.hash(None, "$2b$04$" + "." * 22)
        with pytest.raises(InvalidSalt):
            fixed_engine.hash("x", "not-a-salt")
        with pytest.raises(InvalidCost):
            fixed_engine.generate_salt(-1)
        with pytest.raises(InvalidHash):
            PasswordHash("not-a-hash")

    events = [entry["event"] for entry in logs]
    assert events == ["secret_rejected", "salt_rejected", "cost_rejected", "hash_rejected"]
    assert all(entry["log_level"] == "warning" for entry in logs)


@pytest.mark.unit
def test_secrets_are_not_logged(engine):
    from bcryptkit.password import PasswordHash

    with capture_logs() as logs:
        password_hash = PasswordHash.create("hunter2", engine=engine)
        password_hash.equals("wrong guess")

    rendered = repr(logs)
    assert "hunter2" not in rendered
    assert "wrong guess" not in rendered
    assert password_hash.digest not in rendered
    assert {"event": "salt_generated", "cost": 4, "log_level": "debug"} in logs


@pytest.mark.unit
def test_calibration_is_logged(timed_engine, fake_clock):
    from bcryptkit.calibrate import Calibrator

    with capture_logs() as logs:
        Calibrator(engine=timed_engine, clock=fake_clock).calibrate(200)

    finished = [entry for entry in logs if entry["event"] == "calibration_finished"]
    assert finished == [{
        "event": "calibration_finished",
        "cost": 10,
        "ceiling_ms": 200,
        "log_level": "info",
    }]


@pytest.mark.unit
def test_configure_logging_uses_given_settings(monkeypatch, reset_logging):
    """Test that caller-owned settings supply the log level.
    
    Assumptions:
    - The environment is not consulted when settings are passed
    """
    import structlog

    from bcryptkit.config import Settings
    from bcryptkit.logging_config import configure_logging

    monkeypatch.setenv("BCRYPTKIT_LOG_LEVEL", "NOT_A_LEVEL")

    configure_logging(settings=Settings(_env_file=None, log_level="DEBUG"))

    assert structlog.is_configured()


@pytest.mark.unit
def test_configure_logging_rejects_unknown_level(reset_logging):
    from bcryptkit.config import Settings
    from bcryptkit.logging_config import configure_logging

    with pytest.raises(AttributeError):
        configure_logging(settings=Settings(_env_file=None, log_level="NOT_A_LEVEL"))
