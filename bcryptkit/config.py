# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Configuration management for bcryptkit.

Settings are loaded from environment variables prefixed with ``BCRYPTKIT_``.
There is no module-level settings instance: callers construct ``Settings``
and hand it to ``Engine`` or ``Calibrator``.
"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_VERSION_TAGS = ("2a", "2b", "2y")


class Settings(BaseSettings):
    """Hashing settings loaded from environment variables.
    
    Assumptions:
    - Environment variables override defaults
    - default_cost balances interactive latency and brute-force resistance
    - version_tag is written into every generated salt
    """
    
    # Hashing
    default_cost: int = Field(default=10, ge=1)
    version_tag: str = "2b"
    
    # Calibration
    calibration_probe: str = "testing testing"
    calibration_max_cost: int = Field(default=40, ge=1)
    
    # Logging
    log_level: str = "INFO"
    
    model_config = SettingsConfigDict(
        env_prefix="BCRYPTKIT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )
    
    @field_validator("version_tag")
    @classmethod
    def _check_version_tag(cls, value: str) -> str:
        if value not in SUPPORTED_VERSION_TAGS:
            raise ValueError(
                f"version_tag must be one of {', '.join(SUPPORTED_VERSION_TAGS)}"
            )
        return value
