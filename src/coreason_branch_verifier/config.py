# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_branch_verifier

"""
Configuration management for the Branch Verifier.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration using environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="VERIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Tunable Settings
    api_base_url: str = Field(default="https://api.github.com", description="Base URL of the GitHub REST API.")
    user_agent: str = Field(default="branch-verifier", description="User-Agent header sent with every request.")
    request_timeout: Optional[float] = Field(
        default=None, description="Request timeout in seconds. None waits indefinitely."
    )
    max_retries: int = Field(default=3, ge=1, description="Attempts per request on transport failures.")
    artifacts_dir: Path = Field(default=Path("."), description="Directory holding readme.md and .gitignore.")
    log_level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level for the stderr sink."
    )

    # Optional Secrets
    # Read without prefix so the usual CI variable works unchanged.
    GITHUB_TOKEN: Optional[SecretStr] = Field(default=None, validation_alias="GITHUB_TOKEN")

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("request_timeout must be positive when set.")
        return v

    @field_validator("GITHUB_TOKEN")
    @classmethod
    def empty_token_is_absent(cls, v: Optional[SecretStr]) -> Optional[SecretStr]:
        """
        An empty token means unauthenticated access, same as an unset one.
        """
        if v is None or not v.get_secret_value():
            return None
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Returns a cached instance of the Settings class.
    """
    return Settings()
