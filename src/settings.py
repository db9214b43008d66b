import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Runtime options loaded from PAYMENTS_* environment variables or a .env file.

    strict_disputes and freeze_locked_accounts add guards to the ledger;
    both are off by default.
    """

    model_config = SettingsConfigDict(
        env_prefix="PAYMENTS_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="WARNING")
    strict_disputes: bool = Field(default=False)
    freeze_locked_accounts: bool = Field(default=False)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level
