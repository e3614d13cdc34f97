"""Environment-driven settings for the audit CLI.

Values come from ``NEXUS_*`` environment variables or a local ``.env`` file.
``REPORT_FORMAT`` is also honored for the report format.
"""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS = list(get_args(LogLevel))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NEXUS_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    live: bool = False
    bridge: str = "live_bridge:create_mcp_caller"
    report_format: Literal["json", "text", "markdown"] = Field(
        default="text",
        validation_alias=AliasChoices("NEXUS_REPORT_FORMAT", "REPORT_FORMAT"),
    )
    log_level: LogLevel = "WARNING"
    log_format: Literal["json", "console"] = "console"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


def get_settings() -> Settings:
    return Settings()
