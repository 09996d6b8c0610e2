"""Unified settings for robyn-ws-params."""

from functools import cached_property
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Unified settings for robyn-ws-params."""

    DEBUG: bool = True
    ENVIRONMENT: Literal["DEV", "PROD"] = "DEV"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Parameters
    TIMEZONE: str = "UTC"
    INPUT_STREAM_ENCODING: str = "utf-8"
    DEFAULT_MEDIA_TYPE: str = "application/json"

    @field_validator("TIMEZONE")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        """Reject unknown IANA timezone keys at load time."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as ex:
            raise ValueError(f"Unknown timezone: {value}") from ex
        return value

    @cached_property
    def timezone(self) -> ZoneInfo:
        return ZoneInfo(self.TIMEZONE)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()  # type: ignore
