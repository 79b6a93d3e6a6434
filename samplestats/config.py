"""Service configuration using Pydantic models."""
from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

LOGGING_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class LoggingSettings(BaseModel):
    level: str = "INFO"

    @field_validator("level")
    def check_level(cls, v):
        # Accept any case, store the canonical name
        level = v.upper()
        if level not in LOGGING_LEVELS:
            raise ValueError(f"unknown log level {v!r}")
        return level


class LimitSettings(BaseModel):
    max_sample_size: int = Field(default=100_000, ge=1)


class ServiceSettings(BaseModel):
    title: str = "Sample Statistics Service"
    version: str = "1.0.0"


class Settings(BaseModel):
    logging: LoggingSettings = LoggingSettings()
    limits: LimitSettings = LimitSettings()
    service: ServiceSettings = ServiceSettings()

    @classmethod
    def load(cls) -> "Settings":
        """Load from SAMPLESTATS_* environment variables."""
        return cls(
            logging=LoggingSettings(
                level=os.getenv("SAMPLESTATS_LOG_LEVEL", "INFO"),
            ),
            limits=LimitSettings(
                max_sample_size=int(os.getenv("SAMPLESTATS_MAX_SAMPLE_SIZE", "100000")),
            ),
            service=ServiceSettings(
                title=os.getenv("SAMPLESTATS_TITLE", "Sample Statistics Service"),
            ),
        )
