"""
Configuration for the Recency Cache entry points
Copyright 2025 Jurden Bruce
"""

import logging
import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .factorisers import DEFAULT_DELAY_MS

DEFAULT_CACHE_CAPACITY = 10000


class CacheServiceConfig(BaseModel):
    cache_capacity: int = Field(default=DEFAULT_CACHE_CAPACITY, ge=1, description="Maximum cached entries")
    factorise_delay_ms: float = Field(default=DEFAULT_DELAY_MS, ge=0, description="Simulated backend latency")
    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"Unknown log level: {value}")
        return value


def get_config(environ: Optional[Mapping[str, str]] = None,
               overrides: Optional[Dict[str, Any]] = None) -> CacheServiceConfig:
    """Get configuration from environment variables, then apply any non-None overrides"""
    env = os.environ if environ is None else environ

    values: Dict[str, Any] = {
        "cache_capacity": env.get("RC_CACHE_CAPACITY", DEFAULT_CACHE_CAPACITY),
        "factorise_delay_ms": env.get("RC_FACTORISE_DELAY_MS", DEFAULT_DELAY_MS),
        "log_level": env.get("RC_LOG_LEVEL", "INFO"),
    }
    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})

    return CacheServiceConfig(**values)
