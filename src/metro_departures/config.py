from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, field_validator

from .departures import DEFAULT_TIMEOUT, MAX_DEPARTURES, NEXTRIP_URL
from .formatting import is_valid_format


class Settings(BaseModel):
    nextrip_url: str = NEXTRIP_URL
    request_timeout_seconds: float = DEFAULT_TIMEOUT
    host: str = "0.0.0.0"
    port: int = 8080
    default_format: int = 0
    default_amount: int = 1
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper()

    @field_validator("default_format")
    @classmethod
    def _known_format(cls, v: int) -> int:
        if not is_valid_format(v):
            raise ValueError(f"unknown format {v}")
        return v

    @field_validator("default_amount")
    @classmethod
    def _amount_range(cls, v: int) -> int:
        if v < 1 or v > MAX_DEPARTURES:
            raise ValueError(f"default_amount must be between 1 and {MAX_DEPARTURES}")
        return v


def _load_yaml(path: Optional[Path]) -> dict:
    if not path:
        return {}
    if not Path(path).exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with Path(path).open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError("Config root must be a mapping")
    return raw


_ENV_FIELDS = {
    "MD_NEXTRIP_URL": "nextrip_url",
    "MD_REQUEST_TIMEOUT_SECONDS": "request_timeout_seconds",
    "MD_HOST": "host",
    "MD_PORT": "port",
    "MD_DEFAULT_FORMAT": "default_format",
    "MD_DEFAULT_AMOUNT": "default_amount",
    "MD_LOG_LEVEL": "log_level",
}


def _env_override(config: dict) -> dict:
    # Environment variables take precedence; prefix MD_
    out = dict(config)
    for env_name, field in _ENV_FIELDS.items():
        value = os.environ.get(env_name)
        if value:
            out[field] = value
    return out


def load_settings(config_path: Optional[Path] = None) -> Settings:
    base = _load_yaml(config_path)
    merged = _env_override(base)
    return Settings(**merged)
