#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Startup configuration for the holiday notifier.

All environment lookups happen here, once, in load_config().
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

SOURCE_ABSTRACT = "abstract"
SOURCE_NAGER = "nager"
SOURCES = (SOURCE_ABSTRACT, SOURCE_NAGER)

DEFAULT_RATE_LIMIT_SECONDS = 1.0
DEFAULT_HOLIDAY_TYPES = ("Public", "Optional")


class ConfigError(ValueError):
    """Raised when required configuration is missing or invalid."""


@dataclass(frozen=True)
class Config:
    source: str
    slack_webhook_url: Optional[str]
    abstract_api_key: Optional[str] = None
    rate_limit_seconds: float = DEFAULT_RATE_LIMIT_SECONDS
    holiday_types: Tuple[str, ...] = DEFAULT_HOLIDAY_TYPES


def require_from_env(environ: Mapping[str, str], key: str) -> str:
    value = environ.get(key, "").strip()
    if not value:
        raise ConfigError(f"missing required environment variable: {key}")
    return value


def parse_rate_limit(raw: Optional[str]) -> float:
    """
    Parse ABSTRACT_RATE_LIMIT_SECONDS.

    Args:
        raw: Raw environment value, or None when unset

    Returns:
        Seconds to sleep after each request (default 1.0)
    """
    if raw is None or not raw.strip():
        return DEFAULT_RATE_LIMIT_SECONDS
    try:
        seconds = float(raw)
    except ValueError:
        raise ConfigError(f"ABSTRACT_RATE_LIMIT_SECONDS must be a number, got {raw!r}")
    if seconds < 0:
        raise ConfigError(f"ABSTRACT_RATE_LIMIT_SECONDS must be >= 0, got {raw!r}")
    return seconds


def parse_holiday_types(raw: Optional[str]) -> Tuple[str, ...]:
    """Parse the comma-separated NAGER_HOLIDAY_TYPES allow-list."""
    if raw is None:
        return DEFAULT_HOLIDAY_TYPES
    types = tuple(t.strip() for t in raw.split(",") if t.strip())
    if not types:
        raise ConfigError("NAGER_HOLIDAY_TYPES must list at least one holiday type")
    return types


def load_config(
    source: str,
    environ: Mapping[str, str] = os.environ,
    require_webhook: bool = True,
) -> Config:
    """
    Load and validate configuration for the given holiday source.

    Args:
        source: "abstract" or "nager"
        environ: Environment mapping (defaults to os.environ)
        require_webhook: False when nothing will be posted (dry run)

    Returns:
        Immutable Config

    Raises:
        ConfigError: If a required variable is missing or a value is invalid
    """
    if source not in SOURCES:
        raise ConfigError(f"unknown holiday source: {source}")

    if require_webhook:
        webhook_url = require_from_env(environ, "SLACK_WEBHOOK_URL")
    else:
        webhook_url = environ.get("SLACK_WEBHOOK_URL", "").strip() or None

    if source == SOURCE_ABSTRACT:
        return Config(
            source=source,
            slack_webhook_url=webhook_url,
            abstract_api_key=require_from_env(environ, "ABSTRACT_API_KEY"),
            rate_limit_seconds=parse_rate_limit(environ.get("ABSTRACT_RATE_LIMIT_SECONDS")),
        )

    return Config(
        source=source,
        slack_webhook_url=webhook_url,
        holiday_types=parse_holiday_types(environ.get("NAGER_HOLIDAY_TYPES")),
    )
