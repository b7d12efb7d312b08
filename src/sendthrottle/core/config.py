# src/sendthrottle/core/config.py
"""
Configuration schema and loading for sendthrottle.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class ThrottleSettings(BaseModel):
    """Sliding window and queue limits for a throttler.

    Example YAML:
        throttle:
          capacity: 3
          interval_seconds: 1.0
          max_pending: 1000
    """

    model_config = {"frozen": True}

    capacity: int = Field(
        default=3, gt=0, description="Maximum sends within one interval"
    )
    interval_seconds: float = Field(
        default=1.0, gt=0, description="Sliding window width in seconds"
    )
    max_pending: int | None = Field(
        default=None,
        gt=0,
        description="Cap on queued messages (unbounded when omitted)",
    )


class DemoSettings(BaseModel):
    """Order demo configuration."""

    model_config = {"frozen": True}

    clients: int = Field(default=1, gt=0, description="Number of producer clients")
    poll_timeout_seconds: float = Field(
        default=0.05,
        gt=0,
        description="Longest the processor waits on an empty inbound queue",
    )


class SendThrottleSettings(BaseModel):
    """Top-level configuration.

    All settings are validated and frozen after construction.
    """

    model_config = {"frozen": True}

    throttle: ThrottleSettings = Field(
        default_factory=ThrottleSettings,
        description="Rate limit configuration",
    )
    demo: DemoSettings = Field(
        default_factory=DemoSettings,
        description="Order demo configuration",
    )


def load_settings(config_path: Path) -> SendThrottleSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (SENDTHROTTLE_*) - highest priority
    2. Config file (settings.yaml)
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: SENDTHROTTLE_THROTTLE__CAPACITY for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated SendThrottleSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="SENDTHROTTLE",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {
        k.lower(): _lower_keys(v)
        for k, v in dynaconf_settings.as_dict().items()
        if k not in internal_keys
    }
    return SendThrottleSettings(**raw_config)


def _lower_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value


def resolve_config(settings: SendThrottleSettings) -> dict[str, Any]:
    """Convert validated settings to a JSON-ready dict (explicit + defaults)."""
    return settings.model_dump(mode="json")
