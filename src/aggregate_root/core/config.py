"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.

Process-wide defaults that cannot live in a settings file (such as the
fallback event store object) are held by :class:`Configuration`.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from .errors import ConfigError

if TYPE_CHECKING:
    from aggregate_root.infrastructure.event_store import IEventStore


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "console"  # "json" or "console"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level library settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    # Method name prefix used by the convention-based apply strategy
    handler_prefix: str = "apply_"

    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "AGGREGATE_ROOT_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional, ignored if missing).
        overrides: Dict of overrides to apply on top.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            try:
                with open(path, "rb") as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    if overrides:
        data.update(overrides)

    return Settings(**data)


# ---------------------------------------------------------------------------
# Process-wide defaults
# ---------------------------------------------------------------------------

class Configuration:
    """Global fallbacks consulted after the aggregate class defaults.

    ``default_event_store`` is used by ``load()``/``store()`` when neither a
    per-call store nor a class-level default is available.
    """

    def __init__(self) -> None:
        self.default_event_store: IEventStore | None = None

    def configure(self, *, default_event_store: IEventStore | None = None) -> None:
        self.default_event_store = default_event_store

    def reset(self) -> None:
        """Drop all global defaults.  Mostly useful in tests."""
        self.default_event_store = None


configuration = Configuration()
