"""Settings for the `user-events` command, read from a TOML file."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ValidationError

from .exceptions import ConfigError

DEFAULT_CONFIG_FILE = "user-events.toml"


class Settings(BaseModel):
    source: Path = Path("users.csv")
    log_file: Path = Path("log.txt")
    admin_email: str = "1@example.com"
    log_level: Literal["debug", "info", "warning"] = "info"

    def with_overrides(self, **overrides: Any) -> Settings:
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return Settings.model_validate({**self.model_dump(), **values})


def load_settings(path: str | Path = DEFAULT_CONFIG_FILE) -> Settings:
    """Load settings from `path`. A missing file yields the defaults.

    Keys may be written with dashes (`log-file`) or underscores.
    """
    config_file = Path(path)
    if not config_file.is_file():
        return Settings()

    try:
        import tomllib
    except ImportError:
        import tomli as tomllib

    try:
        with open(config_file, "rb") as f:
            raw = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {config_file}: {e}") from e

    try:
        return Settings.model_validate({k.replace("-", "_"): v for k, v in raw.items()})
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_file}: {e}") from e
