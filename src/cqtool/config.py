"""YAML config loader — reads cqtool.yml into ServiceConfig."""

import os
from pathlib import Path

import yaml

from cqtool.schemas.config import ServiceConfig

API_KEY_ENV = "GROQ_API_KEY"


def load_config(path: str | Path | None = None) -> ServiceConfig:
    """Load and validate a service config file.

    ``None`` returns the built-in defaults. Raises ``FileNotFoundError`` if
    the path doesn't exist and ``pydantic.ValidationError`` if the YAML
    content is invalid.
    """
    if path is None:
        return ServiceConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text())
    if raw is None:
        # An empty (or all-comments) file means "defaults".
        return ServiceConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a YAML mapping, got {type(raw).__name__}")

    # A commented-out list loads as None; treat it as "use the default".
    for key in ("cors_origins", "kinds"):
        if key in raw and raw[key] is None:
            del raw[key]

    return ServiceConfig(**raw)


def get_api_key() -> str | None:
    """Return the Groq API key from the environment, if set."""
    return os.environ.get(API_KEY_ENV) or None
