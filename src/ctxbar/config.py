"""Configuration utilities for ctxbar."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

_TRUTHY = {"1", "true", "yes", "on"}


def get_cache_dir() -> Path:
    """Get cache directory from CTXBAR_CACHE_DIR or the system temp directory."""
    cache_dir = os.environ.get("CTXBAR_CACHE_DIR")
    if cache_dir:
        return Path(cache_dir)
    return Path(tempfile.gettempdir())


def get_debug() -> bool:
    """Return True if CTXBAR_DEBUG is set to a truthy value."""
    return os.environ.get("CTXBAR_DEBUG", "").strip().lower() in _TRUTHY


@dataclass
class Config:
    cache_dir: Path
    debug: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """
        Load configuration from environment variables.

        Every setting is optional; unset or unrecognized values fall back to defaults.
        """
        return cls(cache_dir=get_cache_dir(), debug=get_debug())
