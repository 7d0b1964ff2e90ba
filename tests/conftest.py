"""Shared pytest fixtures."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from ctxbar.cache import FileCacheStore, MemoryCacheStore


@pytest.fixture
def memory_cache() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def file_cache(tmp_path: Path) -> FileCacheStore:
    return FileCacheStore(tmp_path)


@pytest.fixture
def cache_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI's cache at an isolated directory."""
    monkeypatch.setenv("CTXBAR_CACHE_DIR", str(tmp_path))
    monkeypatch.delenv("CTXBAR_DEBUG", raising=False)
    return tmp_path


@pytest.fixture
def make_payload() -> Callable[..., str]:
    """Build a statusline JSON payload like the one Claude Code sends."""

    def _make(
        current_usage: dict[str, Any] | None = None,
        used_percentage: float | None = None,
        context_window_size: int | None = 200_000,
        model: str | None = "Opus 4.5",
        cwd: str | None = "/home/user/lasy",
        session_id: str | None = "abc-123",
    ) -> str:
        doc: dict[str, Any] = {}
        if model is not None:
            doc["model"] = {"id": "claude-opus-4-5", "display_name": model}
        if cwd is not None:
            doc["cwd"] = cwd
        if session_id is not None:
            doc["session_id"] = session_id
        context_window: dict[str, Any] = {}
        if context_window_size is not None:
            context_window["context_window_size"] = context_window_size
        if used_percentage is not None:
            context_window["used_percentage"] = used_percentage
        if current_usage is not None:
            context_window["current_usage"] = current_usage
        doc["context_window"] = context_window
        return json.dumps(doc)

    return _make
