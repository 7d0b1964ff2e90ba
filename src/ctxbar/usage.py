"""Resolve context-window usage from a session snapshot."""

import logging
import math

from ctxbar.cache import CacheStore
from ctxbar.models import RenderState, ResolvedUsage, SessionSnapshot

logger = logging.getLogger(__name__)


def resolve_usage(snapshot: SessionSnapshot, cache: CacheStore) -> ResolvedUsage:
    """Pick the usage figure to display, updating or reading the cache.

    Sources are tried in order:
    - reported `used_percentage`: percent is its floor, the displayed total
      is reconstructed from it and cached (skipped if that overflows);
    - raw `current_usage` breakdown: input plus both cache token counts
      (output tokens excluded), cached, percent left to compute;
    - the cached total for this session, or 0.

    Args:
        snapshot: Parsed payload.
        cache: Store for the last known total, keyed by session id.

    Returns:
        ResolvedUsage; `percent` is set only for the reported-percentage source.
    """
    capacity = snapshot.context_window_size

    reported_tokens = None
    if snapshot.used_percentage is not None:
        reported_tokens = snapshot.used_percentage * capacity / 100
        if not math.isfinite(reported_tokens):
            logger.debug("ignoring out-of-range percentage %s", snapshot.used_percentage)
            reported_tokens = None

    if reported_tokens is not None:
        percent = math.floor(snapshot.used_percentage)
        total = math.floor(reported_tokens)
        if total < 0:
            total = 0
        logger.debug("using reported percentage %s%%", snapshot.used_percentage)
        cache.set(snapshot.session_id, total)
        return ResolvedUsage(total_tokens=total, percent=max(percent, 0))

    if snapshot.usage is not None:
        total = snapshot.usage.context_tokens
        logger.debug("using current_usage breakdown: %d tokens", total)
        cache.set(snapshot.session_id, total)
        return ResolvedUsage(total_tokens=total)

    cached = cache.get(snapshot.session_id)
    logger.debug("no usage in payload, cached total: %s", cached)
    return ResolvedUsage(total_tokens=cached if cached is not None else 0)


def compute_percent(total_tokens: int, context_window_size: int) -> int:
    """Return floor(total * 100 / capacity). Not capped at 100."""
    return total_tokens * 100 // context_window_size


def build_render_state(snapshot: SessionSnapshot, cache: CacheStore) -> RenderState:
    """Resolve usage and fill in the percent if the source did not report one."""
    resolved = resolve_usage(snapshot, cache)
    percent = resolved.percent
    if percent is None:
        percent = compute_percent(resolved.total_tokens, snapshot.context_window_size)
    return RenderState(
        total_tokens=resolved.total_tokens,
        percent=percent,
        context_window_size=snapshot.context_window_size,
    )
