"""Core data models for ctxbar."""

from dataclasses import dataclass

DEFAULT_MODEL_NAME = "Claude"
DEFAULT_CONTEXT_WINDOW_SIZE = 200_000
DEFAULT_SESSION_ID = "default"


@dataclass
class RawUsage:
    """Token breakdown reported for the most recent API call."""

    input_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0
    output_tokens: int = 0

    @property
    def context_tokens(self) -> int:
        """Tokens that count against the context window.

        Output tokens are not part of the sum.
        """
        return (
            self.input_tokens
            + self.cache_creation_input_tokens
            + self.cache_read_input_tokens
        )


@dataclass
class SessionSnapshot:
    """Usage-relevant fields of one statusline payload."""

    model: str = DEFAULT_MODEL_NAME
    context_window_size: int = DEFAULT_CONTEXT_WINDOW_SIZE
    cwd: str = "."
    session_id: str = DEFAULT_SESSION_ID
    used_percentage: float | None = None
    usage: RawUsage | None = None


@dataclass
class ResolvedUsage:
    """Tokens and percent after resolution.

    `percent` is None until computed from `total_tokens`.
    """

    total_tokens: int
    percent: int | None = None


@dataclass
class RenderState:
    """Final figures for one invocation."""

    total_tokens: int
    percent: int
    context_window_size: int

    @property
    def has_data(self) -> bool:
        return not (self.total_tokens == 0 and self.percent == 0)
