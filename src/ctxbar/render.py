"""ANSI rendering of the two statusline rows."""

from pathlib import PurePath

from ctxbar.models import RenderState

# ANSI color codes for terminal output (256-color pastel palette)
BLUE = "\033[38;5;117m"
GREEN = "\033[38;5;114m"
YELLOW = "\033[38;5;186m"
ORANGE = "\033[38;5;216m"
RED = "\033[38;5;174m"
GRAY = "\033[38;5;242m"
DARK_GRAY = "\033[38;5;238m"
VIOLET = "\033[38;5;141m"
RESET = "\033[0m"

FILLED = "█"
EMPTY = "░"
BUFFER_FILLED = "▓"
BUFFER_RESERVED = "░"

BAR_WIDTH = 45
RIGHT_WIDTH = 18
# Share of the window Claude Code keeps free for auto-compaction.
BUFFER_RATIO = 0.225

DIR_MAX_LEN = 10
DIR_KEEP_LEN = 7
ELLIPSIS = "..."


def format_tokens(n: int) -> str:
    """Abbreviate a token count: 1234 -> "1k", 999 -> "999"."""
    return f"{n // 1000}k" if n >= 1000 else str(n)


def get_color_for_percent(percent: int) -> str:
    """Return ANSI color code for the usage readout."""
    if percent < 25:
        return GREEN
    elif percent < 50:
        return YELLOW
    elif percent < 75:
        return ORANGE
    else:
        return RED


def truncate_dir(name: str, max_len: int = DIR_MAX_LEN) -> str:
    if len(name) > max_len:
        return name[:DIR_KEEP_LEN] + ELLIPSIS
    return name


def buffer_size(width: int = BAR_WIDTH) -> int:
    """Number of trailing cells reserved for the auto-compaction buffer."""
    return int(width * BUFFER_RATIO)


def _segment(color: str, glyph: str, count: int) -> str:
    if count <= 0:
        return ""
    return f"{color}{glyph * count}{RESET}"


def build_progress_bar(percent: int, width: int = BAR_WIDTH) -> str:
    """Render the usage bar as exactly `width` glyphs plus color codes.

    The bar has a usable region followed by a reserved buffer region.
    Filled cells are counted against the full width, so usage past the
    usable region spills into the buffer. Filled usable cells are colored
    by position in quarters of the usable region (green, yellow, orange,
    red); filled buffer cells are violet and unfilled ones dark gray.

    Args:
        percent: Context usage percent, may exceed 100.
        width: Total number of cells.

    Returns:
        The bar string, each colored segment followed by a reset.
    """
    reserved = buffer_size(width)
    usable = width - reserved

    filled = max(percent, 0) * width // 100
    usable_filled = min(filled, usable)
    buffer_filled = min(max(filled - usable, 0), reserved)

    t1 = int(usable * 0.25)
    t2 = int(usable * 0.50)
    t3 = int(usable * 0.75)
    bands = [(GREEN, 0, t1), (YELLOW, t1, t2), (ORANGE, t2, t3), (RED, t3, usable)]

    parts = []
    for color, start, end in bands:
        parts.append(_segment(color, FILLED, min(usable_filled, end) - start))
    parts.append(_segment(GRAY, EMPTY, usable - usable_filled))
    parts.append(_segment(VIOLET, BUFFER_FILLED, buffer_filled))
    parts.append(_segment(DARK_GRAY, BUFFER_RESERVED, reserved - buffer_filled))
    return "".join(parts)


def format_location(model: str, cwd: str) -> str:
    """Return "<model> in /<dir>" using the last component of cwd."""
    return f"{model} in /{truncate_dir(PurePath(cwd).name)}"


def format_usage(state: RenderState) -> str:
    total = format_tokens(state.total_tokens)
    capacity = format_tokens(state.context_window_size)
    return f"{total}/{capacity} ({state.percent}%)"


def render_statusline(model: str, cwd: str, state: RenderState, width: int = BAR_WIDTH) -> list[str]:
    """Render the statusline rows.

    Returns the bar row and the info row, or only the model/path row when
    there is no usage data.
    """
    location = format_location(model, cwd)
    if not state.has_data:
        return [f"{BLUE}{location}{RESET}"]

    left_width = width - RIGHT_WIDTH
    left = location[:left_width].ljust(left_width)
    right = format_usage(state).rjust(RIGHT_WIDTH)
    color = get_color_for_percent(state.percent)

    return [
        build_progress_bar(state.percent, width),
        f"{BLUE}{left}{RESET}{color}{right}{RESET}",
    ]
