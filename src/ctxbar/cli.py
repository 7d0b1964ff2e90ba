"""CLI entry point for ctxbar."""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from ctxbar import __version__
from ctxbar.cache import CacheStore, FileCacheStore
from ctxbar.config import Config
from ctxbar.payload import parse_payload, snapshot_from_payload
from ctxbar.render import render_statusline
from ctxbar.usage import build_render_state

logger = logging.getLogger(__name__)


def setup_logging(debug: bool) -> None:
    # Claude Code shows stderr to the user, so stay quiet unless debugging.
    level = logging.DEBUG if debug else logging.ERROR
    stderr_console = Console(stderr=True)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=stderr_console, rich_tracebacks=debug)],
        force=True,
    )


def render_payload(text: str, cache: CacheStore) -> list[str]:
    """Render statusline rows for a raw stdin payload.

    Args:
        text: JSON document from Claude Code; malformed input means defaults.
        cache: Store for the last known token total per session.

    Returns:
        One or two ANSI-colored lines.
    """
    snapshot = snapshot_from_payload(parse_payload(text))
    state = build_render_state(snapshot, cache)
    logger.debug(
        "session %s: %d/%d tokens (%d%%)",
        snapshot.session_id,
        state.total_tokens,
        state.context_window_size,
        state.percent,
    )
    return render_statusline(snapshot.model, snapshot.cwd, state)


# Claude Code may pass arguments of its own; anything but help/version is ignored.
@click.command(
    context_settings={
        "help_option_names": ["-h", "--help"],
        "ignore_unknown_options": True,
        "allow_extra_args": True,
    }
)
@click.version_option(
    __version__, "--version", "-v", prog_name="ctxbar", message="%(prog)s v%(version)s"
)
@click.pass_context
def main(ctx: click.Context) -> None:
    """ctxbar - context window usage statusline for Claude Code.

    Reads the statusline JSON from stdin and prints a usage bar and a
    model/directory/usage line. The trailing dark cells of the bar are the
    space Claude Code reserves for auto-compaction.

    \b
    SETUP:
      Add to ~/.claude/settings.json:
      {
        "statusLine": {
          "type": "command",
          "command": "ctxbar"
        }
      }

    \b
    WHAT IT SHOWS:
      ███████████████████████░░░░░░░░░░░░░░░░░░░░░░
      Opus 4.5 in /lasy             106k/200k (53%)

    \b
    ENVIRONMENT:
      CTXBAR_CACHE_DIR  directory for per-session cache files
      CTXBAR_DEBUG      set to 1 to log diagnostics to stderr
    """
    config = Config.from_env()
    setup_logging(config.debug)

    try:
        raw = sys.stdin.buffer.read()
        text = raw.decode("utf-8", errors="replace")
        lines = render_payload(text, FileCacheStore(config.cache_dir))
    except Exception:
        logger.debug("failed to render statusline", exc_info=True)
        ctx.exit(1)

    for line in lines:
        click.echo(line, color=True)


if __name__ == "__main__":
    main()
