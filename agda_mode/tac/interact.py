"""The read-eval-print loop around the REPL commands."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

from agda_mode.tac.commands import line, poll_goals
from agda_mode.tac.editor import CliEditor
from agda_mode.tac.file_io import history_file

if TYPE_CHECKING:
    from agda_mode.tac.file_io import Repl

LAMBDA_LT = "\u03bb> "
RICH_HELP = (
    "You're in the normal REPL, where there's completion, history command, hints and "
    "(in the future) colored output.\n"
    "The rich mode is not compatible with Windows PowerShell ISE and Mintty"
    "(Cygwin, MinGW and (possibly, depends on your installation) git-bash).\n"
    "If you're having problems with the rich mode, you may want to switch to "
    "the plain mode (restart agda-tac with `--plain` flag)."
)
PLAIN_HELP = "You're in the plain REPL (with `--plain` flag)."


def help_text(plain: bool) -> str:
    """The introduction shown by ``help`` for the current mode."""
    return PLAIN_HELP if plain else RICH_HELP


def _readline() -> Any:
    try:
        import readline
    except ImportError:
        return None
    return readline


async def _plain_loop(repl: Repl) -> None:
    while True:
        sys.stdout.write("> ")
        sys.stdout.flush()
        raw = sys.stdin.readline()
        if not raw:
            break
        if await line(repl, raw.strip()):
            break


async def _rich_loop(repl: Repl) -> None:
    history = history_file()
    readline = _readline()
    if readline is not None:
        CliEditor().install()
        try:
            readline.read_history_file(str(history))
        except OSError:
            print(f"no previous history in {history}.")
    while True:
        try:
            text = input(LAMBDA_LT)
        except KeyboardInterrupt:
            continue
        except EOFError:
            print("Interrupted")
            break
        except OSError as err:
            print(f"Error: {err!r}", file=sys.stderr)
            break
        if await line(repl, text.strip()):
            break
    if readline is not None:
        try:
            readline.write_history_file(str(history))
        except OSError as err:
            print(f"Failed to save REPL history: {err!r}", file=sys.stderr)


async def ion(repl: Repl) -> None:
    """Show the goals, then read and run commands until the user exits."""
    await poll_goals(repl.agda)
    if repl.is_plain:
        await _plain_loop(repl)
    else:
        await _rich_loop(repl)