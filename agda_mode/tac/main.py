"""Entry point of the interactive prover."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Sequence

from agda_mode.debug import (
    debug_command_via,
    debug_response_via,
    dont_debug_command,
    dont_debug_response,
)
from agda_mode.session import ReplState, VersionError
from agda_mode.tac.args import CliOptions, parse_args
from agda_mode.tac.file_io import ExistingFileError, Repl, find_default, init_module
from agda_mode.tac.interact import ion

FAIL_WRITE = "Failed to create Agda module file"


def _echo(text: str) -> None:
    print(text, end="")


async def run(options: CliOptions) -> int:
    """Start Agda on the chosen file and run the session; returns an exit code."""
    if options.debug_command:
        debug_command_via(_echo)
    else:
        dont_debug_command()
    if options.debug_response:
        debug_response_via(_echo)
    else:
        dont_debug_response()
    agda_program = options.agda if options.agda is not None else Path("agda")
    file = options.file if options.file is not None else find_default()
    module = init_module(file, options.allow_existing_file)
    try:
        path = module.path.resolve(strict=True)
        state = await ReplState.start(agda_program, path)
        if options.validate:
            try:
                await state.validate_version()
            finally:
                await state.shutdown()
            print("It works!")
            return 0
        repl = Repl(state, module.file, module.path, module.text)
        repl.is_plain = options.plain
        await ion(repl)
        return 0
    finally:
        module.file.close()


def main(argv: Sequence[str] | None = None) -> int:
    options = parse_args(argv)
    try:
        return asyncio.run(run(options))
    except ExistingFileError as exc:
        print(exc, file=sys.stderr)
        return 1
    except VersionError as exc:
        print(exc, file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"{FAIL_WRITE}: {exc}" if not str(exc) else str(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())