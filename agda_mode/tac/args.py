"""Command-line options of the interactive prover."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

_DESCRIPTION = "Agda - Tactical And Comprehensible"
_EPILOG = "For extra help please open an issue on the project's issue tracker."


@dataclass(frozen=True)
class CliOptions:
    """The parsed command line."""

    file: Path | None = None
    agda: Path | None = None
    debug_command: bool = False
    validate: bool = False
    allow_existing_file: bool = False
    plain: bool = False
    debug_response: bool = False


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agda-tac",
        description=_DESCRIPTION,
        epilog=_EPILOG,
        allow_abbrev=False,
    )
    parser.add_argument(
        "file",
        metavar="FILE",
        nargs="?",
        type=Path,
        help="The input file to type-check (Notice: file should be UTF-8 encoded)",
    )
    parser.add_argument(
        "--agda", metavar="path", type=Path, help="Path to your agda executable"
    )
    parser.add_argument(
        "--debug-command",
        "--dc",
        action="store_true",
        help="Print all commands that `agda-tac` sends to `agda`",
    )
    parser.add_argument(
        "--validate", "--check", action="store_true", help="Check Agda version."
    )
    parser.add_argument(
        "--allow-existing-file",
        "--allow-exist",
        action="store_true",
        help="Allow working with existing files.",
    )
    parser.add_argument(
        "-p",
        "--plain",
        action="store_true",
        help="Disable completion/hints/colored output in interaction",
    )
    parser.add_argument(
        "--debug-response",
        "--dr",
        action="store_true",
        help="Print all responses that `agda` sends to `agda-tac`",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> CliOptions:
    """Parse ``argv`` (the process arguments when None) into options."""
    namespace = _parser().parse_args(argv)
    return CliOptions(
        file=namespace.file,
        agda=namespace.agda,
        debug_command=namespace.debug_command,
        validate=namespace.validate,
        allow_existing_file=namespace.allow_existing_file,
        plain=namespace.plain,
        debug_response=namespace.debug_response,
    )