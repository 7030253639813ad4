"""Command completion for the interactive line editor."""

from __future__ import annotations

from agda_mode.tac.input import values


class CliEditor:
    """Completes command words at the start of the line."""

    def complete(self, line: str, pos: int) -> tuple[int, list[str]]:
        """Return where the completed word starts and its candidates."""
        start = next((index for index, ch in enumerate(line) if not ch.isspace()), 0)
        prefix = line[start:pos] if pos > start else line[start:]
        return start, [word for word in values() if word.startswith(prefix)]

    def readline_completer(self, text: str, state: int) -> str | None:
        """A completer in the form the ``readline`` module expects."""
        _, candidates = self.complete(text, len(text))
        return candidates[state] if state < len(candidates) else None

    def install(self) -> bool:
        """Hook completion into ``readline``; False if it is unavailable."""
        try:
            import readline
        except ImportError:
            return False
        readline.set_completer(self.readline_completer)
        readline.set_completer_delims(" \t\n")
        readline.parse_and_bind("tab: complete")
        return True