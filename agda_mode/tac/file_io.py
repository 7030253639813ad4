"""The Agda file being written, kept both in memory and on disk."""

from __future__ import annotations

import os
import stat
import sys
from bisect import bisect_right
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, NamedTuple

from agda_mode.pos import InteractionPoint, Interval

if TYPE_CHECKING:
    from agda_mode.session import ReplState

FAIL_CREATE_DEFAULT = "Failed to create default working file"


class ExistingFileError(FileExistsError):
    """The target file exists and working with existing files is not allowed."""


class InitModule(NamedTuple):
    file: IO[str]
    path: Path
    text: str


def init_module(file: str | os.PathLike[str], allow_existing: bool) -> InitModule:
    """Open (or create) the ``.agda`` file to work on."""
    path = Path(file).with_suffix(".agda")
    if path.exists():
        if not allow_existing:
            raise ExistingFileError("I don't want to work with existing files, sorry.")
        handle = open(path, "r+", encoding="utf-8", newline="")
        os.chmod(path, path.stat().st_mode | stat.S_IWUSR)
        text = handle.read()
        return InitModule(handle, path.resolve(strict=True), text)
    name = path.stem
    if not name:
        raise ValueError(f"File does not have a name: {path}")
    first_line = f"module {name} where\n"
    handle = open(path, "w+", encoding="utf-8", newline="")
    handle.write(first_line)
    handle.flush()
    return InitModule(handle, path.resolve(strict=True), first_line)


def config_dir() -> Path:
    """The per-user directory for state, created if missing."""
    directory = Path.home() / ".agda-tac"
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def history_file() -> Path:
    return config_dir() / ".repl_history"


def find_default() -> Path:
    """The default working file, removed if left over from before."""
    print("No input file specified, using default.")
    path = config_dir() / "Nameless.agda"
    print(f"Default to {path}")
    if path.exists():
        path.unlink()
    return path


def agda_to_rope_range(interval: Interval) -> range:
    """Agda's 1-based character offsets as 0-based buffer indices."""
    return interval.range_shift_left(1)


def _line_starts(text: str) -> list[int]:
    return [0, *(index + 1 for index, ch in enumerate(text) if ch == "\n")]


class Repl:
    """An Agda session together with the file it edits."""

    def __init__(self, agda: ReplState | Any, file: IO[str], path: Path, file_buf: str) -> None:
        self.agda = agda
        self.file = file
        self.path = path
        self._buf = file_buf
        self.is_plain = False

    @property
    def text(self) -> str:
        """The whole buffer."""
        return self._buf

    def _line_to_char(self, line_num: int) -> int:
        starts = _line_starts(self._buf)
        if line_num < 0 or line_num > len(starts):
            raise IndexError(f"line {line_num} is out of bounds")
        return len(self._buf) if line_num == len(starts) else starts[line_num]

    def _insert(self, index: int, text: str) -> None:
        if not 0 <= index <= len(self._buf):
            raise IndexError(f"index {index} is out of bounds")
        self._buf = self._buf[:index] + text + self._buf[index:]

    def _remove(self, start: int, stop: int) -> None:
        if not 0 <= start <= stop <= len(self._buf):
            raise IndexError(f"range {start}..{stop} is out of bounds")
        self._buf = self._buf[:start] + self._buf[stop:]

    def append_buffer(self, text: str) -> None:
        self._buf += text

    def remove_last_line_buffer(self) -> None:
        count = self.line_count()
        if count < 2:
            print("Error: line buffer is empty", file=sys.stderr)
            return
        start = self._line_to_char(count - 2)
        self._remove(start, len(self._buf))

    def remove_line_buffer(self, line_num: int) -> None:
        """Remove the 1-based line ``line_num``."""
        self._remove(self._line_to_char(line_num - 1), self._line_to_char(line_num))

    def line_of_offset(self, offset: int) -> int:
        if not 0 <= offset <= len(self._buf):
            raise IndexError(f"offset {offset} is out of bounds")
        return bisect_right(_line_starts(self._buf), offset) - 1

    def fill_goal_buffer(self, point: InteractionPoint, text: str) -> None:
        """Replace the goal's text with ``text``."""
        span = agda_to_rope_range(point.the_interval())
        self._remove(span.start, span.stop)
        self._insert(span.start, text)

    def intros_in_goal_buffer(self, point: InteractionPoint, text: str) -> bool:
        """Insert ``text`` before the ``=`` on the goal's line; False if there is none."""
        line_num = point.the_interval().start.line - 1
        line_start = self._line_to_char(line_num)
        index = self.line_in_buffer(line_num).find("=")
        if index < 0:
            return False
        self._insert(line_start + index, " ")
        self._insert(line_start + index, text)
        return True

    def insert_line_buffer(self, line_num: int, line: str) -> None:
        """Insert ``line`` as a new line after the 1-based line ``line_num - 1``."""
        index = self._line_to_char(line_num - 1) - 1
        self._insert(index, line)
        self._insert(index, "\n")

    def dump_proof(self) -> None:
        sys.stdout.write(self._buf)
        sys.stdout.flush()

    def line_in_buffer(self, line_num: int) -> str:
        """The 0-based line ``line_num``, with its line break."""
        starts = _line_starts(self._buf)
        if not 0 <= line_num < len(starts):
            raise IndexError(f"line {line_num} is out of bounds")
        end = starts[line_num + 1] if line_num + 1 < len(starts) else len(self._buf)
        return self._buf[starts[line_num]:end]

    def line_count(self) -> int:
        return len(_line_starts(self._buf))

    def append(self, text: str) -> None:
        """Append to both the buffer and the file."""
        self.append_buffer(text)
        self.file.write(text)
        self.file.flush()

    def remove_last_line(self) -> None:
        self.remove_last_line_buffer()
        self.sync_buffer()

    def sync_buffer(self) -> None:
        """Overwrite the file with the buffer."""
        self.file.flush()
        os.fsync(self.file.fileno())
        self.file.seek(0)
        self.file.truncate()
        self.file.write(self._buf)
        self.file.flush()