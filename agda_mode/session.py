"""Run Agda in interaction mode and talk to it over its standard streams."""

from __future__ import annotations

import asyncio
import os
from typing import Any, Union

from agda_mode import display
from agda_mode.cmd import IOTCM, Cmd, ShowVersion, load_simple
from agda_mode.debug import debug_command, debug_response
from agda_mode.goals import GiveAction, GoalSpecific
from agda_mode.pos import InteractionPoint
from agda_mode.resp import (
    DisplayInfoResponse,
    GiveActionResponse,
    HighlightingInfo,
    InteractionPoints,
    MakeCase,
    Resp,
    loads,
)

INTERACTION_COMMAND = "--interaction-json"
START_FAIL = "Failed to start Agda"
_PROMPT = "JSON>"

PathLike = Union[str, "os.PathLike[str]"]

_watchers: set[asyncio.Task] = set()


class AgdaResponseError(Exception):
    """Agda answered a command with an error."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class VersionError(ValueError):
    """The running Agda is too old for JSON interaction."""


def deserialize_agda(buf: str) -> Resp:
    """Parse one line of Agda's output, ignoring its prompt."""
    text = buf
    while text.startswith(_PROMPT):
        text = text[len(_PROMPT):]
    return loads(text.strip())


def check_version(version: str) -> None:
    if version.startswith(("2.4", "2.5", "2.6.0")):
        raise VersionError(f"Expected Agda 2.6.1 or higher, got: {version}")


def load_file(path: PathLike) -> IOTCM:
    """The command that loads ``path``."""
    return IOTCM.simple(path, load_simple(path))


async def send_command(stdin: Any, command: IOTCM) -> None:
    """Write a command to Agda's input."""
    text = command.to_string()
    debug_command(f"[CMD]: {text}")
    stdin.write(text.encode("utf-8"))
    await stdin.drain()


async def init_agda_process(agda_program: PathLike) -> asyncio.subprocess.Process:
    """Spawn Agda in interaction mode with piped stdin and stdout."""
    return await asyncio.create_subprocess_exec(
        os.fspath(agda_program),
        INTERACTION_COMMAND,
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
    )


async def _report_exit(process: asyncio.subprocess.Process) -> None:
    code = await process.wait()
    print(f"Agda exits with status {code}.")


async def start_agda(agda_program: PathLike) -> tuple[Any, Any]:
    """Start Agda and return its (stdin, stdout) streams."""
    try:
        process = await init_agda_process(agda_program)
    except OSError as exc:
        raise OSError(f"{START_FAIL}: {exc}") from exc
    task = asyncio.get_running_loop().create_task(_report_exit(process))
    _watchers.add(task)
    task.add_done_callback(_watchers.discard)
    if process.stdin is None or process.stdout is None:
        raise OSError(f"{START_FAIL}: standard streams are not piped")
    return process.stdin, process.stdout


class AgdaReader:
    """Reads Agda's responses line by line."""

    def __init__(self, stream: Any) -> None:
        self._stream = stream

    async def response(self) -> Resp:
        """Take Agda's response from the next line."""
        raw = await self._stream.readline()
        line = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
        debug_response(f"[RES]: {line}\n")
        if not line:
            raise EOFError("Agda closed its output")
        return deserialize_agda(line)


class ReplState:
    """A running Agda session bound to one file."""

    def __init__(self, stdin: Any, agda: AgdaReader, file: PathLike, iotcm: IOTCM) -> None:
        self.stdin = stdin
        self.agda = agda
        self.file = file
        self._iotcm = iotcm
        self._interaction_points: tuple[InteractionPoint, ...] = ()

    @classmethod
    async def start(cls, agda_program: PathLike, file: PathLike) -> ReplState:
        stdin, stdout = await start_agda(agda_program)
        return await cls.from_io(stdin, stdout, file)

    @classmethod
    async def from_io(cls, stdin: Any, stdout: Any, file: PathLike) -> ReplState:
        """Wrap existing streams and ask Agda to load ``file``."""
        iotcm = load_file(file)
        await send_command(stdin, iotcm)
        return cls(stdin, AgdaReader(stdout), file, iotcm)

    async def response(self) -> Resp:
        """Await the next Agda response."""
        return await self.agda.response()

    def print_goal_list(self) -> None:
        points = self.interaction_points()
        if not points:
            print("No goals, you're all set.")
        for point in points:
            print(f"?{point.id} at line {point.the_interval().start.line}")

    async def reload_file(self) -> None:
        await self.command(load_simple(self.file))

    async def command(self, cmd: Cmd) -> None:
        self._iotcm.command = cmd
        await send_command(self.stdin, self._iotcm)

    async def command_raw(self, raw_command: str) -> None:
        self.stdin.write(raw_command.encode("utf-8"))
        await self.stdin.drain()

    async def shutdown(self) -> None:
        self.stdin.close()
        await self.stdin.wait_closed()

    def interaction_points(self) -> tuple[InteractionPoint, ...]:
        """The goals from the latest :meth:`next_goals`."""
        return self._interaction_points

    async def next_display_info(self) -> display.DisplayInfo:
        """Skip responses until the next display info."""
        while True:
            resp = await self.response()
            if isinstance(resp, DisplayInfoResponse) and resp.info is not None:
                return resp.info

    async def next_goals(self) -> None:
        """Skip responses until the next goal list and remember it."""
        while True:
            resp = await self.response()
            if isinstance(resp, InteractionPoints):
                self._interaction_points = resp.interaction_points
                return

    async def next_error(self) -> display.AgdaError:
        """Skip responses until an error."""
        while True:
            info = await self.next_display_info()
            if isinstance(info, display.Error):
                return info.error

    async def _next_response_of(self, kind: type) -> Any:
        while True:
            resp = await self.response()
            if isinstance(resp, kind):
                return resp
            if isinstance(resp, DisplayInfoResponse) and isinstance(resp.info, display.Error):
                raise AgdaResponseError(str(resp.info.error))

    async def _next_display_of(self, kind: type) -> Any:
        while True:
            info = await self.next_display_info()
            if isinstance(info, display.Error):
                raise AgdaResponseError(str(info.error))
            if isinstance(info, kind):
                return info

    async def next_give_action(self) -> GiveAction:
        """Skip until the next give action."""
        resp = await self._next_response_of(GiveActionResponse)
        return resp.action

    async def next_make_case(self) -> MakeCase:
        """Skip until the next case split."""
        return await self._next_response_of(MakeCase)

    async def next_highlight(self) -> HighlightingInfo:
        """Skip until the next highlighting info."""
        return await self._next_response_of(HighlightingInfo)

    async def next_all_goals_warnings(self) -> display.AllGoalsWarnings:
        """Skip until the next goal and warning list."""
        return await self._next_display_of(display.AllGoalsWarnings)

    async def next_goal_specific(self) -> GoalSpecific:
        """Skip until the next goal-specific information."""
        return await self._next_display_of(GoalSpecific)

    async def next_module_contents(self) -> display.ModuleContents:
        return await self._next_display_of(display.ModuleContents)

    async def next_normal_form(self) -> display.NormalForm:
        return await self._next_display_of(display.NormalForm)

    async def next_context(self) -> display.Context:
        return await self._next_display_of(display.Context)

    async def next_inferred_type(self) -> display.InferredType:
        return await self._next_display_of(display.InferredType)

    async def validate_version(self) -> None:
        """Ask Agda for its version and check that it is recent enough."""
        await self.command(ShowVersion())
        while True:
            info = await self.next_display_info()
            if isinstance(info, display.Version):
                check_version(info.version)
                return