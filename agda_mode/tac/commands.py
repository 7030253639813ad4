"""The REPL commands: each edits the working file and/or talks to Agda."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

from agda_mode import goals
from agda_mode.base import ComputeMode
from agda_mode.cmd import Abort, Compute, GoalInput
from agda_mode.cmd import context as context_cmd
from agda_mode.cmd import give as give_cmd
from agda_mode.cmd import goal_type as goal_type_cmd
from agda_mode.cmd import infer as infer_cmd
from agda_mode.cmd import search_module as search_module_cmd
from agda_mode.cmd import split as split_cmd
from agda_mode.constraints import OfType
from agda_mode.debug import toggle_debug_command, toggle_debug_response
from agda_mode.resp import MakeCaseVariant
from agda_mode.session import AgdaResponseError
from agda_mode.tac.input import HELP, InputKind, parse_input

if TYPE_CHECKING:
    from agda_mode.session import ReplState
    from agda_mode.tac.file_io import Repl


def _report(error: AgdaResponseError) -> None:
    print(f"Errors:\n{error.message}", file=sys.stderr)


def _unexpected(what: str, value: Any) -> RuntimeError:
    return RuntimeError(f"unexpected {what} from Agda: {value!r}")


async def norm(repl: Repl, goal: int, code: str, mode: ComputeMode) -> None:
    """Normalise ``code`` in the context of ``goal`` and print the result."""
    await repl.agda.command(
        Compute(compute_mode=mode, input=GoalInput.no_range(goal, code))
    )
    try:
        specific = await repl.agda.next_goal_specific()
    except AgdaResponseError as error:
        _report(error)
        return
    info = specific.goal_info
    if not isinstance(info, goals.NormalForm):
        raise _unexpected("goal info", info)
    print(f"{code} --> {info.expr}")


async def give(repl: Repl, goal: int, code: str) -> None:
    """Fill ``goal`` with ``code`` and write the result to the file."""
    await repl.agda.command(give_cmd(GoalInput.no_range(goal, code)))
    try:
        action = await repl.agda.next_give_action()
    except AgdaResponseError as error:
        _report(error)
        return
    result = action.give_result.value()
    if not isinstance(result, str):
        raise ValueError("Agda asked to keep the goal's own text, which cannot be applied")
    repl.fill_goal_buffer(action.interaction_point, result)
    repl.sync_buffer()
    await repl.agda.next_goals()


async def infer(repl: Repl, goal: int, code: str) -> None:
    """Print the type of ``code`` in the context of ``goal``."""
    await repl.agda.command(infer_cmd(GoalInput.no_range(goal, code)))
    try:
        specific = await repl.agda.next_goal_specific()
    except AgdaResponseError as error:
        _report(error)
        return
    info = specific.goal_info
    if not isinstance(info, goals.InferredType):
        raise _unexpected("goal info", info)
    print(f"{code} : {info.expr}")


async def split(repl: Repl, goal: int, pattern: str) -> None:
    """Case-split ``pattern`` in ``goal``, replacing the clause in the file."""
    await repl.agda.command(split_cmd(GoalInput.no_range(goal, pattern)))
    try:
        case = await repl.agda.next_make_case()
    except AgdaResponseError as error:
        _report(error)
        return
    if case.variant is not MakeCaseVariant.FUNCTION:
        raise ValueError("splitting inside an extended lambda cannot be applied")
    # Agda's line numbers are 1-based.
    line_num = case.interaction_point.the_interval().start.line
    repl.remove_line_buffer(line_num)
    for clause in reversed(case.clauses):
        repl.insert_line_buffer(line_num, clause)
    repl.sync_buffer()


async def ctx(repl: Repl, goal: int) -> None:
    """Print the context of ``goal``."""
    await repl.agda.command(context_cmd(GoalInput.simple(goal)))
    try:
        context = await repl.agda.next_context()
    except AgdaResponseError as error:
        _report(error)
        return
    if not context.context:
        print("Context is empty, oops.")
    for entry in context.context:
        prefix = "" if entry.in_scope else "(Not in scope) "
        print(f"{prefix}{entry.original_name} : {entry.binding}")


async def ty(repl: Repl, goal: int) -> None:
    """Print the type of ``goal``."""
    await repl.agda.command(goal_type_cmd(GoalInput.simple(goal)))
    try:
        specific = await repl.agda.next_goal_specific()
    except AgdaResponseError as error:
        _report(error)
        return
    info = specific.goal_info
    if not isinstance(info, goals.CurrentGoal):
        raise _unexpected("goal info", info)
    print(info.type)


async def reload(repl: Repl) -> bool:
    """Reload the file; True if it type-checked far enough to list goals."""
    await repl.agda.reload_file()
    return await poll_goals(repl.agda)


async def poll_goals(state: ReplState) -> bool:
    """Print the goals and unsolved metas; False if Agda reported an error."""
    try:
        warnings = await state.next_all_goals_warnings()
    except AgdaResponseError as error:
        _report(error)
        return False
    print("Goals:" if warnings.visible_goals else "No goals.")
    for goal in warnings.visible_goals:
        if isinstance(goal, OfType):
            print(f"?{goal.constraint_obj} : {goal.type}")
        else:
            print(f"[WARN]: unexpected goal: {goal!r}", file=sys.stderr)
    if warnings.invisible_goals:
        print("Unsolved metas:")
    for meta in warnings.invisible_goals:
        print(meta)
    await state.next_goals()
    return True


def show_line(repl: Repl, index: int) -> None:
    """Print the 0-based line ``index`` of the file."""
    total = repl.line_count()
    if index >= total:
        print(f"There are only {total} lines in total.", file=sys.stderr)
    else:
        print(repl.line_in_buffer(index), end="")


async def pop_line(repl: Repl) -> None:
    repl.remove_last_line()
    await reload(repl)


async def push_line(repl: Repl, code: str) -> None:
    repl.append(code)
    repl.append("\n")
    await reload(repl)


async def define(repl: Repl, name: str) -> None:
    """Add a function ``name`` with a hole for its type and its body."""
    repl.append(f"{name} : ?\n")
    repl.append(f"{name} = ?\n")
    await reload(repl)


async def intro_pattern(repl: Repl, goal: int, var: str) -> None:
    """Introduce the pattern variable ``var`` on the line of ``goal``."""
    points = repl.agda.interaction_points()
    if not 0 <= goal < len(points):
        print(f"Bad interaction point: {goal}.", file=sys.stderr)
        return
    if not repl.intros_in_goal_buffer(points[goal], var):
        print("Don't know how to introduce, sorry.", file=sys.stderr)
        return
    repl.sync_buffer()
    await reload(repl)


async def finish(state: ReplState) -> None:
    """Abort whatever Agda is doing and close its input."""
    await state.command(Abort())
    await state.shutdown()


def _print_help(plain: bool) -> None:
    from agda_mode.tac.interact import help_text

    print(help_text(plain))
    for entry in HELP:
        print(entry)


async def line(repl: Repl, text: str) -> bool:
    """Run one line of user input; True when the REPL should exit."""
    parsed = parse_input(text)
    goal, arg = parsed.number, parsed.text
    match parsed.kind:
        case InputKind.DEFINE:
            await define(repl, arg)
        case InputKind.PUSH_LINE:
            await push_line(repl, arg)
        case InputKind.POP_LINE:
            await pop_line(repl)
        case InputKind.DUMP_PROOF:
            repl.dump_proof()
        case InputKind.SHOW_LINE:
            show_line(repl, goal)
        case InputKind.GIVE:
            await give(repl, goal, arg)
        case InputKind.INFER:
            await infer(repl, goal, arg)
        case InputKind.SIMPLIFY:
            await norm(repl, goal, arg, ComputeMode.DEFAULT_COMPUTE)
        case InputKind.NORMALIZE:
            await norm(repl, goal, arg, ComputeMode.USE_SHOW_INSTANCE)
        case InputKind.INTRO_PATTERN:
            await intro_pattern(repl, goal, arg)
        case InputKind.TYPE:
            await ty(repl, goal)
        case InputKind.CONTEXT:
            await ctx(repl, goal)
        case InputKind.SPLIT:
            await split(repl, goal, arg)
        case InputKind.RELOAD:
            await reload(repl)
        case InputKind.READ_TO_END:
            while True:
                await repl.agda.response()
        case InputKind.SEARCH_MODULE:
            await repl.agda.command(search_module_cmd(arg))
            error = await repl.agda.next_error()
            print("Error:", file=sys.stderr)
            print(error, file=sys.stderr)
        case InputKind.LIST_GOALS:
            repl.agda.print_goal_list()
        case InputKind.HELP:
            _print_help(repl.is_plain)
        case InputKind.TOGGLE_DEBUG_COMMAND:
            toggle_debug_command()
        case InputKind.TOGGLE_DEBUG_RESPONSE:
            toggle_debug_response()
        case InputKind.EXIT:
            await finish(repl.agda)
            return True
        case _:
            if arg is not None:
                print(f"Wait, {arg}")
            else:
                print("Sorry, I don't understand.")
    return False