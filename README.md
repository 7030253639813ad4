# agda-mode

Talk to Agda's interaction mode (`agda --interaction-json`) from Python, and
work on proofs step by step from a small command-line REPL.

## Installation

```
pip install .
```

You also need an `agda` executable (version 2.6.1 or newer) on your `PATH`,
or one you point to with `--agda`.

## The `agda-tac` REPL

```
agda-tac Proof.agda
```

`Proof.agda` is created and starts with a `module Proof where` line; the file
is kept in memory and rewritten on disk after every edit. With no file given,
`Nameless.agda` under `~/.agda-tac` is used (a leftover one is deleted first).
Existing files are refused unless you pass `--allow-existing-file`.

Options:

- `--agda PATH`: the Agda executable to run
- `--plain` / `-p`: a plain `> ` prompt read from standard input, with no
  completion or history
- `--validate` (alias `--check`): check that the Agda version is supported,
  print `It works!` and exit
- `--debug-command` (`--dc`), `--debug-response` (`--dr`): echo the traffic
  to and from Agda

Without `--plain`, the prompt is `λ> `; where Python's `readline` module is
available, command words complete with Tab and history is kept in
`~/.agda-tac/.repl_history`.

Inside the REPL, type `help` for the command list. For example:

```
λ> define plus
λ> list-goals
λ> type 0
λ> give 0 Nat → Nat → Nat
λ> dump-proof
λ> exit
```

`debug-command` and `debug-response` typed at the prompt switch echoing on
and off while running.

## Library use

```python
import asyncio
from pathlib import Path

from agda_mode.session import ReplState
from agda_mode.cmd import give, GoalInput


async def demo() -> None:
    state = await ReplState.start(Path("agda"), Path("Proof.agda").resolve())
    goals = await state.next_all_goals_warnings()
    print(len(goals.visible_goals), "goals")
    await state.next_goals()
    await state.command(give(GoalInput.no_range(0, "zero")))
    action = await state.next_give_action()
    print(action.give_result.value())
    await state.shutdown()


asyncio.run(demo())
```

- `agda_mode.cmd`: command classes (`Load`, `Give`, `MakeCase`, `Compute`, …);
  `str()` of a command, or `IOTCM.to_string()`, gives the line Agda reads.
- `agda_mode.resp.loads`: turns one line of Agda's JSON output into a typed
  response (`DisplayInfoResponse`, `InteractionPoints`, `MakeCase`, …).
- `agda_mode.session.ReplState`: a running session. Its `next_give_action`,
  `next_make_case`, `next_highlight`, `next_all_goals_warnings`,
  `next_goal_specific`, `next_context` and similar methods skip output until
  the wanted response arrives, and raise `AgdaResponseError` if Agda reports
  an error first. `validate_version` raises `VersionError` for Agda older
  than 2.6.1.
- `agda_mode.debug`: install callbacks that see every command sent and every
  response read.

## What it does not do

- The REPL has no hints and no coloured output.
- A case split inside an extended lambda, and a give that only asks to keep
  the goal's text in parentheses, are reported as errors rather than applied
  to the file.