"""Optional hooks that observe the raw text sent to and received from Agda."""

from __future__ import annotations

import threading
from typing import Callable, Optional

Callback = Callable[[str], object]

_lock = threading.Lock()
_hooks: dict[str, Optional[Callback]] = {"command": None, "response": None}


def _echo(text: str) -> None:
    print(text, end="")


def _set(kind: str, callback: Optional[Callback]) -> None:
    with _lock:
        _hooks[kind] = callback


def _fire(kind: str, text: str) -> bool:
    with _lock:
        callback = _hooks[kind]
    if callback is None:
        return False
    callback(text)
    return True


def _toggle(kind: str, label: str) -> None:
    with _lock:
        enabled = _hooks[kind] is not None
        _hooks[kind] = None if enabled else _echo
    print(f"{label} debug mode is {'OFF' if enabled else 'ON'}")


def debug_command_via(callback: Callback) -> None:
    """Pass every command sent to Agda to ``callback``."""
    _set("command", callback)


def debug_response_via(callback: Callback) -> None:
    """Pass every response read from Agda to ``callback``."""
    _set("response", callback)


def dont_debug_command() -> None:
    _set("command", None)


def dont_debug_response() -> None:
    _set("response", None)


def debug_command(text: str) -> bool:
    """Report a command; returns whether a hook was installed."""
    return _fire("command", text)


def debug_response(text: str) -> bool:
    """Report a response; returns whether a hook was installed."""
    return _fire("response", text)


def toggle_debug_command() -> None:
    """Switch command echoing to stdout on or off."""
    _toggle("command", "Command")


def toggle_debug_response() -> None:
    """Switch response echoing to stdout on or off."""
    _toggle("response", "Response")