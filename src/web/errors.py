from __future__ import annotations

from enum import Enum
from typing import Any


class BrowserError(Exception):
    """Raised by a browser driver when a control-channel command fails."""


class BrowserTimeoutError(BrowserError):
    """The browser did not reach the awaited condition within the given budget."""


class BrowserCommandError(BrowserError):
    """The browser rejected or failed to carry out a command."""


class SearchBotError(Exception):
    stage = "run"


class ConfigError(SearchBotError, ValueError):
    """Invalid query, deadline or setting; raised before any browser starts."""

    stage = "config"


class LaunchError(SearchBotError):
    stage = "launch"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class StepErrorKind(str, Enum):
    ELEMENT_NOT_FOUND = "element_not_found"
    NAVIGATION_FAILED = "navigation_failed"
    INPUT_DISPATCH_FAILED = "input_dispatch_failed"
    DEADLINE_EXCEEDED = "deadline_exceeded"


class StepError(SearchBotError):
    stage = "step"

    def __init__(
        self, index: int, kind: StepErrorKind, step: Any = None, detail: str = ""
    ) -> None:
        message = f"step {index} ({step!r}) failed: {kind.value}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.index = index
        self.kind = kind
        self.step = step


class EvalError(SearchBotError):
    """The in-page script threw, or the control channel refused to run it."""

    stage = "extraction"


class DecodeError(SearchBotError):
    """The value returned by the in-page script does not have the record shape."""

    stage = "extraction"
