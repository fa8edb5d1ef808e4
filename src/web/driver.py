from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from src.web.actions import SelectorKind


class BrowserDriver(ABC):
    """Control channel to one browser process (real browser or test double).

    Every blocking call takes the remaining time budget in milliseconds and
    raises `BrowserTimeoutError` when the awaited condition does not hold in
    time, or `BrowserCommandError` when the browser rejects the command.
    """

    @abstractmethod
    def launch(self, timeout_ms: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def ping(self, timeout_ms: int) -> str:
        raise NotImplementedError

    @abstractmethod
    def navigate(self, url: str, timeout_ms: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def query_visible(self, selector: str, kind: SelectorKind, timeout_ms: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def wait_for_count(
        self,
        selector: str,
        kind: SelectorKind,
        minimum: int,
        poll_interval_ms: int,
        timeout_ms: int,
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def dispatch_text(
        self, selector: str, kind: SelectorKind, text: str, timeout_ms: int
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def dispatch_key(
        self, selector: str, kind: SelectorKind, key: str, timeout_ms: int
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def pause(self, seconds: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def evaluate(self, script: str, arg: Any, timeout_ms: int) -> Any:
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        raise NotImplementedError
