from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from src.web.actions import SelectorKind
from src.web.config import SessionConfig, resolve_executable_path
from src.web.deadline import Deadline
from src.web.driver import BrowserDriver
from src.web.errors import BrowserTimeoutError, LaunchError
from src.web.factory import BrowserSessionFactory
from src.web.session import BrowserSession

FIXTURES = Path(__file__).parent / "fixtures"


class FakeDriver(BrowserDriver):
    """Records every command; fails the one named in `fail_on`."""

    def __init__(
        self,
        config: SessionConfig | None = None,
        *,
        fail_on: str | None = None,
        error: type[Exception] = BrowserTimeoutError,
        evaluate_result: Any = None,
    ) -> None:
        self.config = config
        self.fail_on = fail_on
        self.error = error
        self.evaluate_result = [] if evaluate_result is None else evaluate_result
        self.calls: list[tuple] = []
        self.close_count = 0

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        if name == self.fail_on:
            raise self.error(f"{name} failed")

    @property
    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def launch(self, timeout_ms: int) -> None:
        self._record("launch")

    def ping(self, timeout_ms: int) -> str:
        self._record("ping")
        return "FakeChrome/1.0"

    def navigate(self, url: str, timeout_ms: int) -> None:
        self._record("navigate", url)

    def query_visible(self, selector: str, kind: SelectorKind, timeout_ms: int) -> None:
        self._record("query_visible", selector, kind)

    def wait_for_count(
        self,
        selector: str,
        kind: SelectorKind,
        minimum: int,
        poll_interval_ms: int,
        timeout_ms: int,
    ) -> None:
        self._record("wait_for_count", selector, minimum)

    def dispatch_text(
        self, selector: str, kind: SelectorKind, text: str, timeout_ms: int
    ) -> None:
        self._record("dispatch_text", selector, text)

    def dispatch_key(
        self, selector: str, kind: SelectorKind, key: str, timeout_ms: int
    ) -> None:
        self._record("dispatch_key", selector, key)

    def pause(self, seconds: float) -> None:
        self._record("pause", seconds)

    def evaluate(self, script: str, arg: Any, timeout_ms: int) -> Any:
        self._record("evaluate", arg)
        return self.evaluate_result

    def close(self) -> None:
        self.close_count += 1
        self.calls.append(("close",))


@pytest.fixture
def fake_factory():
    """Build a session factory around a given FakeDriver."""

    def _make(driver: FakeDriver) -> BrowserSessionFactory:
        return BrowserSessionFactory(SessionConfig(), driver_factory=lambda _: driver)

    return _make


@pytest.fixture
def fake_session():
    def _make(driver: FakeDriver) -> BrowserSession:
        return BrowserSession(SessionConfig(), driver)

    return _make


@pytest.fixture(scope="session")
def chromium_config() -> SessionConfig:
    """Config for a real headless Chromium; skips the test when none can start."""
    config = SessionConfig(executable_path=resolve_executable_path())
    try:
        session = BrowserSession.open(config, Deadline.after(60))
    except LaunchError as exc:
        pytest.skip(f"Chromium is not available: {exc}")
    session.close()
    return config


@pytest.fixture
def fixture_url():
    def _url(name: str) -> str:
        return (FIXTURES / name).as_uri()

    return _url
