from __future__ import annotations

import logging
from typing import Callable

from src.utils.processes import descendant_pids, reap, spawned_since
from src.web.client import PlaywrightDriver
from src.web.config import SessionConfig
from src.web.deadline import Deadline
from src.web.driver import BrowserDriver
from src.web.errors import BrowserError, LaunchError

logger = logging.getLogger(__name__)

DriverFactory = Callable[[SessionConfig], BrowserDriver]


class BrowserSession:
    """One browser process and its single tab, from launch to teardown."""

    def __init__(self, config: SessionConfig, driver: BrowserDriver) -> None:
        self._config = config
        self._driver = driver
        self._processes = []
        self._closed = False
        self.browser_version = ""

    @classmethod
    def open(
        cls,
        config: SessionConfig,
        deadline: Deadline,
        driver_factory: DriverFactory | None = None,
    ) -> "BrowserSession":
        """Launch the browser and confirm the control channel answers.

        Raises LaunchError if either fails; the half-started browser is
        closed before the error propagates.
        """
        session = cls(config, (driver_factory or PlaywrightDriver)(config))
        before = descendant_pids()
        try:
            if deadline.expired:
                raise LaunchError("deadline expired before launch")
            try:
                session._driver.launch(deadline.remaining_ms())
            finally:
                session._processes = spawned_since(before)
            try:
                session.browser_version = session._driver.ping(deadline.remaining_ms())
            except BrowserError as exc:
                raise LaunchError(f"liveness check failed: {exc}") from exc
        except BrowserError as exc:
            session.close()
            raise LaunchError(f"browser did not start: {exc}") from exc
        except Exception:
            session.close()
            raise
        logger.info(
            "Browser session ready version=%s processes=%d",
            session.browser_version or "?",
            len(session._processes),
        )
        return session

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def driver(self) -> BrowserDriver:
        if self._closed:
            raise RuntimeError("Browser session is closed.")
        return self._driver

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._driver.close()
        except Exception:
            logger.exception("Failed to close browser driver")
        reap(self._processes)
        logger.info("Browser session closed")

    def __enter__(self) -> "BrowserSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
