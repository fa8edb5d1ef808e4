from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from src.web.actions import SelectorKind
from src.web.config import SessionConfig
from src.web.driver import BrowserDriver
from src.web.errors import BrowserCommandError, BrowserTimeoutError

logger = logging.getLogger(__name__)

_COUNT_AT_LEAST = (
    "([selector, minimum]) => document.querySelectorAll(selector).length >= minimum"
)


@contextmanager
def _translate_errors(action: str) -> Iterator[None]:
    try:
        yield
    except PlaywrightTimeoutError as exc:
        raise BrowserTimeoutError(f"{action}: {exc}") from exc
    except PlaywrightError as exc:
        raise BrowserCommandError(f"{action}: {exc}") from exc


def _budget(timeout_ms: int) -> int:
    # Playwright treats 0 as "no timeout".
    if timeout_ms <= 0:
        raise BrowserTimeoutError("no time left")
    return timeout_ms


def css_query(selector: str, kind: SelectorKind) -> str:
    if kind is SelectorKind.BY_ID:
        element_id = selector.lstrip("#").replace('"', '\\"')
        return f'[id="{element_id}"]'
    return selector


class PlaywrightDriver(BrowserDriver):
    """Chromium driven through Playwright's sync API.

    Owns its Playwright instance, browser, context and page: one driver is
    one browser process.
    """

    def __init__(self, config: SessionConfig) -> None:
        self._config = config
        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None

    def launch(self, timeout_ms: int) -> None:
        with _translate_errors("launch"):
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(
                executable_path=self._config.executable_path,
                headless=self._config.headless,
                args=self._config.launch_args(),
                timeout=_budget(timeout_ms),
            )
            self._context = self._browser.new_context(
                user_agent=self._config.user_agent,
                ignore_https_errors=self._config.ignore_certificate_errors,
            )
            self._page = self._context.new_page()
        logger.debug(
            "Chromium launched executable=%s headless=%s args=%s",
            self._config.executable_path or "<bundled>",
            self._config.headless,
            self._config.launch_args(),
        )

    def ping(self, timeout_ms: int) -> str:
        _budget(timeout_ms)
        if self._browser is None or not self._browser.is_connected():
            raise BrowserCommandError("browser is not connected")
        with _translate_errors("ping"):
            cdp = self._browser.new_browser_cdp_session()
            try:
                version = cdp.send("Browser.getVersion")
            finally:
                cdp.detach()
        return str(version.get("product", ""))

    def navigate(self, url: str, timeout_ms: int) -> None:
        with _translate_errors(f"navigate {url}"):
            response = self.page.goto(url, wait_until="load", timeout=_budget(timeout_ms))
        if response is not None and response.status >= 400:
            raise BrowserCommandError(f"navigate {url}: HTTP {response.status}")

    def query_visible(self, selector: str, kind: SelectorKind, timeout_ms: int) -> None:
        with _translate_errors(f"wait visible {selector}"):
            self._visible(selector, kind).wait_for(
                state="visible", timeout=_budget(timeout_ms)
            )

    def wait_for_count(
        self,
        selector: str,
        kind: SelectorKind,
        minimum: int,
        poll_interval_ms: int,
        timeout_ms: int,
    ) -> None:
        with _translate_errors(f"wait count {selector}>={minimum}"):
            self.page.wait_for_function(
                _COUNT_AT_LEAST,
                arg=[css_query(selector, kind), minimum],
                polling=poll_interval_ms,
                timeout=_budget(timeout_ms),
            )

    def dispatch_text(
        self, selector: str, kind: SelectorKind, text: str, timeout_ms: int
    ) -> None:
        started = time.monotonic()
        element = self._visible(selector, kind)
        with _translate_errors(f"type into {selector}"):
            element.focus(timeout=_budget(timeout_ms))
            spent_ms = int((time.monotonic() - started) * 1000)
            element.press_sequentially(text, timeout=_budget(timeout_ms - spent_ms))

    def dispatch_key(
        self, selector: str, kind: SelectorKind, key: str, timeout_ms: int
    ) -> None:
        with _translate_errors(f"press {key} at {selector}"):
            self._visible(selector, kind).press(key, timeout=_budget(timeout_ms))

    def pause(self, seconds: float) -> None:
        with _translate_errors("pause"):
            self.page.wait_for_timeout(seconds * 1000)

    def evaluate(self, script: str, arg: Any, timeout_ms: int) -> Any:
        # page.evaluate takes no timeout; the extraction script is synchronous.
        _budget(timeout_ms)
        with _translate_errors("evaluate"):
            return self.page.evaluate(script, arg)

    def close(self) -> None:
        if self._context is not None:
            try:
                self._context.close()
            except Exception:
                logger.exception("Failed to close browser context")
        if self._browser is not None:
            try:
                self._browser.close()
            except Exception:
                logger.exception("Failed to close browser")
        if self._playwright is not None:
            try:
                self._playwright.stop()
            except Exception:
                logger.exception("Failed to stop Playwright")
        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None

    def _visible(self, selector: str, kind: SelectorKind):
        # First match that is visible, not first match in the DOM.
        return self._locator(selector, kind).locator("visible=true").first

    def _locator(self, selector: str, kind: SelectorKind):
        if kind is SelectorKind.BY_ID:
            return self.page.locator(f"id={selector.lstrip('#')}")
        return self.page.locator(f"css={selector}")

    @property
    def page(self):
        if self._page is None:
            raise RuntimeError("Browser not launched. Call launch() first.")
        return self._page
