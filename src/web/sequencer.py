from __future__ import annotations

import logging
from typing import Callable, Sequence

from src.web.actions import (
    ActionStep,
    Delay,
    Navigate,
    SendKey,
    SendText,
    WaitCount,
    WaitVisible,
)
from src.web.deadline import Deadline
from src.web.driver import BrowserDriver
from src.web.errors import BrowserError, StepError, StepErrorKind
from src.web.session import BrowserSession

logger = logging.getLogger(__name__)

StepCallback = Callable[[int, ActionStep], None]

_FAILURE_KINDS = {
    Navigate: StepErrorKind.NAVIGATION_FAILED,
    WaitVisible: StepErrorKind.ELEMENT_NOT_FOUND,
    WaitCount: StepErrorKind.ELEMENT_NOT_FOUND,
    SendText: StepErrorKind.INPUT_DISPATCH_FAILED,
    SendKey: StepErrorKind.INPUT_DISPATCH_FAILED,
    # A pause only fails when the page itself is gone.
    Delay: StepErrorKind.NAVIGATION_FAILED,
}


class PageActionSequencer:
    """Run a plan step by step; the first failing step aborts the rest."""

    def __init__(self, on_step: StepCallback | None = None) -> None:
        self._on_step = on_step

    def run(
        self, session: BrowserSession, plan: Sequence[ActionStep], deadline: Deadline
    ) -> None:
        driver = session.driver
        for index, step in enumerate(plan):
            if deadline.expired:
                raise StepError(index, StepErrorKind.DEADLINE_EXCEEDED, step)
            logger.debug("Step %d: %r", index, step)
            try:
                self._execute(driver, step, deadline)
            except BrowserError as exc:
                kind = _FAILURE_KINDS.get(type(step), StepErrorKind.NAVIGATION_FAILED)
                raise StepError(index, kind, step, str(exc)) from exc
            if isinstance(step, Delay) and deadline.expired:
                raise StepError(index, StepErrorKind.DEADLINE_EXCEEDED, step)
            if self._on_step is not None:
                self._on_step(index, step)
        logger.info("Plan completed steps=%d", len(plan))

    def _execute(self, driver: BrowserDriver, step: ActionStep, deadline: Deadline) -> None:
        timeout_ms = deadline.remaining_ms()
        if isinstance(step, Navigate):
            driver.navigate(step.url, timeout_ms)
        elif isinstance(step, WaitVisible):
            driver.query_visible(step.selector, step.kind, timeout_ms)
        elif isinstance(step, WaitCount):
            driver.wait_for_count(
                step.selector,
                step.kind,
                step.minimum,
                step.poll_interval_ms,
                timeout_ms,
            )
        elif isinstance(step, SendText):
            driver.dispatch_text(step.selector, step.kind, step.text, timeout_ms)
        elif isinstance(step, SendKey):
            driver.dispatch_key(step.selector, step.kind, step.key, timeout_ms)
        elif isinstance(step, Delay):
            # Never sleep past the deadline; the caller reports the overrun.
            driver.pause(min(step.seconds, deadline.remaining()))
        else:
            raise TypeError(f"Unsupported step: {step!r}")
