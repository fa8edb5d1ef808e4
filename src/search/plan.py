from __future__ import annotations

from src.web.actions import (
    ActionStep,
    Delay,
    Navigate,
    SelectorKind,
    SendKey,
    SendText,
    WaitCount,
    WaitVisible,
)
from src.web.config import SearchConfig
from src.web.errors import ConfigError
from src.web.selectors import SearchSelectors

SUBMIT_KEY = "Enter"


def build_search_plan(
    query: str, selectors: SearchSelectors, config: SearchConfig
) -> tuple[ActionStep, ...]:
    if not query.strip():
        raise ConfigError("Search query must not be empty.")
    steps: list[ActionStep] = [
        Navigate(config.base_url),
        WaitVisible(selectors.search_input, SelectorKind.BY_CSS_QUERY),
        SendText(selectors.search_input, query, SelectorKind.BY_CSS_QUERY),
        SendKey(selectors.search_input, SUBMIT_KEY, SelectorKind.BY_CSS_QUERY),
        WaitVisible(selectors.results_container, SelectorKind.BY_ID),
    ]
    if config.min_results > 0:
        steps.append(
            WaitCount(
                selectors.result_heading_query(),
                minimum=config.min_results,
                poll_interval_ms=config.poll_interval_ms,
            )
        )
    if config.settle_delay_seconds > 0:
        steps.append(Delay(config.settle_delay_seconds))
    return tuple(steps)
