from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SelectorKind(str, Enum):
    BY_CSS_QUERY = "css"
    BY_ID = "id"


@dataclass(frozen=True)
class ActionStep:
    """Base of every step a plan can contain."""


@dataclass(frozen=True)
class Navigate(ActionStep):
    url: str


@dataclass(frozen=True)
class WaitVisible(ActionStep):
    selector: str
    kind: SelectorKind = SelectorKind.BY_CSS_QUERY


@dataclass(frozen=True)
class SendText(ActionStep):
    selector: str
    text: str
    kind: SelectorKind = SelectorKind.BY_CSS_QUERY


@dataclass(frozen=True)
class SendKey(ActionStep):
    selector: str
    key: str
    kind: SelectorKind = SelectorKind.BY_CSS_QUERY


@dataclass(frozen=True)
class Delay(ActionStep):
    seconds: float


@dataclass(frozen=True)
class WaitCount(ActionStep):
    """Wait until at least `minimum` elements match `selector`."""

    selector: str
    minimum: int = 1
    poll_interval_ms: int = 250
    kind: SelectorKind = SelectorKind.BY_CSS_QUERY
