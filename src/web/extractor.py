from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from src.web.deadline import Deadline
from src.web.errors import BrowserError, DecodeError, EvalError
from src.web.session import BrowserSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractedRecord:
    url: str
    text: str


@dataclass(frozen=True)
class ExtractionScript:
    """A page function plus the version of the markup it was written against."""

    name: str
    version: str
    source: str


# Read-only walk of the results container. Headings outside an anchor (or whose
# anchor lies outside the container) are skipped. querySelectorAll returns
# matches in document order.
RESULT_LINKS_SCRIPT = ExtractionScript(
    name="result-links",
    version="2",
    source="""
({ container, heading }) => {
    const root = document.querySelector(container);
    if (!root) {
        return [];
    }
    const links = [];
    root.querySelectorAll(heading).forEach((node) => {
        const link = node.closest('a');
        if (link && root.contains(link)) {
            links.push({ href: link.href, text: node.innerText });
        }
    });
    return links;
}
""",
)

_RECORD_FIELDS = frozenset(("href", "text"))


def decode_records(value: Any) -> list[ExtractedRecord]:
    """Turn the raw in-page value into records, rejecting anything off-shape."""
    if not isinstance(value, list):
        raise DecodeError(f"expected a list of records, got {type(value).__name__}")
    records = []
    for position, item in enumerate(value):
        if not isinstance(item, dict):
            raise DecodeError(
                f"record {position}: expected an object, got {type(item).__name__}"
            )
        keys = set(item)
        if keys != _RECORD_FIELDS:
            raise DecodeError(
                f"record {position}: expected fields {sorted(_RECORD_FIELDS)}, got {sorted(keys)}"
            )
        href, text = item["href"], item["text"]
        if not isinstance(href, str) or not isinstance(text, str):
            raise DecodeError(f"record {position}: href and text must be strings")
        records.append(ExtractedRecord(url=href, text=text))
    return records


class InPageExtractor:
    def __init__(self, script: ExtractionScript = RESULT_LINKS_SCRIPT) -> None:
        self._script = script

    @property
    def script(self) -> ExtractionScript:
        return self._script

    def extract(
        self,
        session: BrowserSession,
        container_selector: str,
        heading_selector: str,
        deadline: Deadline,
    ) -> list[ExtractedRecord]:
        if deadline.expired:
            raise EvalError("deadline expired before extraction")
        arg = {"container": container_selector, "heading": heading_selector}
        try:
            raw = session.driver.evaluate(self._script.source, arg, deadline.remaining_ms())
        except BrowserError as exc:
            raise EvalError(
                f"script {self._script.name} v{self._script.version} failed: {exc}"
            ) from exc
        records = decode_records(raw)
        logger.info(
            "Extracted %d records with %s v%s",
            len(records),
            self._script.name,
            self._script.version,
        )
        return records
