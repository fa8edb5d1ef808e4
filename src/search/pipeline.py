from __future__ import annotations

import logging
from enum import Enum

from src.search.plan import build_search_plan
from src.search.reporter import ResultReporter
from src.web.actions import ActionStep, Navigate, SendKey
from src.web.config import SearchConfig
from src.web.deadline import Deadline
from src.web.extractor import ExtractedRecord, InPageExtractor
from src.web.factory import SessionFactory
from src.web.selectors import SearchSelectors, site_selectors
from src.web.sequencer import PageActionSequencer

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    CREATED = "created"
    LAUNCHED = "launched"
    NAVIGATED = "navigated"
    INPUT_SUBMITTED = "input_submitted"
    RESULTS_VISIBLE = "results_visible"
    EXTRACTED = "extracted"
    REPORTED = "reported"
    FAILED = "failed"


class SearchPipeline:
    """Launch, search, extract and report for a single query.

    The session is closed exactly once per run whatever happens; a failed run
    never reports partial results.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        *,
        deadline_seconds: float = 60.0,
        search_config: SearchConfig | None = None,
        selectors: SearchSelectors | None = None,
        extractor: InPageExtractor | None = None,
        reporter: ResultReporter | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._deadline_seconds = deadline_seconds
        self._search_config = search_config or SearchConfig()
        self._selectors = selectors or site_selectors()
        self._extractor = extractor or InPageExtractor()
        self._reporter = reporter or ResultReporter()
        self.state = PipelineState.CREATED
        self.failure: Exception | None = None
        self.history: list[PipelineState] = [PipelineState.CREATED]

    def run(self, query: str) -> list[ExtractedRecord]:
        extra = {"query": query}
        session = None
        try:
            plan = build_search_plan(query, self._selectors, self._search_config)
            deadline = Deadline.after(self._deadline_seconds)
            logger.info(
                "Starting search steps=%d %r", len(plan), deadline, extra=extra
            )
            session = self._session_factory.open(deadline)
            self._advance(PipelineState.LAUNCHED)
            PageActionSequencer(on_step=self._on_step).run(session, plan, deadline)
            self._advance(PipelineState.RESULTS_VISIBLE)
            records = self._extractor.extract(
                session,
                self._selectors.results_container_query(),
                self._selectors.result_heading,
                deadline,
            )
            self._advance(PipelineState.EXTRACTED)
        except Exception as exc:
            self.failure = exc
            logger.error(
                "Search failed in state=%s: %s", self.state.value, exc, extra=extra
            )
            self._advance(PipelineState.FAILED)
            raise
        finally:
            if session is not None:
                session.close()

        self._reporter.report(records, query)
        self._advance(PipelineState.REPORTED)
        logger.info("Search done results=%d", len(records), extra=extra)
        return records

    def _on_step(self, index: int, step: ActionStep) -> None:
        if isinstance(step, Navigate):
            self._advance(PipelineState.NAVIGATED)
        elif isinstance(step, SendKey):
            self._advance(PipelineState.INPUT_SUBMITTED)

    def _advance(self, state: PipelineState) -> None:
        logger.debug("Pipeline %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)
