from src.search.pipeline import PipelineState, SearchPipeline
from src.search.plan import build_search_plan
from src.search.reporter import ResultReporter

__all__ = [
    "PipelineState",
    "ResultReporter",
    "SearchPipeline",
    "build_search_plan",
]
