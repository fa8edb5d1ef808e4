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
from src.web.config import SearchConfig, SessionConfig
from src.web.deadline import Deadline
from src.web.driver import BrowserDriver
from src.web.errors import (
    ConfigError,
    DecodeError,
    EvalError,
    LaunchError,
    SearchBotError,
    StepError,
    StepErrorKind,
)
from src.web.extractor import ExtractedRecord, InPageExtractor
from src.web.factory import BrowserSessionFactory, SessionFactory, build_session_factory
from src.web.selectors import SearchSelectors, site_selectors
from src.web.sequencer import PageActionSequencer
from src.web.session import BrowserSession

__all__ = [
    "ActionStep",
    "BrowserDriver",
    "BrowserSession",
    "BrowserSessionFactory",
    "ConfigError",
    "Deadline",
    "DecodeError",
    "Delay",
    "EvalError",
    "ExtractedRecord",
    "InPageExtractor",
    "LaunchError",
    "Navigate",
    "PageActionSequencer",
    "SearchBotError",
    "SearchConfig",
    "SearchSelectors",
    "SelectorKind",
    "SendKey",
    "SendText",
    "SessionConfig",
    "SessionFactory",
    "StepError",
    "StepErrorKind",
    "WaitCount",
    "WaitVisible",
    "build_session_factory",
    "site_selectors",
]
