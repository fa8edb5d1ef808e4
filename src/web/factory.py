from abc import ABC, abstractmethod

from src.web.config import SessionConfig
from src.web.deadline import Deadline
from src.web.session import BrowserSession, DriverFactory


class SessionFactory(ABC):
    """Abstract factory producing one fresh `BrowserSession` per query."""

    @abstractmethod
    def open(self, deadline: Deadline) -> BrowserSession:
        raise NotImplementedError


class BrowserSessionFactory(SessionFactory):
    def __init__(
        self, config: SessionConfig, driver_factory: DriverFactory | None = None
    ) -> None:
        self._config = config
        self._driver_factory = driver_factory

    @property
    def config(self) -> SessionConfig:
        return self._config

    def open(self, deadline: Deadline) -> BrowserSession:
        # Never share a browser between sessions: each call launches its own.
        return BrowserSession.open(self._config, deadline, self._driver_factory)


def build_session_factory(config: SessionConfig | None = None) -> SessionFactory:
    return BrowserSessionFactory(config or SessionConfig.from_env())
