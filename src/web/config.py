from __future__ import annotations

import os
import shutil
from dataclasses import dataclass

from src.utils.env import env_bool, env_float, env_int, env_str

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36"
)
DEFAULT_BASE_URL = "https://www.google.com/"

_CHROME_CANDIDATES = (
    "google-chrome",
    "google-chrome-stable",
    "chromium",
    "chromium-browser",
)


def resolve_executable_path(explicit: str | None = None) -> str | None:
    """Find a Chrome/Chromium binary.

    An explicit path is returned as-is. Otherwise SEARCH_BOTS_CHROME_PATH and
    CHROME_PATH are tried, then well-known binaries on PATH. None means
    Playwright's bundled Chromium.
    """
    if explicit:
        return explicit
    for name in ("SEARCH_BOTS_CHROME_PATH", "CHROME_PATH"):
        configured = os.getenv(name, "").strip().strip('"')
        if configured and os.path.exists(configured):
            return configured
    for candidate in _CHROME_CANDIDATES:
        found = shutil.which(candidate)
        if found:
            return found
    return None


@dataclass(frozen=True)
class SessionConfig:
    executable_path: str | None = None
    headless: bool = True
    disable_gpu: bool = True
    no_sandbox: bool = True
    ignore_certificate_errors: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    deadline_seconds: float = 60.0

    def launch_args(self) -> list[str]:
        args = []
        if self.disable_gpu:
            args.append("--disable-gpu")
        if self.no_sandbox:
            args.append("--no-sandbox")
        if self.ignore_certificate_errors:
            args.append("--ignore-certificate-errors")
        return args

    @staticmethod
    def from_env() -> "SessionConfig":
        return SessionConfig(
            executable_path=resolve_executable_path(),
            headless=env_bool("SEARCH_BOTS_HEADLESS", True),
            user_agent=env_str("SEARCH_BOTS_USER_AGENT", DEFAULT_USER_AGENT),
            deadline_seconds=env_float("SEARCH_BOTS_DEADLINE_SECONDS", 60.0),
        )


@dataclass(frozen=True)
class SearchConfig:
    base_url: str = DEFAULT_BASE_URL
    min_results: int = 1  # 0 disables the result-count wait
    poll_interval_ms: int = 250
    settle_delay_seconds: float = 0.0  # fixed fallback wait, off by default

    @staticmethod
    def from_env() -> "SearchConfig":
        return SearchConfig(
            base_url=env_str("SEARCH_BOTS_BASE_URL", DEFAULT_BASE_URL),
            min_results=env_int("SEARCH_BOTS_MIN_RESULTS", 1),
            poll_interval_ms=env_int("SEARCH_BOTS_POLL_INTERVAL_MS", 250),
            settle_delay_seconds=env_float("SEARCH_BOTS_SETTLE_DELAY_SECONDS", 0.0),
        )
