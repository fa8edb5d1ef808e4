import pytest

from src.utils.env import env_bool, load_env
from src.web.config import (
    DEFAULT_USER_AGENT,
    SearchConfig,
    SessionConfig,
    resolve_executable_path,
)
from src.web.deadline import Deadline


def test_launch_args_follow_flags():
    assert SessionConfig().launch_args() == [
        "--disable-gpu",
        "--no-sandbox",
        "--ignore-certificate-errors",
    ]
    assert SessionConfig(no_sandbox=False).launch_args() == [
        "--disable-gpu",
        "--ignore-certificate-errors",
    ]


def test_session_config_is_frozen():
    with pytest.raises(AttributeError):
        SessionConfig().user_agent = "other"


def test_from_env(monkeypatch, tmp_path):
    chrome = tmp_path / "chrome"
    chrome.write_text("")
    monkeypatch.setenv("SEARCH_BOTS_CHROME_PATH", str(chrome))
    monkeypatch.setenv("SEARCH_BOTS_HEADLESS", "false")
    monkeypatch.setenv("SEARCH_BOTS_DEADLINE_SECONDS", "12.5")
    monkeypatch.setenv("SEARCH_BOTS_BASE_URL", "http://localhost:9000/")
    monkeypatch.setenv("SEARCH_BOTS_MIN_RESULTS", "3")
    monkeypatch.delenv("SEARCH_BOTS_USER_AGENT", raising=False)

    session = SessionConfig.from_env()
    search = SearchConfig.from_env()

    assert session.executable_path == str(chrome)
    assert session.headless is False
    assert session.deadline_seconds == 12.5
    assert session.user_agent == DEFAULT_USER_AGENT
    assert search.base_url == "http://localhost:9000/"
    assert search.min_results == 3


def test_explicit_executable_wins(monkeypatch):
    monkeypatch.setenv("CHROME_PATH", "/does/not/matter")
    assert resolve_executable_path("/opt/chrome") == "/opt/chrome"


def test_bad_bool_is_reported(monkeypatch):
    monkeypatch.setenv("SEARCH_BOTS_HEADLESS", "maybe")
    with pytest.raises(ValueError, match="SEARCH_BOTS_HEADLESS"):
        env_bool("SEARCH_BOTS_HEADLESS", True)


def test_load_env_does_not_override(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\nSEARCH_BOTS_BASE_URL='http://file.example/'\n"
        "export SEARCH_BOTS_MIN_RESULTS=4\n"
    )
    monkeypatch.delenv("SEARCH_BOTS_BASE_URL", raising=False)
    monkeypatch.setenv("SEARCH_BOTS_MIN_RESULTS", "7")

    load_env(str(env_file))

    assert SearchConfig.from_env().base_url == "http://file.example/"
    assert SearchConfig.from_env().min_results == 7


def test_deadline_counts_down():
    deadline = Deadline.after(30)
    assert 0 < deadline.remaining() <= 30
    assert not deadline.expired
    assert Deadline(expires_at=0.0).expired
    with pytest.raises(ValueError):
        Deadline.after(0)
