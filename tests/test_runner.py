import logging
from pathlib import Path

import pytest

from src.search import runner
from src.web.config import SearchConfig, SessionConfig
from src.web.errors import BrowserCommandError
from src.web.factory import BrowserSessionFactory

from conftest import FakeDriver


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
            root.removeHandler(handler)
    root.setLevel(level)


def test_overrides_replace_env_values():
    args = runner.build_parser().parse_args(
        ["python", "--deadline", "15", "--headed", "--min-results", "0", "--base-url", "http://x/"]
    )

    session, search = runner.apply_overrides(args, SessionConfig(), SearchConfig())

    assert args.query == "python"
    assert session.deadline_seconds == 15
    assert session.headless is False
    assert search.min_results == 0
    assert search.base_url == "http://x/"
    assert search.settle_delay_seconds == 0.0


def test_default_query_is_test():
    args = runner.build_parser().parse_args([])
    assert args.query == "test"
    assert args.log_dir == Path("logs")


def install_driver(monkeypatch, driver):
    monkeypatch.setattr(
        runner,
        "BrowserSessionFactory",
        lambda config: BrowserSessionFactory(config, driver_factory=lambda _: driver),
    )


def test_main_reports_results(monkeypatch, tmp_path, capsys):
    driver = FakeDriver(
        evaluate_result=[{"href": "https://example.com/1", "text": "Result One"}]
    )
    install_driver(monkeypatch, driver)

    status = runner.main(["test", "--log-dir", str(tmp_path)])

    assert status == 0
    assert "1. Title: Result One" in capsys.readouterr().out
    assert (tmp_path / "search.log").exists()


def test_main_fails_with_stage_message(monkeypatch, tmp_path, capsys):
    driver = FakeDriver(fail_on="ping", error=BrowserCommandError)
    install_driver(monkeypatch, driver)

    status = runner.main(["test", "--log-dir", str(tmp_path)])

    captured = capsys.readouterr()
    assert status == 1
    assert captured.err.startswith("error: launch failed:")
    assert captured.out == ""
    assert driver.close_count == 1
    assert "Run failed" in (tmp_path / "search.log").read_text(encoding="utf-8")


@pytest.mark.parametrize(
    "argv, message",
    [
        (["   "], "Search query must not be empty."),
        (["test", "--deadline", "0"], "Deadline must be positive."),
    ],
)
def test_invalid_input_is_a_config_failure(monkeypatch, tmp_path, capsys, argv, message):
    driver = FakeDriver()
    install_driver(monkeypatch, driver)

    status = runner.main(argv + ["--log-dir", str(tmp_path)])

    captured = capsys.readouterr()
    assert status == 1
    assert captured.err == f"error: config failed: {message}\n"
    assert driver.calls == []


def test_bad_environment_value_is_a_config_failure(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("SEARCH_BOTS_HEADLESS", "sometimes")
    install_driver(monkeypatch, FakeDriver())

    status = runner.main(["test", "--log-dir", str(tmp_path)])

    assert status == 1
    assert capsys.readouterr().err.startswith("error: config failed: SEARCH_BOTS_HEADLESS")
