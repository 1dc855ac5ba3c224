from __future__ import annotations

import pytest
from typer.testing import CliRunner

from cosmos_sample import config, main, orchestrator
from cosmos_sample.config import Settings
from tests.fakes import InMemoryDocumentStore

runner = CliRunner()


@pytest.fixture
def cli_settings(monkeypatch, test_settings):
    monkeypatch.setattr(main, "get_settings", lambda: test_settings)
    monkeypatch.setattr(main, "configure_logging", lambda **kwargs: None)
    return test_settings


def test_run_exits_zero_after_success(monkeypatch, cli_settings) -> None:
    store = InMemoryDocumentStore()
    monkeypatch.setattr(orchestrator, "build_document_store", lambda settings: store)

    result = runner.invoke(main.app, ["run", "--create-items", "--page-size", "3"])

    assert result.exit_code == 0
    assert store.close_calls == 1
    container = store.databases["MainDB"].containers["Employee"]
    assert len(container.items) == 4
    assert "Query: 4 item(s) in 2 page(s)" in result.output


def test_run_exits_zero_after_logged_failure(monkeypatch, cli_settings) -> None:
    def broken_factory(settings: Settings):
        raise RuntimeError("endpoint unreachable")

    monkeypatch.setattr(orchestrator, "build_document_store", broken_factory)

    result = runner.invoke(main.app, ["run"])

    assert result.exit_code == 0
    assert "endpoint unreachable" in result.output


def test_run_applies_cli_overrides(monkeypatch, cli_settings) -> None:
    seen = []

    def fake_run_demo(settings):
        seen.append(settings)
        return {"succeeded": True, "stage": "closed", "stages": []}

    monkeypatch.setattr(main, "run_demo", fake_run_demo)

    result = runner.invoke(
        main.app, ["run", "--read-items", "--query", "SELECT * FROM c", "--no-summary"]
    )

    assert result.exit_code == 0
    (settings,) = seen
    assert settings.read_items is True
    assert settings.create_items is False
    assert settings.query_text == "SELECT * FROM c"
    assert settings.page_size == cli_settings.page_size


def test_info_masks_key(monkeypatch) -> None:
    monkeypatch.setattr(
        main,
        "get_settings",
        lambda: Settings(cosmos_endpoint="https://localhost:8081/", cosmos_key="supersecretkey"),
    )

    result = runner.invoke(main.app, ["info"])

    assert result.exit_code == 0
    assert "supersecretkey" not in result.output
    assert "endpoint=https://localhost:8081/" in result.output
    assert "pk=/lastName throughput=400 RU/s" in result.output


def test_info_reports_unset_account(monkeypatch, tmp_path) -> None:
    for name in ("COSMOS_ENDPOINT", "ACCOUNT_HOST", "COSMOS_KEY", "ACCOUNT_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    config.get_settings.cache_clear()
    monkeypatch.setattr(main, "get_settings", config.get_settings)

    result = runner.invoke(main.app, ["info"])
    config.get_settings.cache_clear()

    assert result.exit_code == 0
    assert "endpoint=<unset> key=<unset>" in result.output


@pytest.mark.parametrize(
    ("name", "value", "reported"),
    [
        ("COSMOS_THROUGHPUT", "100", "COSMOS_THROUGHPUT"),
        ("LOG_LEVEL", "verbose", "verbose"),
        ("COSMOS_PREFERRED_REGIONS", "West US", "preferred_regions"),
    ],
)
def test_run_exits_zero_on_invalid_configuration(
    monkeypatch, tmp_path, name, value, reported
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(name, value)
    config.get_settings.cache_clear()
    monkeypatch.setattr(main, "get_settings", config.get_settings)
    built = []
    logging_calls = []
    monkeypatch.setattr(orchestrator, "build_document_store", built.append)
    monkeypatch.setattr(main, "configure_logging", lambda **kwargs: logging_calls.append(kwargs))

    result = runner.invoke(main.app, ["run"])
    config.get_settings.cache_clear()

    assert result.exit_code == 0
    assert result.exception is None
    assert built == []
    assert logging_calls == [{"json_logs": False}]
    assert "failed" in result.output
    assert reported in result.output
