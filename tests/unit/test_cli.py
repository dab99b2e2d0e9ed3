"""
test_cli.py
"""
import importlib
import sys

import pytest
from loguru import logger


@pytest.fixture
def cli(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    module = importlib.import_module("main")
    messages = []
    sink_id = logger.add(messages.append, level="ERROR", format="{message}")
    yield module, messages
    logger.remove(sink_id)


def run_cli(module, monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["main.py", *argv])
    with pytest.raises(SystemExit) as exc_info:
        module.main()
    return exc_info.value.code


def test_zero_days_is_logged_and_exits(cli, monkeypatch):
    module, messages = cli
    assert run_cli(module, monkeypatch, "--days", "0", "--no-chart") == 2
    assert any("Invalid input" in m for m in messages)


def test_bad_seed_from_env_is_logged_and_exits(cli, monkeypatch):
    module, messages = cli
    monkeypatch.setenv("STOCK_ANALYZER_SEED", "not-a-number")
    assert run_cli(module, monkeypatch, "--no-chart") == 2
    assert any("Invalid input" in m for m in messages)


def test_unknown_symbol_exits(cli, monkeypatch):
    module, messages = cli
    assert run_cli(module, monkeypatch, "--symbol", "ZZZZ", "--no-chart") == 2
    assert any("ZZZZ" in m for m in messages)


def test_successful_run_archives_summary(cli, monkeypatch, tmp_path):
    module, _ = cli
    monkeypatch.setattr(sys, "argv", ["main.py", "--symbol", "tsla", "--seed", "4", "--no-chart"])
    module.main()
    outputs = list((tmp_path / "outcomes").glob("*_TSLA_*d"))
    assert len(outputs) == 1
    assert (outputs[0] / "summary.json").exists()
    assert (outputs[0] / "series.csv").exists()
