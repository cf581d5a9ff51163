# tests/headword_index/test_cli.py
from __future__ import annotations

import logging
from pathlib import Path

import pytest

import headword_index.cli as cli_mod
from headword_index.cli import build_config, main, parse_args
from headword_index.io.parse import ExtractionError


@pytest.fixture
def captured(monkeypatch):
    """Replace harvest/setup_logger so main() runs without network or logging changes."""
    calls = {"configs": [], "log_levels": []}

    def fake_harvest(config):
        calls["configs"].append(config)

    def fake_setup_logger(log_dir=None, *, level=logging.INFO, **kw):
        calls["log_levels"].append(level)

    monkeypatch.setattr(cli_mod, "harvest", fake_harvest)
    monkeypatch.setattr(cli_mod, "setup_logger", fake_setup_logger)
    return calls


@pytest.mark.parametrize("flags,mode", [([], "off"), (["-p"], "plain"), (["-pp"], "fancy"), (["-p", "-p"], "fancy")])
def test_progress_flag_counts(flags, mode):
    assert build_config(parse_args(flags)).progress == mode


def test_short_flags():
    cfg = build_config(parse_args(["-o", "out.csv", "-c", "50", "-t", "4", "-v"]))
    assert cfg.output == Path("out.csv")
    assert cfg.count == 50
    assert cfg.workers == 4
    assert cfg.verbose
    assert cfg.sort_output


def test_extended_flags():
    cfg = build_config(parse_args([
        "--base-url", "https://ex/e/",
        "--selector", "h1 .hw",
        "--on-missing", "abort",
        "--unsorted",
        "--timeout", "2", "5",
        "--user-agent", "ua/1",
        "--log-dir", "logs",
    ]))
    assert cfg.base_url == "https://ex/e/"
    assert cfg.selector == "h1 .hw"
    assert cfg.on_missing == "abort"
    assert not cfg.sort_output
    assert cfg.timeout == (2.0, 5.0)
    assert cfg.user_agent == "ua/1"
    assert cfg.log_dir == Path("logs")


def test_main_success(captured):
    assert main(["-c", "3", "-t", "1"]) == 0
    assert captured["configs"][0].count == 3
    assert captured["log_levels"] == [logging.WARNING]


@pytest.mark.parametrize("flags,level", [(["-p"], logging.INFO), (["-v"], logging.DEBUG)])
def test_main_log_level(captured, flags, level):
    main(flags)
    assert captured["log_levels"] == [level]


@pytest.mark.parametrize("flags", [["-c", "0"], ["-c", "-5"], ["-t", "-1"], ["--selector", "[[["]])
def test_main_bad_config_exits_before_work(captured, flags, capsys):
    assert main(flags) == 2
    assert captured["configs"] == []
    assert "ERROR" in capsys.readouterr().err


def test_main_extraction_abort_is_fatal(monkeypatch, captured):
    def boom(config):
        raise ExtractionError("no element matches '.hwLabel'")

    monkeypatch.setattr(cli_mod, "harvest", boom)
    assert main(["--on-missing", "abort"]) == 1


def test_main_unwritable_output_is_fatal(monkeypatch, captured):
    def boom(config):
        raise FileNotFoundError(2, "No such file or directory", str(config.output))

    monkeypatch.setattr(cli_mod, "harvest", boom)
    assert main(["-o", "/nonexistent/dir/out.csv"]) == 1
