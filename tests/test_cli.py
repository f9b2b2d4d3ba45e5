from __future__ import annotations

import argparse
import io
import threading

import pytest

import copytxmate.cli as cli
from tests.support.memory_clipboard import MemoryClipboard


def test_format_argument(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["format", "你好,世界"]) == 0
    assert capsys.readouterr().out == "你好，世界\n"


def test_format_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("这是从PDF复制的\n一段文字"))
    assert cli.main(["format"]) == 0
    assert capsys.readouterr().out == "这是从 PDF 复制的一段文字\n"


def test_samples_prints_every_case(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["samples"]) == 0
    out = capsys.readouterr().out
    assert "测试 #1" in out and "测试 #6" in out


def test_clip_formats_and_writes_back(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    board = MemoryClipboard("这是一个test测试案例")
    monkeypatch.setattr(cli, "_make_backend", lambda: board)

    assert cli.main(["clip"]) == 0
    assert board.writes == ["这是一个 test 测试案例"]
    assert "这是一个 test 测试案例" in capsys.readouterr().out


def test_clip_empty_or_unavailable(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    board = MemoryClipboard(None)
    monkeypatch.setattr(cli, "_make_backend", lambda: board)
    assert cli.main(["clip"]) == 1
    assert "empty" in capsys.readouterr().err

    board.text = "x"
    board.fail_reads = True
    assert cli.main(["clip"]) == 1
    assert "unavailable" in capsys.readouterr().err


def test_watch_runs_until_stopped(monkeypatch: pytest.MonkeyPatch) -> None:
    board = MemoryClipboard()
    monkeypatch.setattr(cli, "_make_backend", lambda: board)

    stop = threading.Event()
    stop.set()
    args = argparse.Namespace(interval=0.01, auto_format=True)
    assert cli._cmd_watch(args, stop_event=stop) == 0


def test_watch_rejects_bad_interval(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(cli, "_make_backend", lambda: MemoryClipboard())
    assert cli.main(["watch", "--interval", "0"]) == 2
    assert "poll_interval_seconds" in capsys.readouterr().err


def test_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        cli.main([])
