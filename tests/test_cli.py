"""
Tests for the command line interface and environment configuration.
"""
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from ansi_markup.cli import build_parser, main
from ansi_markup.config import get_default_capabilities, get_flag, get_log_level
from ansi_markup.models import TAG_START as S, TAG_END as E

SOURCE = f"{S}p b{E}{S}c red{E}hi{S}c/{E}{S}p/{E}"


def write_source(tmp_path, text=SOURCE):
    path = tmp_path / "room.txt"
    path.write_text(text, encoding="utf-8")
    return str(path)

def test_render_ansi(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("MARKUP_ANSI", raising=False)
    assert main(["render", write_source(tmp_path)]) == 0
    assert capsys.readouterr().out == "\x1b[31mhi\x1b[39m"

def test_render_all_capabilities(tmp_path, capsys):
    assert main(["render", write_source(tmp_path), "--ansi", "--xterm", "--mxp"]) == 0
    assert capsys.readouterr().out == "<b>\x1b[38;5;1mhi\x1b[39m</b>"

def test_render_without_ansi(tmp_path, capsys):
    assert main(["render", write_source(tmp_path), "--no-ansi"]) == 0
    assert capsys.readouterr().out == "hi"

def test_environment_sets_defaults(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("MARKUP_ANSI", "no")
    monkeypatch.setenv("MARKUP_MXP", "yes")
    assert main(["render", write_source(tmp_path)]) == 0
    assert capsys.readouterr().out == "<b>hi</b>"

def test_encode_and_strip(tmp_path, capsys):
    path = write_source(tmp_path)
    assert main(["encode", path]) == 0
    assert capsys.readouterr().out == SOURCE
    assert main(["strip", path]) == 0
    assert capsys.readouterr().out == "hi"

def test_legacy(capsys):
    assert main(["legacy", "hi", "rn"]) == 0
    assert capsys.readouterr().out == f"{S}c red{E}h{S}c/{E}i"

def test_markup_error_exit_status(tmp_path, capsys):
    assert main(["render", write_source(tmp_path, f"{S}c red{E}open")]) == 1
    assert "Error:" in capsys.readouterr().err

def test_no_command(capsys):
    assert main([]) == 1

def test_get_flag(monkeypatch):
    monkeypatch.setenv("MARKUP_TEST_FLAG", "On")
    assert get_flag("MARKUP_TEST_FLAG") is True
    monkeypatch.setenv("MARKUP_TEST_FLAG", "0")
    assert get_flag("MARKUP_TEST_FLAG", True) is False
    monkeypatch.delenv("MARKUP_TEST_FLAG")
    assert get_flag("MARKUP_TEST_FLAG", True) is True

def test_default_capabilities(monkeypatch):
    for name in ("MARKUP_ANSI", "MARKUP_XTERM", "MARKUP_MXP"):
        monkeypatch.delenv(name, raising=False)
    assert get_default_capabilities() == {"ansi": True, "xterm": False, "mxp": False}

def test_log_level(monkeypatch):
    monkeypatch.setenv("MARKUP_LOG_LEVEL", "debug")
    assert get_log_level() == "DEBUG"

def test_documented_usage_parses():
    parser = build_parser()
    args = parser.parse_args(["render", "room.txt", "--no-ansi", "--xterm", "--mxp"])
    assert (args.file, args.ansi, args.xterm, args.mxp) == ("room.txt", False, True, True)
    assert parser.parse_args(["encode"]).file is None
    assert parser.parse_args(["strip", "room.txt"]).file == "room.txt"
    args = parser.parse_args(["legacy", "hi", "rn"])
    assert (args.text, args.codes) == ("hi", "rn")
