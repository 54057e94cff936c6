"""Unit tests for the CLI module (cppstyle.cli.main)."""

from __future__ import annotations

import json
import sys
from unittest.mock import patch

import pytest

from cppstyle.cli.main import (
    EXIT_APPLY_FAILED,
    EXIT_FORMAT_FAILED,
    EXIT_INVALID_INPUT,
    EXIT_SUCCESS,
    EXIT_UNEXPECTED,
    build_parser,
    main,
)
from cppstyle.exceptions import EditApplicationError
from cppstyle.settings import CLANG_FORMAT_PATH, ENABLE_CLANGFORMAT_ON_SAVE

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="formatter stubs use /bin/sh")


# ---------------------------------------------------------------------------
# TestBuildParser
# ---------------------------------------------------------------------------
class TestBuildParser:
    def test_defaults(self):
        args = build_parser().parse_args(["a.cc"])
        assert args.file == "a.cc"
        assert args.clang_format == ""
        assert args.offset is None
        assert args.length is None
        assert args.fallback_style == "Google"
        assert args.in_place is False
        assert args.on_save is False
        assert args.output_json is False

    def test_all_flags(self):
        args = build_parser().parse_args([
            "a.cc",
            "--clang-format", "/usr/bin/clang-format",
            "--workspace-root", "/ws",
            "--offset", "3",
            "--length", "7",
            "--fallback-style", "LLVM",
            "--timeout", "2.5",
            "--in-place",
            "--on-save",
            "--output-json",
            "--verbose",
        ])
        assert args.clang_format == "/usr/bin/clang-format"
        assert args.workspace_root == "/ws"
        assert (args.offset, args.length) == (3, 7)
        assert args.fallback_style == "LLVM"
        assert args.timeout == 2.5
        assert args.in_place and args.on_save and args.output_json and args.verbose


# ---------------------------------------------------------------------------
# TestMain
# ---------------------------------------------------------------------------
class TestMain:
    def test_prints_formatted_text(self, make_formatter, source_file, capsys):
        exe = make_formatter(stdout="int x = 1;")
        code = main([str(source_file), "--clang-format", exe])
        assert code == EXIT_SUCCESS
        assert capsys.readouterr().out == "int x = 1;"
        assert source_file.read_text() == "int x=1;"

    def test_in_place(self, make_formatter, source_file):
        exe = make_formatter(stdout="int x = 1;")
        code = main([str(source_file), "--clang-format", exe, "--in-place"])
        assert code == EXIT_SUCCESS
        assert source_file.read_text() == "int x = 1;"

    def test_output_json(self, make_formatter, source_file, capsys):
        exe = make_formatter(stdout="int x = 1;")
        code = main([str(source_file), "--clang-format", exe, "--output-json"])
        payload = json.loads(capsys.readouterr().out)
        assert code == EXIT_SUCCESS
        assert payload["status"] == "edits"
        assert payload["edits"]

    def test_failure_leaves_file_untouched(self, make_formatter, source_file, capsys):
        exe = make_formatter(stdout="garbage", stderr="error: oops\n", exit_code=1)
        code = main([str(source_file), "--clang-format", exe, "--in-place"])
        assert code == EXIT_FORMAT_FAILED
        assert source_file.read_text() == "int x=1;"
        assert "error: oops" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.cc")]) == EXIT_INVALID_INPUT

    def test_offset_without_length(self, source_file):
        assert main([str(source_file), "--offset", "2"]) == EXIT_INVALID_INPUT

    def test_negative_selection(self, source_file):
        assert main([str(source_file), "--offset", "-1", "--length", "2"]) == EXIT_INVALID_INPUT

    def test_on_save_disabled_skips_formatting(self, make_formatter, source_file, monkeypatch):
        monkeypatch.delenv(ENABLE_CLANGFORMAT_ON_SAVE, raising=False)
        monkeypatch.setenv(CLANG_FORMAT_PATH, make_formatter(stdout="int x = 1;"))
        code = main([str(source_file), "--on-save", "--in-place"])
        assert code == EXIT_SUCCESS
        assert source_file.read_text() == "int x=1;"

    def test_on_save_enabled_formats(self, make_formatter, source_file, monkeypatch):
        monkeypatch.setenv(ENABLE_CLANGFORMAT_ON_SAVE, "true")
        monkeypatch.setenv(CLANG_FORMAT_PATH, make_formatter(stdout="int x = 1;"))
        code = main([str(source_file), "--on-save", "--in-place"])
        assert code == EXIT_SUCCESS
        assert source_file.read_text() == "int x = 1;"

    def test_on_save_uses_clang_format_flag(self, make_formatter, source_file, monkeypatch):
        monkeypatch.setenv(ENABLE_CLANGFORMAT_ON_SAVE, "true")
        monkeypatch.delenv(CLANG_FORMAT_PATH, raising=False)
        exe = make_formatter(stdout="int x = 1;")
        code = main([str(source_file), "--clang-format", exe, "--on-save", "--in-place"])
        assert code == EXIT_SUCCESS
        assert source_file.read_text() == "int x = 1;"

    def test_in_place_keeps_crlf_line_endings(self, write_formatter, source_file):
        source_file.write_bytes(b"int x=1;\r\nint y=2;\r\n")
        exe = write_formatter(
            "spacer",
            """
            import sys
            data = sys.stdin.buffer.read()
            sys.stdout.buffer.write(data.replace(b"=", b" = "))
            """,
        )
        code = main([str(source_file), "--clang-format", exe, "--in-place"])
        assert code == EXIT_SUCCESS
        assert source_file.read_bytes() == b"int x = 1;\r\nint y = 2;\r\n"

    def test_apply_failure(self, make_formatter, source_file):
        exe = make_formatter(stdout="int x = 1;")
        with patch("cppstyle.cli.main.apply_edits", side_effect=EditApplicationError("bad")):
            code = main([str(source_file), "--clang-format", exe, "--in-place"])
        assert code == EXIT_APPLY_FAILED
        assert source_file.read_text() == "int x=1;"

    def test_unexpected_error(self, source_file):
        with patch("cppstyle.cli.main.FormatPipeline", side_effect=RuntimeError("boom")):
            assert main([str(source_file)]) == EXIT_UNEXPECTED
