"""Tests for the zyracss CLI commands."""
from __future__ import annotations

import json

from click.testing import CliRunner

from zyracss import __version__
from zyracss.cli.main import cli


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_help_lists_commands(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "compile bracket-syntax utility classes" in result.output
        for name in ("build", "check", "serve"):
            assert name in result.output

    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_serve_help_shows_options(self) -> None:
        result = CliRunner().invoke(cli, ["serve", "--help"])
        assert result.exit_code == 0
        for option in ("--host", "--port", "--debug", "--sweep"):
            assert option in result.output


# ---------------------------------------------------------------------------
# build command
# ---------------------------------------------------------------------------


class TestBuildCommand:
    def test_html_to_stdout(self, tmp_path) -> None:
        page = tmp_path / "index.html"
        page.write_text('<div class="p-[24px] bad-24px"></div>', encoding="utf-8")
        result = CliRunner().invoke(cli, ["build", "-i", str(page)])
        assert result.exit_code == 0
        assert "padding: 24px;" in result.output
        assert "Summary: 1 valid, 1 invalid" in result.output

    def test_glob_and_json_inputs(self, tmp_path) -> None:
        (tmp_path / "a.html").write_text('<p class="m-[1px]"></p>', encoding="utf-8")
        (tmp_path / "b.json").write_text(json.dumps({"classes": ["p-[2px] m-[1px]"]}), encoding="utf-8")
        result = CliRunner().invoke(cli, ["build", "-i", str(tmp_path / "*")])
        assert result.exit_code == 0
        assert "margin: 1px;" in result.output
        assert "padding: 2px;" in result.output
        assert "Summary: 2 valid" in result.output

    def test_json_output(self, tmp_path) -> None:
        source = tmp_path / "classes.json"
        source.write_text(json.dumps(["p-[1px]", "padding-[1px]"]), encoding="utf-8")
        result = CliRunner().invoke(cli, ["build", "-i", str(source), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["stats"]["grouped_rules"] == 1
        assert data["invalid"] == []

    def test_writes_output_file(self, tmp_path) -> None:
        source = tmp_path / "classes.json"
        source.write_text('["p-[1px]"]', encoding="utf-8")
        target = tmp_path / "out.css"
        result = CliRunner().invoke(
            cli, ["build", "-i", str(source), "-o", str(target), "--minify"]
        )
        assert result.exit_code == 0
        assert f"Wrote {target}" in result.output
        assert target.read_text(encoding="utf-8") == ".p-\\[1px\\]{padding:1px}"

    def test_verbose_lists_failures(self, tmp_path) -> None:
        source = tmp_path / "classes.json"
        source.write_text('["p-24px"]', encoding="utf-8")
        result = CliRunner().invoke(cli, ["build", "-i", str(source), "--verbose"])
        assert "p-24px" in result.output
        assert "try: p-[24px]" in result.output

    def test_no_match_exits_1(self, tmp_path) -> None:
        result = CliRunner().invoke(cli, ["build", "-i", str(tmp_path / "*.html")])
        assert result.exit_code == 1
        assert "No files matched" in result.output

    def test_bad_json_shape(self, tmp_path) -> None:
        source = tmp_path / "classes.json"
        source.write_text('"p-[1px]"', encoding="utf-8")
        result = CliRunner().invoke(cli, ["build", "-i", str(source)])
        assert result.exit_code == 1
        assert "expected a JSON array" in result.output

    def test_invalid_json(self, tmp_path) -> None:
        source = tmp_path / "classes.json"
        source.write_text("[", encoding="utf-8")
        result = CliRunner().invoke(cli, ["build", "-i", str(source)])
        assert result.exit_code == 1
        assert "invalid JSON" in result.output


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


class TestCheckCommand:
    def test_all_valid(self) -> None:
        result = CliRunner().invoke(cli, ["check", "p-[24px]", "text-[14px]"])
        assert result.exit_code == 0
        assert "OK   p-[24px] -> padding: 24px" in result.output
        assert "OK   text-[14px] -> font-size: 14px" in result.output
        assert "Summary: 2 ok, 0 failed" in result.output

    def test_failure_exits_1(self) -> None:
        result = CliRunner().invoke(cli, ["check", "p-[24px]", "p-24px"])
        assert result.exit_code == 1
        assert "FAIL INVALID_SYNTAX [p-24px]" in result.output
        assert "Summary: 1 ok, 1 failed" in result.output

    def test_requires_tokens(self) -> None:
        result = CliRunner().invoke(cli, ["check"])
        assert result.exit_code != 0
