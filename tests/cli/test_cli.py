from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from showmore.cli.app import app

runner = CliRunner()

LONG = "<p>Hello <b>world</b>, this is long</p>"


@pytest.fixture
def source(tmp_path: Path) -> Path:
    path = tmp_path / "intro.html"
    path.write_text(LONG)
    return path


def test_help():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "truncate" in result.stdout
    assert "render" in result.stdout


def test_truncate_raw(source: Path):
    result = runner.invoke(app, ["truncate", str(source), "--length", "13", "--leeway", "0", "--raw"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "<p>Hello <b>world</b>, </p>..."


def test_truncate_reads_stdin():
    result = runner.invoke(app, ["truncate", "-", "-l", "4", "--leeway", "0", "--raw"], input="abcdefgh")

    assert result.exit_code == 0
    assert result.stdout.strip() == "abcd..."


def test_truncate_table(source: Path):
    result = runner.invoke(app, ["truncate", str(source), "--length", "13", "--leeway", "0"])

    assert result.exit_code == 0
    assert "Visible" in result.stdout
    assert "Hidden" in result.stdout


def test_truncate_short_content(source: Path):
    result = runner.invoke(app, ["truncate", str(source)])

    assert result.exit_code == 0
    assert "Not truncated" in result.stdout


def test_truncate_counts_entities_as_written():
    result = runner.invoke(app, ["truncate", "-"], input="a &amp; b")

    assert result.exit_code == 0
    assert "9 characters" in result.stdout


def test_truncate_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["truncate", str(tmp_path / "nope.html")])
    assert result.exit_code == 1


def test_render_collapsed(source: Path):
    result = runner.invoke(app, ["render", str(source), "-l", "13", "--leeway", "0"])

    assert result.exit_code == 0
    assert '<span class="more-hidden" hidden>' in result.stdout
    assert "Show more" in result.stdout


def test_render_expanded_page_to_file(source: Path, tmp_path: Path):
    out = tmp_path / "out.html"
    result = runner.invoke(
        app, ["render", str(source), "-l", "13", "--leeway", "0", "--expanded", "--page", "-o", str(out)],
    )

    assert result.exit_code == 0
    html = out.read_text()
    assert html.startswith("<!DOCTYPE html>")
    assert "Show less" in html


def test_unknown_command(source: Path):
    result = runner.invoke(app, ["command", "explode", str(source)])

    assert result.exit_code == 1
    assert "Unknown command" in result.stdout


def test_settings_command(source: Path):
    result = runner.invoke(app, ["command", "settings", str(source)])

    assert result.exit_code == 0
    assert "leeway" in result.stdout


def test_config_show():
    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    assert "wordBreak" in result.stdout
    assert "ellipsisText" in result.stdout
