"""Tests for the command line interface."""

import json

from typer.testing import CliRunner

from compflow.main import cli

runner = CliRunner()


def test_replay_prints_candidates():
    result = runner.invoke(cli, ["replay", "imp", "-w", "import", "-w", "impress", "-w", "simple"])

    assert result.exit_code == 0, result.output
    assert "Candidates from column 1" in result.output
    assert "import" in result.output
    assert "impress" in result.output


def test_replay_without_match():
    result = runner.invoke(cli, ["replay", "zzz", "-w", "import"])

    assert result.exit_code == 0, result.output
    assert "No candidates" in result.output


def test_replay_with_config_and_buffer(tmp_path):
    config = tmp_path / "compflow.json"
    config.write_text(json.dumps({"preselect": "always", "source": {"buffer": True, "words": True}}), encoding="utf-8")

    result = runner.invoke(
        cli,
        ["replay", "ab", "--config", str(config), "--buffer-text", "abacus abbey", "--latency", "30"],
    )

    assert result.exit_code == 0, result.output
    assert "abacus" in result.output
    assert "First candidate preselected" in result.output


def test_replay_words_file(tmp_path):
    words = tmp_path / "words.txt"
    words.write_text("alpha\nalphabet\n\n", encoding="utf-8")

    result = runner.invoke(cli, ["replay", "alph", "--words-file", str(words)])

    assert result.exit_code == 0, result.output
    assert "alphabet" in result.output
