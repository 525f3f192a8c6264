from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from cleanhtml import cli as cli_module
from cleanhtml.cli import cli
from tests.conftest import data_path, read_text


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_clean_from_stdin(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["clean"], input="XSS<script>attack</script><p>foo</p>")
    assert result.exit_code == 0, result.output
    assert result.stdout == "XSS<p>foo</p>"


def test_clean_file_to_file(runner: CliRunner, tmp_path: Path) -> None:
    source = data_path() / "widgets.html"
    target = tmp_path / "out.html"
    result = runner.invoke(cli, ["clean", str(source), "--output", str(target)])
    assert result.exit_code == 0, result.output
    expected = read_text(data_path() / "widgets.expected.html").strip()
    assert read_text(target).strip() == expected


def test_clean_with_policy_file(runner: CliRunner, tmp_path: Path) -> None:
    policy = tmp_path / "policy.json"
    policy.write_text(json.dumps({"tags": ["b"], "linkRel": None}), encoding="utf-8")
    result = runner.invoke(cli, ["clean", "--policy", str(policy)], input="<p><b>x</b></p>")
    assert result.exit_code == 0, result.output
    assert result.stdout == "<b>x</b>"


def test_policy_from_environment(runner: CliRunner, tmp_path: Path) -> None:
    policy = tmp_path / "policy.json"
    policy.write_text(json.dumps({"tags": []}), encoding="utf-8")
    result = runner.invoke(cli, ["clean"], input="<p><b>x</b></p>", env={"CLEANHTML_POLICY": str(policy)})
    assert result.exit_code == 0, result.output
    assert result.stdout == "x"


def test_conflicting_policy_is_a_usage_error(runner: CliRunner, tmp_path: Path) -> None:
    policy = tmp_path / "policy.json"
    policy.write_text(json.dumps({"tags": ["script"]}), encoding="utf-8")
    result = runner.invoke(cli, ["clean", "--policy", str(policy)], input="x")
    assert result.exit_code == 2
    assert "clean-content-overlap" in result.output


def test_unreadable_policy_is_a_usage_error(runner: CliRunner, tmp_path: Path) -> None:
    policy = tmp_path / "policy.json"
    policy.write_text("{not json", encoding="utf-8")
    result = runner.invoke(cli, ["clean", "--policy", str(policy)], input="x")
    assert result.exit_code == 2
    assert "cannot read policy" in result.output


def test_input_limit(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "MAX_INPUT", 4)
    result = runner.invoke(cli, ["clean"], input="<p>too long</p>")
    assert result.exit_code == 2
    assert "longer than 4" in result.output


def test_clean_text_command(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["clean-text"], input="XSS<script>attack</script>")
    assert result.exit_code == 0, result.output
    assert result.stdout == "XSS&lt;script&gt;attack&lt;&#47;script&gt;"


def test_policy_command_prints_default(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["policy"])
    assert result.exit_code == 0, result.output
    raw = json.loads(result.stdout)
    assert raw["cleanContentTags"] == ["script", "style"]
    assert raw["linkRel"] == "noopener noreferrer"
