"""Tests for syncgate CLI commands."""

import json

import pytest
from click.testing import CliRunner

from syncgate.cli.main import cli

DEFINITIONS_YAML = """
definitions:
  notebook:
    typeFilter: simple
    channels:
      write: notebooks
    propertyValidators:
      - name: title
        type: string
        required: true
    accessAssignments:
      - type: channel
        channels: [shared]
        users: [alice]
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def definitions_file(tmp_path):
    path = tmp_path / "definitions.yaml"
    path.write_text(DEFINITIONS_YAML)
    return path


@pytest.fixture
def write_doc(tmp_path):
    def _write(name, doc):
        path = tmp_path / name
        path.write_text(json.dumps(doc))
        return str(path)

    return _write


class TestDefinitionsValidate:
    def test_validate_succeeds(self, runner, definitions_file):
        result = runner.invoke(cli, ["definitions", "validate", "--path", str(definitions_file)])
        assert result.exit_code == 0
        assert "notebook (1 property validators)" in result.output
        assert "All definitions are valid" in result.output

    def test_schema_errors(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("definitions:\n  notebook:\n    immutable: true\n")
        result = runner.invoke(cli, ["definitions", "validate", "--path", str(path)])
        assert result.exit_code == 1
        assert "'typeFilter' is a required property" in result.output
        assert "1 schema error(s) found" in result.output

    def test_unregistered_function(self, runner, tmp_path):
        path = tmp_path / "defs.yaml"
        path.write_text("definitions:\n  notebook:\n    typeFilter: isNotebook\n")
        result = runner.invoke(cli, ["definitions", "validate", "--path", str(path)])
        assert result.exit_code == 1
        assert "Semantic validation failed" in result.output

    def test_definitions_path_from_env(self, runner, definitions_file, monkeypatch):
        monkeypatch.setenv("SYNCGATE_DEFINITIONS_PATH", str(definitions_file))
        result = runner.invoke(cli, ["definitions", "validate"])
        assert result.exit_code == 0

    def test_missing_functions_module(self, runner, definitions_file):
        result = runner.invoke(
            cli,
            ["definitions", "validate", "--path", str(definitions_file), "--functions", "no_such_module_xyz"],
        )
        assert result.exit_code != 0
        assert "Cannot import functions module" in result.output


class TestCheck:
    def test_accepted(self, runner, definitions_file, write_doc):
        doc = write_doc("doc.json", {"_id": "n1", "type": "notebook", "title": "Ideas"})
        result = runner.invoke(
            cli,
            ["check", doc, "--definitions", str(definitions_file), "--user", "alice", "--channel", "notebooks"],
        )
        assert result.exit_code == 0
        assert "Accepted (notebook)" in result.output
        assert "Channels: notebooks" in result.output
        assert "Access: alice -> shared" in result.output

    def test_rejected_without_channel(self, runner, definitions_file, write_doc):
        doc = write_doc("doc.json", {"_id": "n1", "type": "notebook", "title": "Ideas"})
        result = runner.invoke(cli, ["check", doc, "--definitions", str(definitions_file), "--user", "bob"])
        assert result.exit_code == 1
        assert "Rejected: missing channel access" in result.output

    def test_rejected_invalid_document(self, runner, definitions_file, write_doc):
        doc = write_doc("doc.json", {"_id": "n1", "type": "notebook"})
        result = runner.invoke(cli, ["check", doc, "--definitions", str(definitions_file), "--admin"])
        assert result.exit_code == 1
        assert "Rejected: Invalid notebook document" in result.output

    def test_unknown_type(self, runner, definitions_file, write_doc):
        doc = write_doc("doc.json", {"_id": "x", "type": "recipe"})
        result = runner.invoke(cli, ["check", doc, "--definitions", str(definitions_file), "--admin"])
        assert result.exit_code == 1
        assert "Rejected: Unknown document type" in result.output

    def test_delete_with_old_doc(self, runner, definitions_file, write_doc):
        old_doc = write_doc("old.json", {"_id": "n1", "type": "notebook", "title": "Ideas"})
        doc = write_doc("doc.json", {"_id": "n1", "_deleted": True})
        result = runner.invoke(
            cli,
            ["check", doc, "--old-doc", old_doc, "--definitions", str(definitions_file), "--channel", "notebooks"],
        )
        assert result.exit_code == 0
        assert "Accepted (notebook)" in result.output
        assert "Access:" not in result.output

    def test_invalid_json(self, runner, definitions_file, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text("{not json")
        result = runner.invoke(cli, ["check", str(path), "--definitions", str(definitions_file)])
        assert result.exit_code != 0
        assert "invalid JSON" in result.output


class TestLogLevel:
    def test_option_is_case_insensitive(self, runner, definitions_file):
        result = runner.invoke(cli, ["--log-level", "debug", "definitions", "validate", "--path", str(definitions_file)])
        assert result.exit_code == 0

    def test_unknown_option_value(self, runner, definitions_file):
        result = runner.invoke(cli, ["--log-level", "loud", "definitions", "validate", "--path", str(definitions_file)])
        assert result.exit_code == 2
        assert "Invalid value for '--log-level'" in result.output

    def test_unknown_env_value(self, runner, definitions_file):
        result = runner.invoke(
            cli,
            ["definitions", "validate", "--path", str(definitions_file)],
            env={"SYNCGATE_LOG_LEVEL": "loud"},
        )
        assert result.exit_code == 2
        assert "Unknown log level: LOUD" in result.output
        assert "Traceback" not in result.output
