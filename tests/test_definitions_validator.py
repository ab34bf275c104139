"""
Tests for syncgate.definitions.validator

Covers:
  - validate_definitions_file()  — single-file validation (valid + invalid)
  - validate_definitions_dir()   — directory walk
"""
from __future__ import annotations

from pathlib import Path

import yaml

from syncgate.definitions.validator import (
    DefinitionIssue,
    validate_definitions_dir,
    validate_definitions_file,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _write_yaml(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump(data, sort_keys=False))
    return path


def _write_raw(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


VALID = {
    "definitions": {
        "notebook": {
            "typeFilter": "simple",
            "channels": {"view": "readers", "write": ["notebooks"]},
            "expiry": 3600,
            "propertyValidators": [
                {"name": "title", "type": "string", "required": True, "maximumLength": 40},
                {"name": "owner", "type": "string", "mustEqual": {"function": "currentOwner"}},
                {
                    "name": "pages",
                    "type": "array",
                    "arrayElementsValidator": {"type": "object", "propertyValidators": []},
                },
            ],
            "accessAssignments": [{"type": "channel", "channels": "c", "users": {"function": "members"}}],
            "customActions": {"onValidationSucceeded": "audit"},
        }
    }
}


# ---------------------------------------------------------------------------
# validate_definitions_file
# ---------------------------------------------------------------------------


class TestValidateDefinitionsFile:
    def test_valid_file(self, tmp_path):
        assert validate_definitions_file(_write_yaml(tmp_path / "defs.yaml", VALID)) == []

    def test_missing_type_filter(self, tmp_path):
        path = _write_yaml(tmp_path / "defs.yaml", {"definitions": {"note": {"immutable": True}}})
        issues = validate_definitions_file(path)
        assert len(issues) == 1
        assert "'typeFilter' is a required property" in issues[0].message
        assert issues[0].path == "definitions/note"

    def test_unknown_validator_type(self, tmp_path):
        data = {
            "definitions": {
                "note": {"typeFilter": "simple", "propertyValidators": [{"name": "x", "type": "blob"}]}
            }
        }
        issues = validate_definitions_file(_write_yaml(tmp_path / "defs.yaml", data))
        assert issues
        assert all(isinstance(issue, DefinitionIssue) for issue in issues)

    def test_unknown_channel_operation(self, tmp_path):
        data = {"definitions": {"note": {"typeFilter": "simple", "channels": {"edit": "x"}}}}
        assert validate_definitions_file(_write_yaml(tmp_path / "defs.yaml", data))

    def test_yaml_parse_error(self, tmp_path):
        path = _write_raw(tmp_path / "bad.yaml", "definitions: [unclosed\n")
        issues = validate_definitions_file(path)
        assert len(issues) == 1
        assert "YAML parse error" in issues[0].message

    def test_empty_file(self, tmp_path):
        issues = validate_definitions_file(_write_raw(tmp_path / "empty.yaml", "\n"))
        assert "empty" in issues[0].message

    def test_issue_str(self, tmp_path):
        issue = DefinitionIssue(file=Path("defs.yaml"), message="boom", path="definitions/note")
        assert str(issue) == "[ERROR] defs.yaml at definitions/note: boom"


# ---------------------------------------------------------------------------
# validate_definitions_dir
# ---------------------------------------------------------------------------


class TestValidateDefinitionsDir:
    def test_collects_issues_from_all_files(self, tmp_path):
        _write_yaml(tmp_path / "good.yaml", VALID)
        _write_yaml(tmp_path / "bad.yaml", {"definitions": {"note": {}}})
        issues = validate_definitions_dir(tmp_path)
        assert [issue.file.name for issue in issues] == ["bad.yaml"]

    def test_missing_directory(self, tmp_path):
        issues = validate_definitions_dir(tmp_path / "nowhere")
        assert "does not exist" in issues[0].message

    def test_single_file_path(self, tmp_path):
        assert validate_definitions_dir(_write_yaml(tmp_path / "defs.yaml", VALID)) == []
