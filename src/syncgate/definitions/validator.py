"""
definitions/validator.py — JSON Schema validation for syncgate definitions files.

Checks the structure of definitions YAML before it is loaded, so that
authoring mistakes are reported per file with a readable location
instead of surfacing as the first ConfigurationError the loader hits.

Usage:
    from syncgate.definitions.validator import validate_definitions_dir

    issues = validate_definitions_dir(Path("definitions"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

logger = logging.getLogger(__name__)

_SCHEMAS_DIR = Path(__file__).parent / "schemas"
_SCHEMA_NAME = "document-definitions.schema.json"


@dataclass
class DefinitionIssue:
    """A single validation finding for a definitions YAML file."""

    file: Path
    message: str
    path: str = ""          # location within the file, e.g. "definitions/notebook/propertyValidators[0]"
    severity: str = "error"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def _load_schema() -> dict[str, Any]:
    with (_SCHEMAS_DIR / _SCHEMA_NAME).open() as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_definitions_file(yaml_path: Path) -> list[DefinitionIssue]:
    """
    Validate a single definitions YAML file against the schema.

    Returns:
        A list of :class:`DefinitionIssue` objects (empty on success).
    """
    try:
        with yaml_path.open() as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [DefinitionIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return [DefinitionIssue(file=yaml_path, message="File is empty or contains only whitespace")]

    validator = Draft202012Validator(_load_schema())
    return [
        DefinitionIssue(file=yaml_path, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(raw), key=lambda e: list(e.absolute_path).__repr__())
    ]


def validate_definitions_dir(definitions_dir: Path) -> list[DefinitionIssue]:
    """
    Validate every ``*.yaml`` / ``*.yml`` file in *definitions_dir*.

    A path naming a single file validates just that file.

    Returns:
        A flat list of :class:`DefinitionIssue` objects across all files.
        Empty list means all files are valid.
    """
    if definitions_dir.is_file():
        return validate_definitions_file(definitions_dir)

    if not definitions_dir.is_dir():
        return [
            DefinitionIssue(
                file=definitions_dir,
                message=f"Definitions directory does not exist: {definitions_dir}",
            )
        ]

    all_issues: list[DefinitionIssue] = []
    files = sorted(definitions_dir.glob("*.yaml")) + sorted(definitions_dir.glob("*.yml"))
    for yaml_file in files:
        all_issues.extend(validate_definitions_file(yaml_file))

    logger.debug("Validated %d definitions file(s), %d issue(s)", len(files), len(all_issues))
    return all_issues
