"""
metadata/validator.py: JSON Schema validation for Tina YAML page files.

Usage:
    from tina.metadata.validator import validate_page_dir, validate_page_file

    issues = validate_page_dir(Path("pages"))
    for issue in issues:
        print(issue)

PyYAML quirk: the bare key ``on:`` is parsed as boolean ``True``, not the string
``"on"``.  We preprocess loaded dicts to rename that key before schema validation.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from tina.hooks.types import parse_hook_field
from tina.metadata.catalog import FunctionCatalog
from tina.metadata.loader import preprocess_on_key
from tina.page.types import COMPUTE_FIELD, METHODS_FIELD

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "page.schema.json"

PAGE_SUFFIXES = (".yaml", ".yml")


@dataclass
class ValidationIssue:
    """A single validation finding for a page YAML file."""

    file: Path
    message: str
    path: str = ""          # location within the document, e.g. "methods/refresh"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_schema() -> dict[str, Any]:
    with _SCHEMA_PATH.open() as fh:
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


def _function_refs(doc: dict[str, Any]) -> list[tuple[str, str]]:
    """(location, function name) for every catalog reference in a page document."""
    refs: list[tuple[str, str]] = []
    for key, value in doc.items():
        if key == COMPUTE_FIELD and isinstance(value, str):
            refs.append((key, value))
        elif key == METHODS_FIELD and isinstance(value, dict):
            for method, target in value.items():
                if isinstance(target, str):
                    refs.append((f"{key}/{method}", target))
        elif isinstance(key, str) and parse_hook_field(key) is not None and isinstance(value, str):
            refs.append((key, value))
    return refs


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_page_file(
    yaml_path: Path,
    *,
    schema: dict[str, Any] | None = None,
) -> list[ValidationIssue]:
    """
    Validate a single page YAML file.

    Schema violations are errors. Function names that are not registered in
    the FunctionCatalog are warnings, since registration usually happens at
    application startup rather than before validation.

    Returns:
        A list of :class:`ValidationIssue` objects (empty on success).
    """
    try:
        with yaml_path.open() as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [ValidationIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return [
            ValidationIssue(file=yaml_path, message="File is empty or contains only whitespace")
        ]

    doc = preprocess_on_key(raw)

    validator = Draft202012Validator(schema or _load_schema())
    issues = [
        ValidationIssue(file=yaml_path, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=_json_path)
    ]

    if isinstance(doc, dict):
        for location, name in _function_refs(doc):
            if not FunctionCatalog.is_registered(name):
                issues.append(
                    ValidationIssue(
                        file=yaml_path,
                        message=f"Function '{name}' is not registered",
                        path=location,
                        severity="warning",
                    )
                )

    return issues


def validate_page_dir(
    pages_dir: Path,
    *,
    strict: bool = False,
) -> list[ValidationIssue]:
    """
    Validate every ``*.yaml`` / ``*.yml`` file under *pages_dir*.

    Args:
        pages_dir: Directory of page files (searched recursively).
        strict:    If ``True``, warnings are escalated to errors.
    """
    if not pages_dir.is_dir():
        return [
            ValidationIssue(
                file=pages_dir,
                message=f"Pages directory does not exist: {pages_dir}",
            )
        ]

    schema = _load_schema()
    all_issues: list[ValidationIssue] = []

    files = sorted(p for p in pages_dir.rglob("*") if p.suffix in PAGE_SUFFIXES)
    logger.debug("Validating %d page file(s) under %s", len(files), pages_dir)
    for yaml_file in files:
        file_issues = validate_page_file(yaml_file, schema=schema)
        if strict:
            for issue in file_issues:
                if issue.severity == "warning":
                    issue.severity = "error"
        all_issues.extend(file_issues)

    return all_issues
