"""Declarative (YAML) page definitions."""

from tina.metadata.catalog import FunctionCatalog, page_function
from tina.metadata.loader import declaration_from_dict, load_declaration
from tina.metadata.validator import ValidationIssue, validate_page_dir, validate_page_file

__all__ = [
    "FunctionCatalog",
    "ValidationIssue",
    "declaration_from_dict",
    "load_declaration",
    "page_function",
    "validate_page_dir",
    "validate_page_file",
]
