"""Load page declarations from YAML files."""

from pathlib import Path
from typing import Any

import yaml

from tina.errors import DeclarationError
from tina.hooks.types import parse_hook_field
from tina.metadata.catalog import FunctionCatalog
from tina.page.types import COMPUTE_FIELD, DATA_FIELD, METHODS_FIELD


def preprocess_on_key(obj: Any) -> Any:
    """
    Recursively rename the boolean key ``True`` → ``"on"`` in a parsed YAML dict.

    PyYAML parses the bare key ``on:`` as boolean ``True`` (YAML 1.1 spec).
    """
    if isinstance(obj, dict):
        result: dict[Any, Any] = {}
        for k, v in obj.items():
            new_key = "on" if k is True else k
            result[new_key] = preprocess_on_key(v)
        return result
    if isinstance(obj, list):
        return [preprocess_on_key(item) for item in obj]
    return obj


def _resolve(name: Any, where: str) -> Any:
    if not isinstance(name, str):
        raise DeclarationError(f"{where} must name a registered function, got {name!r}")
    try:
        return FunctionCatalog.get(name)
    except ValueError as e:
        raise DeclarationError(f"{where}: {e}") from e


def declaration_from_dict(raw: dict[str, Any], source: str = "<dict>") -> dict[str, Any]:
    """Resolve function names in a parsed page document into callables.

    Returns a plain declaration mapping suitable for Page.define().
    """
    if not isinstance(raw, dict):
        raise DeclarationError(f"{source}: page document must be a mapping")

    declaration: dict[str, Any] = {}
    for key, value in raw.items():
        if key == DATA_FIELD:
            declaration[key] = value if value is not None else {}
        elif key == COMPUTE_FIELD:
            declaration[key] = _resolve(value, f"{source}: compute")
        elif key == METHODS_FIELD:
            if not isinstance(value, dict):
                raise DeclarationError(f"{source}: methods must be a mapping")
            declaration[key] = {
                method: _resolve(target, f"{source}: method '{method}'")
                for method, target in value.items()
            }
        elif parse_hook_field(key) is not None:
            declaration[key] = _resolve(value, f"{source}: hook '{key}'")
        else:
            declaration[key] = value
    return declaration


def load_declaration(path: Path) -> dict[str, Any]:
    """Read a YAML page file and resolve it into a declaration.

    Raises:
        DeclarationError: If the file is not valid YAML, is empty, or names
            unregistered functions
    """
    try:
        with path.open() as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as e:
        raise DeclarationError(f"{path}: YAML parse error: {e}") from e

    if raw is None:
        raise DeclarationError(f"{path}: file is empty")

    return declaration_from_dict(preprocess_on_key(raw), source=str(path))
