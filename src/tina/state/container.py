"""Page state initialisation, one-shot derivation, and merging."""

import copy
import logging
import re
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from tina.errors import DeclarationError

logger = logging.getLogger(__name__)

# Pure function from a read-only state view to a partial patch
ComputeFn = Callable[[Mapping[str, Any]], Mapping[str, Any] | None]

_PATH_TOKEN = re.compile(r"([^.\[\]]+)|\[(\d+)\]")


class StateContainer:
    """Owns a page's initial data and optional compute function.

    One container is built per declaration; every page instance gets its own
    deep copy of the initial data, so pages never alias each other or the
    declaration.
    """

    def __init__(self, data: Mapping[str, Any] | None = None, compute: ComputeFn | None = None):
        if data is not None and not isinstance(data, Mapping):
            raise DeclarationError(
                f"'data' must be a mapping, got {type(data).__name__}"
            )
        if compute is not None and not callable(compute):
            raise DeclarationError(
                f"'compute' must be callable, got {type(compute).__name__}"
            )
        self._initial = copy.deepcopy(dict(data or {}))
        self.compute = compute

    @property
    def has_compute(self) -> bool:
        return self.compute is not None

    def initialize(self) -> dict[str, Any]:
        """Fresh state for a new page: a deep copy of the declared data."""
        return copy.deepcopy(self._initial)

    def derive_once(self, state: dict[str, Any]) -> dict[str, Any]:
        """Run compute against `state` and merge the resulting patch into it.

        The compute function sees a read-only view of the state as it stands.
        If it raises, the exception propagates and `state` is untouched.

        Returns:
            The patch that was merged (empty when there is no compute).
        """
        if self.compute is None:
            return {}

        patch = self.compute(MappingProxyType(state))
        if patch is None:
            patch = {}
        if not isinstance(patch, Mapping):
            raise DeclarationError(
                f"'compute' must return a mapping, got {type(patch).__name__}"
            )

        patch = dict(patch)
        merge(state, patch)
        logger.debug("Derived state keys: %s", sorted(patch))
        return patch


def merge(state: dict[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow merge: patch keys overwrite, all other keys survive."""
    state.update(patch)
    return state


def parse_path(path: str) -> list[str | int]:
    """Split a data path like "items[0].title" into ["items", 0, "title"].

    Raises:
        KeyError: If the path is empty or malformed
    """
    parts: list[str | int] = []
    pos = 0
    while pos < len(path):
        if path[pos] == ".":
            if not parts or path[pos + 1 : pos + 2] in ("", ".", "["):
                raise KeyError(f"Malformed data path: {path!r}")
            pos += 1
            continue
        match = _PATH_TOKEN.match(path, pos)
        if match is None:
            raise KeyError(f"Malformed data path: {path!r}")
        name, index = match.groups()
        if name is not None and pos > 0 and path[pos - 1] == "]":
            raise KeyError(f"Malformed data path: {path!r}")
        parts.append(int(index) if index is not None else name)
        pos = match.end()
    if not parts:
        raise KeyError(f"Malformed data path: {path!r}")
    return parts


def set_path(state: dict[str, Any], path: str, value: Any) -> None:
    """Set a nested value in place, creating dicts for missing object segments.

    List indexes must address an existing element or the next append slot.
    """
    parts = parse_path(path)
    target: Any = state
    for part, next_part in zip(parts, parts[1:]):
        if isinstance(part, int):
            target = _list_slot(target, part, path, create=dict if isinstance(next_part, str) else list)
        else:
            if not isinstance(target, dict):
                raise KeyError(f"Cannot read key '{part}' from non-dict in {path!r}")
            child = target.get(part)
            if child is None:
                child = {} if isinstance(next_part, str) else []
                target[part] = child
            target = child

    last = parts[-1]
    if isinstance(last, int):
        if not isinstance(target, list):
            raise KeyError(f"Cannot index non-list with [{last}] in {path!r}")
        if last == len(target):
            target.append(value)
        elif last < len(target):
            target[last] = value
        else:
            raise IndexError(f"Index {last} out of range in {path!r}")
    else:
        if not isinstance(target, dict):
            raise KeyError(f"Cannot set key '{last}' on non-dict in {path!r}")
        target[last] = value


def _list_slot(target: Any, index: int, path: str, create: type) -> Any:
    if not isinstance(target, list):
        raise KeyError(f"Cannot index non-list with [{index}] in {path!r}")
    if index == len(target):
        target.append(create())
    elif index > len(target):
        raise IndexError(f"Index {index} out of range in {path!r}")
    return target[index]


def apply_patch(state: dict[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """Merge a mutation request into state.

    Plain keys overwrite top-level entries; keys containing "." or "[" are
    treated as paths into nested data. The patch is applied to a copy and
    committed only if every key succeeds; `state` keeps its identity.
    """
    next_state = copy.deepcopy(state)
    for key, value in patch.items():
        if "." in key or "[" in key:
            set_path(next_state, key, value)
        else:
            next_state[key] = value
    state.clear()
    state.update(next_state)
    return state
