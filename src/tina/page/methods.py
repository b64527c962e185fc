"""Method table: author callables bound to a page context."""

from collections.abc import Callable, Mapping
from types import MethodType
from typing import Any

from tina.errors import DeclarationError
from tina.page.types import RESERVED_ATTRIBUTES


class MethodTable:
    """Validated author methods for one declaration.

    Names are unique because the declaration is a mapping; if the author's
    mapping was built with a repeated key, the last value is the one kept.
    """

    def __init__(self, methods: Mapping[str, Callable[..., Any]] | None = None):
        self._methods: dict[str, Callable[..., Any]] = {}
        for name, fn in (methods or {}).items():
            if not isinstance(name, str) or not name:
                raise DeclarationError(f"Method names must be non-empty strings, got {name!r}")
            if name in RESERVED_ATTRIBUTES or name.startswith("_"):
                raise DeclarationError(
                    f"Method '{name}' would shadow a page context attribute"
                )
            if not callable(fn):
                raise DeclarationError(
                    f"Method '{name}' must be callable, got {type(fn).__name__}"
                )
            self._methods[name] = fn

    def bind(self, page: Any) -> dict[str, Callable[..., Any]]:
        """Bind every method to `page` so it is passed as the first argument."""
        return {name: MethodType(fn, page) for name, fn in self._methods.items()}

    def names(self) -> list[str]:
        return list(self._methods)

    def __contains__(self, name: object) -> bool:
        return name in self._methods

    def __len__(self) -> int:
        return len(self._methods)
