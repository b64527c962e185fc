"""Page context: the execution context shared by hooks and methods."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from tina.errors import PageStateError
from tina.page.types import RESERVED_ATTRIBUTES
from tina.state.container import apply_patch

if TYPE_CHECKING:
    from tina.page.builder import PageDescriptor
    from tina.page.methods import MethodTable


class PageContext:
    """One live page, passed as the first argument to every hook and method.

    Hosts create contexts with PageDescriptor.instantiate() and may attach
    their own fields afterwards (e.g. ``page.route = "/detail"``); those are
    readable from every hook fired later.

    Attributes:
        data: The page's mutable state
        has_derived: True once the first firing has applied derivation
        torn_down: True after the teardown event; further firings are ignored
    """

    def __init__(
        self,
        data: dict[str, Any] | None = None,
        *,
        descriptor: PageDescriptor | None = None,
        **fields: Any,
    ):
        self.data: dict[str, Any] = data if data is not None else {}
        self.has_derived = False
        self.torn_down = False
        self._methods: dict[str, Callable[..., Any]] | None = None
        self._descriptor = descriptor
        for name, value in fields.items():
            if name in RESERVED_ATTRIBUTES:
                raise TypeError(f"Host field '{name}' is reserved by the page context")
            setattr(self, name, value)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails: resolve bound methods
        methods = self.__dict__.get("_methods")
        if methods is not None and name in methods:
            return methods[name]
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __repr__(self) -> str:
        return f"PageContext(data={self.data!r}, has_derived={self.has_derived})"

    @property
    def state(self) -> dict[str, Any]:
        """Alias of ``data``."""
        return self.data

    @property
    def methods_attached(self) -> bool:
        return self._methods is not None

    def attach_methods(self, table: MethodTable) -> None:
        """Bind the declaration's methods to this page. No-op once attached."""
        if self._methods is None:
            self._methods = table.bind(self)

    def call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke an author method by name.

        Raises:
            PageStateError: If methods have not been attached yet
            AttributeError: If no method has that name
        """
        if self._methods is None:
            raise PageStateError(
                f"Cannot call method '{name}': methods are attached on the first event firing"
            )
        try:
            method = self._methods[name]
        except KeyError:
            raise AttributeError(f"Page has no method '{name}'") from None
        return method(*args, **kwargs)

    def set_data(
        self,
        patch: Mapping[str, Any],
        callback: Callable[[], Any] | None = None,
    ) -> None:
        """Merge a patch into ``data``; path keys like "a.b[0]" set nested values."""
        apply_patch(self.data, patch)
        if callback is not None:
            callback()

    def emit(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Fire an event on this page through the descriptor that created it."""
        if self._descriptor is None:
            raise PageStateError("Page context was not created from a descriptor")
        return self._descriptor.fire(self, name, *args, **kwargs)
