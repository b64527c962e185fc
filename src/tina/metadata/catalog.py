"""Function catalog for declarative pages.

YAML page files cannot hold Python callables, so they name them instead.
Page modules register their hooks, methods, and compute functions under
those names, usually with the @page_function decorator at import time.
"""

from collections.abc import Callable
from typing import Any

PageFn = Callable[..., Any]


class FunctionCatalog:
    """Process-wide map of catalog name -> page function.

    A name is bound once. Importing the same page module twice re-registers
    the same function and is harmless; binding a different function to a
    taken name is a declaration conflict.

    Example:
        @page_function("profile.load")
        def load_profile(page, query):
            page.set_data({"userId": query["id"]})
    """

    _functions: dict[str, PageFn] = {}

    @classmethod
    def register(cls, name: str, fn: PageFn) -> None:
        """Bind `fn` to `name`.

        Raises:
            TypeError: If `fn` is not callable
            ValueError: If `name` is already bound to a different function
        """
        if not callable(fn):
            raise TypeError(f"Page function '{name}' must be callable, got {type(fn).__name__}")
        existing = cls._functions.get(name)
        if existing is not None and existing is not fn:
            raise ValueError(
                f"Page function '{name}' is already bound to "
                f"{getattr(existing, '__qualname__', existing)!s}"
            )
        cls._functions[name] = fn

    @classmethod
    def get(cls, name: str) -> PageFn:
        """Look up a page function.

        Raises:
            ValueError: If nothing is bound to `name`
        """
        try:
            return cls._functions[name]
        except KeyError:
            raise ValueError(
                f"Page function '{name}' is not registered; import the module "
                "that defines it before loading the page file"
            ) from None

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._functions

    @classmethod
    def list_registered(cls) -> list[str]:
        return sorted(cls._functions)

    @classmethod
    def clear(cls) -> None:
        cls._functions.clear()


def page_function(name: str) -> Callable[[PageFn], PageFn]:
    """Register the decorated function in the catalog under `name`."""

    def decorator(fn: PageFn) -> PageFn:
        FunctionCatalog.register(name, fn)
        return fn

    return decorator
