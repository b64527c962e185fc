"""Hook registry for Tina.

Collects hook fields from a page declaration and exposes the ordered
chain for each event name.
"""

from collections.abc import Iterator, Mapping
from typing import Any

from tina.errors import DeclarationError
from tina.hooks.types import BEFORE_PREFIX, HookChain, HookFn, parse_hook_field


class HookRegistry:
    """Per-declaration table of event name -> HookChain.

    The declaration keys are parsed once when the registry is built; lookups
    at firing time never re-parse.

    Example:
        registry = HookRegistry.from_declaration({
            "onLoad": on_load,
            "beforeLoad": before_load,
        })
        registry.chain_for("Load")  # [before_load, on_load]
    """

    def __init__(self) -> None:
        self._chains: dict[str, HookChain] = {}

    @classmethod
    def from_declaration(cls, declaration: Mapping[str, Any]) -> "HookRegistry":
        """Build a registry from every hook-shaped key of a declaration.

        Raises:
            DeclarationError: If a hook-shaped key holds a non-callable value
        """
        registry = cls()
        for key, value in declaration.items():
            field = parse_hook_field(key)
            if field is None:
                continue
            if not callable(value):
                raise DeclarationError(
                    f"Hook '{key}' must be callable, got {type(value).__name__}"
                )
            registry.add(field.event, field.prefix, value)
        return registry

    def add(self, event: str, prefix: str, hook_fn: HookFn) -> None:
        """Set the before/on slot of an event's chain."""
        chain = self._chains.setdefault(event, HookChain(event=event))
        if prefix == BEFORE_PREFIX:
            chain.before = hook_fn
        else:
            chain.on = hook_fn

    def chain_for(self, event: str) -> list[HookFn]:
        """Ordered hooks for an event. Unknown events yield an empty list."""
        chain = self._chains.get(event)
        if chain is None:
            return []
        return chain.hooks

    def get(self, event: str) -> HookChain | None:
        return self._chains.get(event)

    def events(self) -> list[str]:
        """Event names in declaration order of first appearance."""
        return list(self._chains)

    def __contains__(self, event: object) -> bool:
        return event in self._chains

    def __iter__(self) -> Iterator[HookChain]:
        return iter(self._chains.values())

    def __len__(self) -> int:
        return len(self._chains)
