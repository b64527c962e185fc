"""Tina lifecycle hook composition.

A page declaration may define two hooks per lifecycle event:
- before<Event>: runs first
- on<Event>: runs second

Usage:
    from tina.hooks import HookRegistry, HookService

    registry = HookRegistry.from_declaration({"beforeLoad": auth, "onLoad": load})
    HookService().run_chain("Load", registry.chain_for("Load"), page)
"""

from tina.hooks.registry import HookRegistry
from tina.hooks.service import HookService
from tina.hooks.types import (
    HookChain,
    HookField,
    HookFn,
    event_from_name,
    host_name,
    parse_hook_field,
)

__all__ = [
    "HookChain",
    "HookField",
    "HookFn",
    "HookRegistry",
    "HookService",
    "event_from_name",
    "host_name",
    "parse_hook_field",
]
