"""Hook system types for Tina.

Defines the core data structures for lifecycle hook composition:
- HookField: a declaration key recognised as a hook (prefix + event name)
- HookChain: the ordered hooks for one event (before, then on)
- parse_hook_field / host_name: naming-convention helpers
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

BEFORE_PREFIX = "before"
ON_PREFIX = "on"

# Hook signature: (page, *args, **kwargs) -> Any
HookFn = Callable[..., Any]


@dataclass(frozen=True)
class HookField:
    """A declaration key that names a hook.

    Attributes:
        key: The declaration key as written (e.g. "beforeLoad")
        prefix: "before" or "on"
        event: The event name the hook belongs to (e.g. "Load")
    """

    key: str
    prefix: str
    event: str


@dataclass
class HookChain:
    """Hooks for a single event, in invocation order.

    Attributes:
        event: Event name (e.g. "Load")
        before: The before<Event> hook, if declared
        on: The on<Event> hook, if declared
    """

    event: str
    before: HookFn | None = None
    on: HookFn | None = None

    @property
    def hooks(self) -> list[HookFn]:
        """Declared hooks, before first. Ordering does not depend on key order."""
        return [fn for fn in (self.before, self.on) if fn is not None]

    @property
    def host_name(self) -> str:
        return host_name(self.event)

    def __len__(self) -> int:
        return len(self.hooks)


def parse_hook_field(key: str) -> HookField | None:
    """Parse a declaration key into a HookField.

    Returns None for keys that are not hook-shaped. The event part must be
    non-empty and start with an uppercase letter, so "on", "before", "once"
    and "online" are not hooks.
    """
    if not isinstance(key, str):
        return None

    for prefix in (BEFORE_PREFIX, ON_PREFIX):
        if key.startswith(prefix):
            event = key[len(prefix):]
            if event and event[0].isupper():
                return HookField(key=key, prefix=prefix, event=event)
    return None


def host_name(event: str) -> str:
    """Name under which the host fires an event (e.g. "Load" -> "onLoad")."""
    return f"{ON_PREFIX}{event}"


def event_from_name(name: str) -> str:
    """Resolve a fired name to an event name.

    Accepts either the host-facing name ("onLoad") or the bare event name
    ("Load"). A "before" name resolves to its event as well.
    """
    parsed = parse_hook_field(name)
    if parsed is not None:
        return parsed.event
    return name
