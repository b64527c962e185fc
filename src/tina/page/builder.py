"""Page descriptor builder and lifecycle dispatch for Tina.

Turns a declaration mapping into a PageDescriptor: a read-only mapping of
host-facing event names ("onLoad", "onShow", ...) to dispatchers, plus the
initial ``data`` and any pass-through fields.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from tina.config import TinaConfig
from tina.hooks.registry import HookRegistry
from tina.hooks.service import HookService
from tina.hooks.types import event_from_name, host_name
from tina.page.context import PageContext
from tina.page.methods import MethodTable
from tina.page.types import DATA_FIELD, Declaration
from tina.state.container import StateContainer

logger = logging.getLogger(__name__)


class LifecycleDispatcher:
    """Callable the host invokes for one event: ``dispatcher(page, *args)``."""

    def __init__(self, descriptor: PageDescriptor, event: str):
        self.descriptor = descriptor
        self.event = event

    def __call__(self, page: PageContext, *args: Any, **kwargs: Any) -> Any:
        return self.descriptor.dispatch(page, self.event, args, kwargs)

    def __repr__(self) -> str:
        return f"LifecycleDispatcher({host_name(self.event)!r})"


class PageDescriptor(Mapping[str, Any]):
    """What the host registers: event dispatchers plus inert page fields.

    Keys are exactly the host-facing names of the declared events, ``data``,
    and every field of the declaration that Tina does not interpret.
    """

    def __init__(
        self,
        hooks: HookRegistry,
        state: StateContainer,
        methods: MethodTable,
        extra: dict[str, Any] | None = None,
        service: HookService | None = None,
    ):
        self.hooks = hooks
        self.state = state
        self.methods = methods
        self.extra = dict(extra or {})
        self.service = service or HookService()

        self._fields: dict[str, Any] = dict(self.extra)
        self._fields[DATA_FIELD] = state.initialize()
        for chain in hooks:
            self._fields[chain.host_name] = LifecycleDispatcher(self, chain.event)

    @property
    def config(self) -> TinaConfig:
        return self.service.config

    @property
    def events(self) -> list[str]:
        return self.hooks.events()

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"PageDescriptor(events={self.events!r})"

    def instantiate(self, **fields: Any) -> PageContext:
        """Create a new page with its own copy of the initial state."""
        return PageContext(self.state.initialize(), descriptor=self, **fields)

    def fire(self, page: PageContext, name: str, *args: Any, **kwargs: Any) -> Any:
        """Fire any event by host name ("onLoad") or event name ("Load").

        Names with no declared hooks still activate the page, then do nothing.
        """
        return self.dispatch(page, event_from_name(name), args, kwargs)

    def dispatch(
        self,
        page: PageContext,
        event: str,
        args: tuple[Any, ...] = (),
        kwargs: dict[str, Any] | None = None,
    ) -> Any:
        """Run the chain for `event` against `page`.

        On the page's first firing, derivation runs before anything else and
        methods are attached; then the chain runs in order. A failing hook
        aborts the rest of the chain unless hook failures are isolated.
        """
        if not isinstance(page, PageContext):
            raise TypeError(
                f"Pages must be created with PageDescriptor.instantiate(), got {type(page).__name__}"
            )
        if page.torn_down:
            logger.debug("Ignoring '%s' on a torn-down page", event)
            return None

        self._activate(page)

        hooks = self.hooks.chain_for(event)
        logger.debug("Firing '%s' (%d hook(s))", event, len(hooks))
        try:
            return self.service.run_chain(event, hooks, page, args, kwargs)
        finally:
            if event == self.config.teardown_event:
                page.torn_down = True

    def _activate(self, page: PageContext) -> None:
        if not page.has_derived:
            # A failing compute leaves the page unstarted; the next firing retries
            self.state.derive_once(page.data)
            page.has_derived = True
        page.attach_methods(self.methods)


class PageBuilder:
    """Builds PageDescriptors from declaration mappings.

    Building validates the declaration but never executes a hook.
    """

    def __init__(self, config: TinaConfig | None = None):
        self.config = config or TinaConfig()
        self.service = HookService(self.config)

    def build(self, declaration: Mapping[str, Any]) -> PageDescriptor:
        """Build a descriptor.

        Raises:
            DeclarationError: If the declaration is malformed
        """
        parsed = Declaration.from_mapping(declaration)

        hooks = HookRegistry.from_declaration(parsed.hooks)
        state = StateContainer(parsed.data, parsed.compute)
        methods = MethodTable(parsed.methods)

        descriptor = PageDescriptor(
            hooks=hooks,
            state=state,
            methods=methods,
            extra=parsed.extra,
            service=self.service,
        )
        logger.debug(
            "Built page descriptor: events=%s methods=%s compute=%s",
            descriptor.events,
            methods.names(),
            state.has_compute,
        )
        return descriptor
