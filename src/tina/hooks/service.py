"""Hook execution service for Tina.

Runs an event's hook chain against a page context, handling sequential
ordering, failure policy, and fire-and-forget scheduling of async hooks.
"""

import asyncio
import inspect
import logging
from collections.abc import Sequence
from typing import Any

from tina.config import TinaConfig
from tina.hooks.types import HookFn

logger = logging.getLogger(__name__)


def _hook_name(hook_fn: HookFn) -> str:
    return getattr(hook_fn, "__qualname__", None) or repr(hook_fn)


class HookService:
    """Runs hook chains for page lifecycle events.

    Hooks within a chain execute synchronously in chain order, each receiving
    the same page context. By default the first failure aborts the rest of
    the chain and propagates to the caller.
    """

    def __init__(self, config: TinaConfig | None = None):
        self.config = config or TinaConfig()
        self._pending: set[asyncio.Future[Any]] = set()

    def run_chain(
        self,
        event: str,
        hooks: Sequence[HookFn],
        page: Any,
        args: tuple[Any, ...] = (),
        kwargs: dict[str, Any] | None = None,
    ) -> Any:
        """Execute hooks for a firing of `event`.

        Args:
            event: The event being fired (used for logging)
            hooks: Ordered hooks from HookRegistry.chain_for()
            page: The page context passed as first argument to every hook
            args: Positional arguments forwarded from the host
            kwargs: Keyword arguments forwarded from the host

        Returns:
            The return value of the last hook that ran, or None for an empty chain.

        Raises:
            Exception: Whatever the failing hook raised. In isolation mode the
                first failure is raised after every hook has run.
        """
        if not hooks:
            return None

        kwargs = kwargs or {}
        first_error: BaseException | None = None
        result: Any = None

        for hook_fn in hooks:
            try:
                result = hook_fn(page, *args, **kwargs)
            except Exception as e:
                if not self.config.isolate_hook_failures:
                    raise
                logger.error(
                    "Hook '%s' for event '%s' failed: %s",
                    _hook_name(hook_fn),
                    event,
                    e,
                )
                if first_error is None:
                    first_error = e
                continue

            if inspect.isawaitable(result):
                result = self._schedule(event, hook_fn, result)

        if first_error is not None:
            raise first_error

        return result

    def _schedule(self, event: str, hook_fn: HookFn, awaitable: Any) -> "asyncio.Future[Any] | None":
        """Hand an async hook body to the running loop without awaiting it.

        Returns the scheduled future, or None when no loop is running.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                "Hook '%s' for event '%s' returned an awaitable but no event loop "
                "is running; it was not scheduled",
                _hook_name(hook_fn),
                event,
            )
            close = getattr(awaitable, "close", None)
            if close is not None:
                close()
            return None

        future = asyncio.ensure_future(awaitable)
        self._pending.add(future)

        def _done(fut: asyncio.Future[Any]) -> None:
            self._pending.discard(fut)
            if fut.cancelled():
                return
            exc = fut.exception()
            if exc is not None:
                # async hook bodies are fire-and-forget
                logger.error(
                    "Async hook '%s' for event '%s' failed: %s",
                    _hook_name(hook_fn),
                    event,
                    exc,
                )

        future.add_done_callback(_done)
        return future

    @property
    def pending(self) -> int:
        """Number of scheduled async hook bodies that have not finished."""
        return len(self._pending)
