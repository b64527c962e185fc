"""Runtime configuration for page dispatch."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class TinaConfig:
    """Dispatch behaviour shared by every page built with this config.

    Attributes:
        isolate_hook_failures: Run every hook of a chain even when an earlier
            one raises; the first failure is re-raised once the chain is done.
        teardown_event: Event name after which a page ignores further firings.
    """

    isolate_hook_failures: bool = False
    teardown_event: str = "Unload"

    @classmethod
    def from_env(cls) -> TinaConfig:
        """Create config from environment variables.

        Resolution order for each field:
        1. TINA_ISOLATE_HOOK_FAILURES / TINA_TEARDOWN_EVENT env vars
        2. Dataclass defaults
        """
        config = cls()

        isolate = os.environ.get("TINA_ISOLATE_HOOK_FAILURES")
        if isolate is not None:
            config.isolate_hook_failures = isolate.strip().lower() in _TRUTHY

        teardown = os.environ.get("TINA_TEARDOWN_EVENT")
        if teardown:
            config.teardown_event = teardown.strip()

        return config
