"""Page definition entry point."""

import logging
from collections.abc import Mapping
from typing import Any

from tina.config import TinaConfig
from tina.host.types import Registrar
from tina.page.builder import PageBuilder, PageDescriptor

logger = logging.getLogger(__name__)


class Page:
    """Defines pages against one host registration function.

    Example:
        pages = Page(register=host.register)
        pages.define({
            "data": {"count": 0},
            "onLoad": lambda page, query: page.set_data({"id": query["id"]}),
        })
    """

    def __init__(
        self,
        register: Registrar,
        config: TinaConfig | None = None,
        builder: PageBuilder | None = None,
    ):
        if not callable(register):
            raise TypeError("register must be callable")
        self.register = register
        self.builder = builder or PageBuilder(config)

    @property
    def config(self) -> TinaConfig:
        return self.builder.config

    def define(self, declaration: Mapping[str, Any]) -> PageDescriptor:
        """Build a descriptor and hand it to the host exactly once."""
        descriptor = self.builder.build(declaration)
        self.register(descriptor)
        logger.debug("Registered page with events %s", descriptor.events)
        return descriptor


def define(
    declaration: Mapping[str, Any],
    register: Registrar,
    config: TinaConfig | None = None,
) -> PageDescriptor:
    """One-off form of Page(register, config).define(declaration)."""
    return Page(register, config).define(declaration)
