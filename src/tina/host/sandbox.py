"""In-process host for exercising page declarations without a real runtime.

SandboxHost stands in for the host's registration function: every
registered descriptor is instantiated into a page immediately, and events
are fired by hand.

    host = SandboxHost()
    Page(register=host.register).define(declaration)
    page = host.get_page(-1)
    page.route = "/somewhere"
    host.emit(page, "onLoad")
"""

from typing import Any

from tina.page.builder import PageDescriptor
from tina.page.context import PageContext


class SandboxHost:
    """Records descriptors and the pages created from them."""

    def __init__(self) -> None:
        self.descriptors: list[PageDescriptor] = []
        self.pages: list[PageContext] = []

    def register(self, descriptor: PageDescriptor) -> None:
        self.descriptors.append(descriptor)
        self.pages.append(descriptor.instantiate())

    def get_page(self, index: int) -> PageContext:
        """Page by registration order; negative indexes count from the end."""
        return self.pages[index]

    def emit(self, page: PageContext, name: str, *args: Any, **kwargs: Any) -> Any:
        return page.emit(name, *args, **kwargs)

    def reset(self) -> None:
        self.descriptors.clear()
        self.pages.clear()
