"""Page declarations, contexts, and descriptors."""

from tina.page.builder import LifecycleDispatcher, PageBuilder, PageDescriptor
from tina.page.context import PageContext
from tina.page.methods import MethodTable
from tina.page.types import RESERVED_ATTRIBUTES, RESERVED_FIELDS, Declaration

__all__ = [
    "Declaration",
    "LifecycleDispatcher",
    "MethodTable",
    "PageBuilder",
    "PageContext",
    "PageDescriptor",
    "RESERVED_ATTRIBUTES",
    "RESERVED_FIELDS",
]
