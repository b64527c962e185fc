"""Tina: compose page declarations into host page descriptors.

Usage:
    from tina import Page

    pages = Page(register=host.register)
    pages.define({
        "data": {"foo": "bar"},
        "compute": lambda state: {"foobar": state["foo"] + "baz"},
        "beforeLoad": check_login,
        "onLoad": load_profile,
        "methods": {"refresh": refresh},
    })
"""

from tina.config import TinaConfig
from tina.errors import DeclarationError, PageStateError, TinaError
from tina.host import Page, Registrar, SandboxHost, define
from tina.page import PageBuilder, PageContext, PageDescriptor

__version__ = "0.4.0"

__all__ = [
    "DeclarationError",
    "Page",
    "PageBuilder",
    "PageContext",
    "PageDescriptor",
    "PageStateError",
    "Registrar",
    "SandboxHost",
    "TinaConfig",
    "TinaError",
    "define",
]
