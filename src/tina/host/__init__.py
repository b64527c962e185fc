"""Host integration: page registration and an in-process sandbox host."""

from tina.host.page import Page, define
from tina.host.sandbox import SandboxHost
from tina.host.types import Registrar

__all__ = ["Page", "Registrar", "SandboxHost", "define"]
