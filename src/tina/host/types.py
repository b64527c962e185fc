"""Host-facing types."""

from collections.abc import Callable
from typing import Any

from tina.page.builder import PageDescriptor

# The host's page registration entry point. Its return value is ignored.
Registrar = Callable[[PageDescriptor], Any]
