"""Exception types raised by Tina."""


class TinaError(Exception):
    """Base class for errors raised by Tina itself."""
    pass


class DeclarationError(TinaError, ValueError):
    """A page declaration is malformed and cannot be built."""
    pass


class PageStateError(TinaError, RuntimeError):
    """A page context was used before it reached the required lifecycle state."""
    pass
