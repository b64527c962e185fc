"""Page state container."""

from tina.state.container import (
    ComputeFn,
    StateContainer,
    apply_patch,
    merge,
    parse_path,
    set_path,
)

__all__ = [
    "ComputeFn",
    "StateContainer",
    "apply_patch",
    "merge",
    "parse_path",
    "set_path",
]
