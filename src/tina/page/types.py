"""Page declaration types for Tina."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from tina.errors import DeclarationError
from tina.hooks.types import HookFn, parse_hook_field
from tina.state.container import ComputeFn

DATA_FIELD = "data"
COMPUTE_FIELD = "compute"
METHODS_FIELD = "methods"

RESERVED_FIELDS = (DATA_FIELD, COMPUTE_FIELD, METHODS_FIELD)

# PageContext attributes that author methods and host fields may not shadow
RESERVED_ATTRIBUTES = frozenset(
    {
        "data",
        "state",
        "has_derived",
        "torn_down",
        "methods_attached",
        "attach_methods",
        "call",
        "set_data",
        "emit",
    }
)


@dataclass
class Declaration:
    """An author's page configuration, split by concern.

    Attributes:
        data: Initial state (copied, never aliased)
        compute: Optional pure function deriving a state patch
        methods: Author callables, name -> fn(page, *args)
        hooks: Hook-shaped fields, key -> fn(page, *args)
        extra: Every other field, carried through untouched
    """

    data: Mapping[str, Any] | None = None
    compute: ComputeFn | None = None
    methods: dict[str, Callable[..., Any]] = field(default_factory=dict)
    hooks: dict[str, HookFn] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, declaration: Mapping[str, Any]) -> "Declaration":
        """Split a declaration mapping into its parts.

        Only structural checks happen here; callability is checked by the
        component that owns each part.

        Raises:
            DeclarationError: If the declaration or its `methods` is not a mapping
        """
        if not isinstance(declaration, Mapping):
            raise DeclarationError(
                f"Page declaration must be a mapping, got {type(declaration).__name__}"
            )

        methods = declaration.get(METHODS_FIELD)
        if methods is None:
            methods = {}
        elif not isinstance(methods, Mapping):
            raise DeclarationError(
                f"'methods' must be a mapping, got {type(methods).__name__}"
            )

        hooks: dict[str, HookFn] = {}
        extra: dict[str, Any] = {}
        for key, value in declaration.items():
            if key in RESERVED_FIELDS:
                continue
            if parse_hook_field(key) is not None:
                hooks[key] = value
            else:
                extra[key] = value

        return cls(
            data=declaration.get(DATA_FIELD),
            compute=declaration.get(COMPUTE_FIELD),
            methods=dict(methods),
            hooks=hooks,
            extra=extra,
        )
