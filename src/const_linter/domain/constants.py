"""Marker tokens, message ids and constructor naming conventions."""

CONST_MARKER: str = "+const"
CONST_LIST_OPEN: str = "+const:["
CONST_LIST_CLOSE: str = "]"

MSG_FIELD_ID: str = "W9801"
MSG_FIELD_SYMBOL: str = "const-field-assignment"
MSG_PARAM_ID: str = "W9802"
MSG_PARAM_SYMBOL: str = "const-parameter-assignment"

# Compared against the routine name with leading underscores stripped and
# lowercased, so "__init__" matches "init" and "_make_copy" matches "make".
DEFAULT_CONSTRUCTOR_PREFIXES: tuple[str, ...] = (
    "init",
    "new",
    "create",
    "make",
    "post_init",
    "setstate",
)

# Methods whose `self.<attr> = ...` statements declare instance fields.
FIELD_DECLARING_METHODS: frozenset[str] = frozenset({"__init__", "__new__", "__post_init__"})

SELF_TYPE_QNAMES: frozenset[str] = frozenset({"typing.Self", "typing_extensions.Self"})

# Subscripted annotations unwrapped one level when matching an owner.
WRAPPER_ANNOTATIONS: frozenset[str] = frozenset(
    {"Optional", "Union", "tuple", "Tuple", "type", "Type", "Final", "ClassVar", "Annotated"}
)

MSG_FIELD_TEMPLATE: str = "Assignment to const field %s.%s (marked with # +const at %s)"
MSG_PARAM_TEMPLATE: str = "Assignment to const parameter %s of %s (marked with # +const at %s)"
