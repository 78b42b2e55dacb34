"""Domain entities for const declarations and violations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import astroid  # type: ignore[import-untyped]

from const_linter.domain.constants import (
    MSG_FIELD_ID,
    MSG_FIELD_SYMBOL,
    MSG_FIELD_TEMPLATE,
    MSG_PARAM_ID,
    MSG_PARAM_SYMBOL,
    MSG_PARAM_TEMPLATE,
)


# astroid.parse stores this placeholder in Module.file
_NO_FILE = "<?>"


def module_path(module: astroid.nodes.Module) -> str:
    """The source file of a module, or its dotted name when it was parsed from a string."""
    path = getattr(module, "file", None)
    if path and path != _NO_FILE:
        return str(path)
    return getattr(module, "name", "") or "<unknown>"


def has_source_file(module: astroid.nodes.Module) -> bool:
    path = getattr(module, "file", None)
    return bool(path) and path != _NO_FILE and str(path).endswith(".py")


@dataclass(frozen=True)
class SourceLocation:
    """Position of a node, rendered as path:line:column."""

    path: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"

    @classmethod
    def of(cls, node: astroid.nodes.NodeNG) -> "SourceLocation":
        """Build the location of an astroid node from its root module."""
        return cls(module_path(node.root()), node.lineno or 0, node.col_offset or 0)


@dataclass(frozen=True)
class RoutineIdentity:
    """
    A routine's name qualified within its compilation unit.

    Routine names are not unique across modules, nor across classes of the
    same module, so the key carries both the unit and the dotted name.
    """

    unit: str
    name: str

    def __str__(self) -> str:
        return f"{self.unit}:{self.name}" if self.unit else self.name


@dataclass(frozen=True)
class ConstField:
    """Key of the immutable-field table. `owner` compares by node identity."""

    owner: astroid.nodes.ClassDef
    field_name: str


@dataclass(frozen=True)
class ConstParam:
    """Key of the immutable-parameter table."""

    routine: RoutineIdentity
    param_name: str


@dataclass
class DeclarationIndex:
    """The two lookup tables of one compilation unit."""

    fields: dict[ConstField, SourceLocation] = field(default_factory=dict)
    params: dict[ConstParam, SourceLocation] = field(default_factory=dict)

    def add_field(self, owner: astroid.nodes.ClassDef, name: str, site: SourceLocation) -> None:
        # Duplicate markers on the same pair: last write wins.
        self.fields[ConstField(owner, name)] = site

    def add_param(self, routine: RoutineIdentity, name: str, site: SourceLocation) -> None:
        self.params[ConstParam(routine, name)] = site

    def field_site(self, owner: astroid.nodes.ClassDef, name: str) -> Optional[SourceLocation]:
        return self.fields.get(ConstField(owner, name))

    def param_site(self, routine: RoutineIdentity, name: str) -> Optional[SourceLocation]:
        return self.params.get(ConstParam(routine, name))

    def owners(self) -> list[astroid.nodes.ClassDef]:
        seen: list[astroid.nodes.ClassDef] = []
        for key in self.fields:
            if all(key.owner is not o for o in seen):
                seen.append(key.owner)
        return seen

    def fields_of(self, owner: astroid.nodes.ClassDef) -> list[str]:
        return [key.field_name for key in self.fields if key.owner is owner]

    def is_empty(self) -> bool:
        return not self.fields and not self.params


class ViolationKind(Enum):
    FIELD = "field"
    PARAMETER = "parameter"


@dataclass(frozen=True)
class ConstViolation:
    """An illegal mutation, tied back to the declaration that made it illegal."""

    kind: ViolationKind
    name: str
    context: str
    location: SourceLocation
    marker_location: SourceLocation
    node: Optional[astroid.nodes.NodeNG] = field(default=None, compare=False, repr=False)

    @property
    def msg_id(self) -> str:
        return MSG_FIELD_ID if self.kind is ViolationKind.FIELD else MSG_PARAM_ID

    @property
    def symbol(self) -> str:
        return MSG_FIELD_SYMBOL if self.kind is ViolationKind.FIELD else MSG_PARAM_SYMBOL

    @property
    def args(self) -> tuple[str, str, str]:
        """pylint message arguments, in the order the message templates expect."""
        if self.kind is ViolationKind.FIELD:
            return (self.context, self.name, str(self.marker_location))
        return (self.name, self.context, str(self.marker_location))

    @property
    def message(self) -> str:
        if self.kind is ViolationKind.FIELD:
            return MSG_FIELD_TEMPLATE % self.args
        return MSG_PARAM_TEMPLATE % self.args

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "context": self.context,
            "path": self.location.path,
            "line": self.location.line,
            "column": self.location.column,
            "marker": str(self.marker_location),
            "message": self.message,
        }
