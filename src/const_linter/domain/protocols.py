from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    import astroid  # type: ignore[import-untyped]

    from const_linter.domain.entities import ConstViolation, RoutineIdentity


class CommentsProtocol(Protocol):
    """Comments of one module, indexed by line."""

    def leading(self, line: int) -> list[str]:
        """Contiguous comment-only lines directly above `line`, top to bottom."""
        ...

    def inline(self, first: int, last: int) -> list[str]:
        """Comments that follow code on lines first..last."""
        ...


class CommentGatewayProtocol(Protocol):
    def comments_for(self, module: "astroid.nodes.Module") -> CommentsProtocol:
        ...


class AstroidProtocol(Protocol):
    def resolve_owners(self, expr: "astroid.nodes.NodeNG") -> list["astroid.nodes.ClassDef"]:
        """Classes the static type of `expr` may resolve to, one indirection unwrapped."""
        ...

    def annotation_owners(
        self, annotation: Optional["astroid.nodes.NodeNG"], routine: Optional["astroid.nodes.FunctionDef"] = None
    ) -> list["astroid.nodes.ClassDef"]:
        ...

    def instantiated_classes(self, routine: "astroid.nodes.FunctionDef") -> list["astroid.nodes.ClassDef"]:
        ...

    def enclosing_routine(self, node: "astroid.nodes.NodeNG") -> Optional["astroid.nodes.FunctionDef"]:
        ...

    def routine_identity(self, routine: "astroid.nodes.FunctionDef") -> "RoutineIdentity":
        ...

    def class_lineage(self, owner: "astroid.nodes.ClassDef") -> list["astroid.nodes.ClassDef"]:
        ...

    def parse_file(self, file_path: str) -> "astroid.nodes.Module":
        ...


class ViolationSinkProtocol(Protocol):
    """Destination of reported violations."""

    def emit(self, violation: "ConstViolation") -> None:
        ...
