"""Declaration index builder: the first of the two analysis phases."""

import logging

import astroid  # type: ignore[import-untyped]

from const_linter.domain.constants import FIELD_DECLARING_METHODS
from const_linter.domain.entities import DeclarationIndex, SourceLocation
from const_linter.domain.markers import has_field_marker, parse_param_marker
from const_linter.domain.protocols import AstroidProtocol, CommentGatewayProtocol, CommentsProtocol

logger = logging.getLogger(__name__)


class DeclarationIndexBuilder:
    """
    Scans a module once and records every `+const` field and parameter.

    The index must be complete before any mutation site is checked, because a
    write may precede the declaration it violates in source order.
    """

    def __init__(self, ast_gateway: AstroidProtocol, comment_gateway: CommentGatewayProtocol) -> None:
        self._ast_gateway = ast_gateway
        self._comment_gateway = comment_gateway
        self._imported: dict[str, tuple[astroid.nodes.Module, DeclarationIndex]] = {}

    def build(self, module: astroid.nodes.Module) -> DeclarationIndex:
        index = DeclarationIndex()
        comments = self._comment_gateway.comments_for(module)
        for cls in module.nodes_of_class(astroid.nodes.ClassDef):
            self._index_class(cls, comments, index)
        for routine in module.nodes_of_class(astroid.nodes.FunctionDef):
            self._index_routine(routine, comments, index)
        logger.debug(
            "Indexed %s: %d const fields, %d const parameters",
            module.name or "<string>",
            len(index.fields),
            len(index.params),
        )
        return index

    def build_imported(self, module: astroid.nodes.Module) -> DeclarationIndex:
        """Index of a module the current unit refers to; built once per run and reused."""
        cached = self._imported.get(module.name)
        if cached is not None and cached[0] is module:
            return cached[1]
        index = self.build(module)
        self._imported[module.name] = (module, index)
        return index

    # Fields

    def _index_class(
        self, cls: astroid.nodes.ClassDef, comments: CommentsProtocol, index: DeclarationIndex
    ) -> None:
        for stmt in cls.body:
            if isinstance(stmt, (astroid.nodes.Assign, astroid.nodes.AnnAssign)):
                if self._is_marked(stmt, comments):
                    for target in self._class_body_targets(stmt):
                        self._add_field(cls, target.name, target, index)
            elif isinstance(stmt, astroid.nodes.FunctionDef) and stmt.name in FIELD_DECLARING_METHODS:
                self._index_initializer(cls, stmt, comments, index)

    @staticmethod
    def _class_body_targets(
        stmt: astroid.nodes.Assign | astroid.nodes.AnnAssign,
    ) -> list[astroid.nodes.AssignName]:
        targets = stmt.targets if isinstance(stmt, astroid.nodes.Assign) else [stmt.target]
        names: list[astroid.nodes.AssignName] = []
        for target in targets:
            names += target.nodes_of_class(astroid.nodes.AssignName)
        return names

    def _index_initializer(
        self,
        cls: astroid.nodes.ClassDef,
        method: astroid.nodes.FunctionDef,
        comments: CommentsProtocol,
        index: DeclarationIndex,
    ) -> None:
        """`self.<attr> = ...  # +const` inside __init__ and friends declares a field."""
        for target in method.nodes_of_class(astroid.nodes.AssignAttr):
            if target.frame() is not method:
                continue
            if not self._is_instance_receiver(target, cls, method):
                continue
            if self._is_marked(target.statement(), comments):
                self._add_field(cls, target.attrname, target, index)

    def _is_instance_receiver(
        self, target: astroid.nodes.AssignAttr, cls: astroid.nodes.ClassDef, method: astroid.nodes.FunctionDef
    ) -> bool:
        receiver = target.expr
        if not isinstance(receiver, astroid.nodes.Name):
            return False
        positional = method.args.posonlyargs + (method.args.args or [])
        if method.name != "__new__" and positional and receiver.name == positional[0].name:
            return True
        return any(owner is cls for owner in self._ast_gateway.resolve_owners(receiver))

    @staticmethod
    def _is_marked(stmt: astroid.nodes.NodeNG, comments: CommentsProtocol) -> bool:
        first, last = stmt.fromlineno, stmt.tolineno
        return has_field_marker(comments.leading(first)) or has_field_marker(comments.inline(first, last))

    @staticmethod
    def _add_field(
        cls: astroid.nodes.ClassDef, name: str, target: astroid.nodes.NodeNG, index: DeclarationIndex
    ) -> None:
        site = SourceLocation.of(target)
        index.add_field(cls, name, site)
        logger.debug("const field %s.%s declared at %s", cls.name, name, site)

    # Parameters

    def _index_routine(
        self, routine: astroid.nodes.FunctionDef, comments: CommentsProtocol, index: DeclarationIndex
    ) -> None:
        marker = parse_param_marker(self._routine_doc_lines(routine, comments))
        if marker is None:
            return
        declared = routine.argnames()
        identity = self._ast_gateway.routine_identity(routine)
        site = SourceLocation.of(routine)
        for name in marker.expand(declared):
            if name not in declared:
                logger.debug("const marker of %s names unknown parameter %r", identity, name)
            index.add_param(identity, name, site)
            logger.debug("const parameter %s of %s declared at %s", name, identity, site)

    @staticmethod
    def _routine_doc_lines(routine: astroid.nodes.FunctionDef, comments: CommentsProtocol) -> list[str]:
        """Leading comments (above decorators and above `def`), then docstring lines."""
        lines: list[str] = []
        if routine.decorators is not None:
            first_decorator = min(d.fromlineno for d in routine.decorators.nodes)
            lines += comments.leading(first_decorator)
        lines += comments.leading(routine.lineno)
        doc_node = routine.doc_node
        if doc_node is not None and isinstance(doc_node.value, str):
            lines += doc_node.value.splitlines()
        return lines
