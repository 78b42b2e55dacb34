import logging
import re
from typing import Optional

import astroid  # type: ignore[import-untyped]

from const_linter.domain.constants import SELF_TYPE_QNAMES, WRAPPER_ANNOTATIONS
from const_linter.domain.entities import RoutineIdentity
from const_linter.domain.protocols import AstroidProtocol

logger = logging.getLogger(__name__)

_DOTTED_NAME_RE = re.compile(r"[A-Za-z_][\w.]*")
_SELF_NAMES = frozenset(qname.rsplit(".", 1)[-1] for qname in SELF_TYPE_QNAMES)


def _dedupe(classes: list[astroid.nodes.ClassDef]) -> list[astroid.nodes.ClassDef]:
    unique: list[astroid.nodes.ClassDef] = []
    for cls in classes:
        if all(cls is not seen for seen in unique):
            unique.append(cls)
    return unique


class AstroidGateway(AstroidProtocol):
    """AST intelligence gateway: static types, annotations and instantiations via astroid."""

    def parse_file(self, file_path: str) -> astroid.nodes.Module:
        """Parse a file into an astroid Module. Raises astroid.AstroidBuildingError."""
        return astroid.MANAGER.ast_from_file(file_path)

    # Receivers

    def resolve_owners(self, expr: astroid.nodes.NodeNG) -> list[astroid.nodes.ClassDef]:
        """
        Classes a receiver expression may be an instance of.

        Combines astroid inference with the declared annotation of the
        receiver's binding, since astroid does not infer parameters from their
        annotations. A class object counts as its own owner (one level of
        indirection: `Person.name = ...`, `cls.name = ...`).
        """
        owners = self._inferred_owners(expr) + self._declared_owners(expr)
        if not owners:
            logger.debug("Unresolved receiver %s at line %s", expr.as_string(), expr.lineno)
        return _dedupe(owners)

    def _inferred_owners(self, expr: astroid.nodes.NodeNG) -> list[astroid.nodes.ClassDef]:
        owners: list[astroid.nodes.ClassDef] = []
        try:
            inferred = list(expr.infer())
        except astroid.AstroidError:
            return owners
        for value in inferred:
            if isinstance(value, astroid.nodes.ClassDef):
                owners.append(value)
            elif isinstance(value, astroid.bases.Instance):
                proxied = getattr(value, "_proxied", None)
                if isinstance(proxied, astroid.nodes.ClassDef):
                    owners.append(proxied)
        return owners

    def _declared_owners(self, expr: astroid.nodes.NodeNG) -> list[astroid.nodes.ClassDef]:
        if isinstance(expr, astroid.nodes.Name):
            return self._name_declared_owners(expr)
        if isinstance(expr, astroid.nodes.Attribute):
            return self._attribute_declared_owners(expr)
        return []

    def _name_declared_owners(self, expr: astroid.nodes.Name) -> list[astroid.nodes.ClassDef]:
        try:
            _, assignments = expr.lookup(expr.name)
        except astroid.AstroidError:
            return []
        owners: list[astroid.nodes.ClassDef] = []
        for assign in assignments:
            if not isinstance(assign, astroid.nodes.AssignName):
                continue
            parent = assign.parent
            if isinstance(parent, astroid.nodes.Arguments):
                owners += self.annotation_owners(self.parameter_annotation(parent, assign.name))
            elif isinstance(parent, astroid.nodes.AnnAssign):
                owners += self.annotation_owners(parent.annotation)
        return owners

    def _attribute_declared_owners(self, expr: astroid.nodes.Attribute) -> list[astroid.nodes.ClassDef]:
        owners: list[astroid.nodes.ClassDef] = []
        for holder in self.resolve_owners(expr.expr):
            for decl in holder.locals.get(expr.attrname, []) + holder.instance_attrs.get(expr.attrname, []):
                if isinstance(decl.parent, astroid.nodes.AnnAssign):
                    owners += self.annotation_owners(decl.parent.annotation)
        return owners

    @staticmethod
    def parameter_annotation(arguments: astroid.nodes.Arguments, name: str) -> Optional[astroid.nodes.NodeNG]:
        """The annotation of parameter `name`, if it has one."""
        groups = (
            (arguments.posonlyargs, arguments.posonlyargs_annotations),
            (arguments.args or [], arguments.annotations),
            (arguments.kwonlyargs, arguments.kwonlyargs_annotations),
        )
        for params, annotations in groups:
            for param, annotation in zip(params, annotations):
                if param.name == name:
                    return annotation
        if name == arguments.vararg:
            return arguments.varargannotation
        if name == arguments.kwarg:
            return arguments.kwargannotation
        return None

    # Annotations

    def annotation_owners(
        self,
        annotation: Optional[astroid.nodes.NodeNG],
        routine: Optional[astroid.nodes.FunctionDef] = None,
    ) -> list[astroid.nodes.ClassDef]:
        """Classes an annotation names, with one wrapper level unwrapped."""
        if annotation is None:
            return []
        owners: list[astroid.nodes.ClassDef] = []
        for part in self._unwrap_annotation(annotation):
            owners += self._plain_annotation_owners(part, routine)
        return _dedupe(owners)

    def _unwrap_annotation(self, annotation: astroid.nodes.NodeNG) -> list[astroid.nodes.NodeNG]:
        if isinstance(annotation, astroid.nodes.BinOp) and annotation.op == "|":
            return self._union_members(annotation)
        if isinstance(annotation, astroid.nodes.Subscript):
            wrapper = annotation.value
            name = getattr(wrapper, "name", None) or getattr(wrapper, "attrname", None)
            if name in WRAPPER_ANNOTATIONS:
                members = annotation.slice
                elts = list(members.elts) if isinstance(members, astroid.nodes.Tuple) else [members]
                return elts[:1] if name == "Annotated" else elts
        return [annotation]

    def _union_members(self, node: astroid.nodes.NodeNG) -> list[astroid.nodes.NodeNG]:
        if isinstance(node, astroid.nodes.BinOp) and node.op == "|":
            return self._union_members(node.left) + self._union_members(node.right)
        return [node]

    def _plain_annotation_owners(
        self, node: astroid.nodes.NodeNG, routine: Optional[astroid.nodes.FunctionDef]
    ) -> list[astroid.nodes.ClassDef]:
        if isinstance(node, astroid.nodes.Const):
            if isinstance(node.value, str):
                return self._forward_ref_owners(node, node.value, routine)
            return []
        if self._is_self_type(node) and routine is not None:
            return [routine.parent] if isinstance(routine.parent, astroid.nodes.ClassDef) else []
        try:
            return [value for value in node.infer() if isinstance(value, astroid.nodes.ClassDef)]
        except astroid.AstroidError:
            return []

    @staticmethod
    def _is_self_type(node: astroid.nodes.NodeNG) -> bool:
        text = node.as_string()
        return text in SELF_TYPE_QNAMES or text in _SELF_NAMES

    def _forward_ref_owners(
        self, anchor: astroid.nodes.NodeNG, text: str, routine: Optional[astroid.nodes.FunctionDef]
    ) -> list[astroid.nodes.ClassDef]:
        owners: list[astroid.nodes.ClassDef] = []
        for dotted in _DOTTED_NAME_RE.findall(text):
            if dotted in _SELF_NAMES or dotted in SELF_TYPE_QNAMES:
                if routine is not None and isinstance(routine.parent, astroid.nodes.ClassDef):
                    owners.append(routine.parent)
                continue
            owners += self.resolve_dotted_name(anchor, dotted)
        return owners

    def resolve_dotted_name(self, anchor: astroid.nodes.NodeNG, dotted: str) -> list[astroid.nodes.ClassDef]:
        """Resolve `Name` or `pkg.mod.Name` from the scope of `anchor` to class definitions."""
        head, *rest = dotted.split(".")
        values: list[astroid.nodes.NodeNG] = []
        for stmt in self._scope_bindings(anchor, head):
            try:
                if isinstance(stmt, astroid.nodes.ClassDef):
                    values.append(stmt)
                elif isinstance(stmt, astroid.nodes.ImportFrom):
                    values += stmt.do_import_module().getattr(stmt.real_name(head))
                elif isinstance(stmt, astroid.nodes.Import):
                    values.append(stmt.do_import_module(stmt.real_name(head)))
                elif isinstance(stmt, astroid.nodes.AssignName):
                    values += [v for v in stmt.infer() if isinstance(v, astroid.nodes.ClassDef)]
            except astroid.AstroidError:
                continue
        for attr in rest:
            next_values: list[astroid.nodes.NodeNG] = []
            for value in values:
                if isinstance(value, (astroid.nodes.Module, astroid.nodes.ClassDef)):
                    try:
                        next_values += value.getattr(attr)
                    except astroid.AstroidError:
                        continue
            values = next_values
        return [value for value in values if isinstance(value, astroid.nodes.ClassDef)]

    @staticmethod
    def _scope_bindings(anchor: astroid.nodes.NodeNG, name: str) -> list[astroid.nodes.NodeNG]:
        """
        Bindings of `name` seen from the innermost scope around `anchor` outwards.

        Annotation nodes are looked up by walking the scope chain directly:
        `NodeNG.lookup` on a return or parameter annotation resolves in the
        wrong frame and finds nothing.
        """
        scope: Optional[astroid.nodes.NodeNG] = anchor.scope()
        while scope is not None:
            bindings = scope.locals.get(name)
            if bindings:
                return list(bindings)
            scope = scope.parent.scope() if scope.parent is not None else None
        return []

    # Routines

    def instantiated_classes(self, routine: astroid.nodes.FunctionDef) -> list[astroid.nodes.ClassDef]:
        """Classes called anywhere in the routine body, regardless of reachability."""
        classes: list[astroid.nodes.ClassDef] = []
        for stmt in routine.body:
            for call in stmt.nodes_of_class(astroid.nodes.Call):
                try:
                    classes += [v for v in call.func.infer() if isinstance(v, astroid.nodes.ClassDef)]
                except astroid.AstroidError:
                    logger.debug("Uninferable callee %s at line %s", call.func.as_string(), call.lineno)
        return _dedupe(classes)

    @staticmethod
    def enclosing_routine(node: astroid.nodes.NodeNG) -> Optional[astroid.nodes.FunctionDef]:
        """
        The function or method a write belongs to; None at module or class level.

        Lambdas and nested functions are closures of the routine that defines
        them, so the walk stops at the first function whose parent is a class
        body or the module.
        """
        frame = node.frame()
        while isinstance(frame, astroid.nodes.Lambda):
            parent = frame.parent
            if isinstance(frame, astroid.nodes.FunctionDef) and isinstance(
                parent, (astroid.nodes.ClassDef, astroid.nodes.Module)
            ):
                break
            frame = parent.frame()
        return frame if isinstance(frame, astroid.nodes.FunctionDef) else None

    @staticmethod
    def routine_identity(routine: astroid.nodes.FunctionDef) -> RoutineIdentity:
        """Unit name plus the routine's dotted name within the unit (`Person.set_name`)."""
        parts: list[str] = []
        node: Optional[astroid.nodes.NodeNG] = routine
        while node is not None and not isinstance(node, astroid.nodes.Module):
            if isinstance(node, (astroid.nodes.ClassDef, astroid.nodes.FunctionDef)):
                parts.append(node.name)
            node = node.parent
        return RoutineIdentity(unit=routine.root().name, name=".".join(reversed(parts)))

    @staticmethod
    def class_lineage(owner: astroid.nodes.ClassDef) -> list[astroid.nodes.ClassDef]:
        """The class followed by its ancestors; falls back to the class alone on bad hierarchies."""
        try:
            return [owner, *owner.ancestors()]
        except astroid.AstroidError:
            return [owner]
