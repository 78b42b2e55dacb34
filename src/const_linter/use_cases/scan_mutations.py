"""Mutation site scanner: the second analysis phase."""

from collections.abc import Callable
from typing import Optional

import astroid  # type: ignore[import-untyped]

from const_linter.domain.entities import ConstViolation, DeclarationIndex, has_source_file
from const_linter.domain.protocols import AstroidProtocol
from const_linter.use_cases.classify_context import InitializationContextClassifier
from const_linter.use_cases.report_violations import ViolationReporter

IndexLoader = Callable[[astroid.nodes.Module], DeclarationIndex]


class MutationSiteScanner:
    """
    Routes store targets to the field-write and parameter-write checks.

    `begin_unit` must be called with the complete index of the unit before
    the first `scan`. Fields of classes defined in other modules are looked
    up through `index_loader`, which indexes those modules on demand.
    """

    def __init__(
        self,
        ast_gateway: AstroidProtocol,
        classifier: InitializationContextClassifier,
        reporter: ViolationReporter,
        check_fields: bool = True,
        check_parameters: bool = True,
        index_loader: Optional[IndexLoader] = None,
    ) -> None:
        self._ast_gateway = ast_gateway
        self._classifier = classifier
        self._reporter = reporter
        self._check_fields = check_fields
        self._check_parameters = check_parameters
        self._index_loader = index_loader
        self._index = DeclarationIndex()
        self._unit: Optional[astroid.nodes.Module] = None

    def begin_unit(self, index: DeclarationIndex, module: Optional[astroid.nodes.Module] = None) -> None:
        self._index = index
        self._unit = module
        self._classifier.reset()

    def scan(self, target: astroid.nodes.NodeNG) -> Optional[ConstViolation]:
        if isinstance(target, astroid.nodes.AssignAttr):
            return self.check_field_write(target)
        if isinstance(target, astroid.nodes.AssignName):
            return self.check_param_write(target)
        return None

    def check_field_write(self, target: astroid.nodes.AssignAttr) -> Optional[ConstViolation]:
        if not self._check_fields:
            return None
        if not self._index.fields and self._index_loader is None:
            return None
        routine = self._ast_gateway.enclosing_routine(target)
        for owner in self._ast_gateway.resolve_owners(target.expr):
            for declaring in self._ast_gateway.class_lineage(owner):
                index = self._index_for(declaring)
                site = index.field_site(declaring, target.attrname) if index is not None else None
                if site is None:
                    continue
                if self._in_initialization_context(routine, owner, declaring):
                    # remaining owners are still checked
                    break
                return self._reporter.report_field(target, declaring, site)
        return None

    def _index_for(self, declaring: astroid.nodes.ClassDef) -> Optional[DeclarationIndex]:
        root = declaring.root()
        if self._unit is None or root is self._unit or self._index_loader is None:
            return self._index
        if not has_source_file(root):
            return None
        return self._index_loader(root)

    def _in_initialization_context(
        self,
        routine: Optional[astroid.nodes.FunctionDef],
        owner: astroid.nodes.ClassDef,
        declaring: astroid.nodes.ClassDef,
    ) -> bool:
        if self._classifier.is_initialization_context(routine, owner):
            return True
        return declaring is not owner and self._classifier.is_initialization_context(routine, declaring)

    def check_param_write(self, target: astroid.nodes.AssignName) -> Optional[ConstViolation]:
        if not self._check_parameters or not self._index.params:
            return None
        if self.is_declaration(target):
            return None
        routine = target.scope()
        if not isinstance(routine, astroid.nodes.FunctionDef) or target.name not in routine.argnames():
            return None
        identity = self._ast_gateway.routine_identity(routine)
        site = self._index.param_site(identity, target.name)
        if site is None:
            return None
        return self._reporter.report_parameter(target, identity, site)

    @staticmethod
    def is_declaration(target: astroid.nodes.AssignName) -> bool:
        """Parameter declarations and bare annotations bind nothing new to check."""
        parent = target.parent
        if isinstance(parent, astroid.nodes.Arguments):
            return True
        return isinstance(parent, astroid.nodes.AnnAssign) and parent.value is None
