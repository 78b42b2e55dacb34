"""Const checks (W9801, W9802)."""

from typing import TYPE_CHECKING, Optional

import astroid  # type: ignore[import-untyped]
from pylint.checkers import BaseChecker

from const_linter.domain.config import ConfigurationLoader
from const_linter.domain.constants import (
    MSG_FIELD_ID,
    MSG_FIELD_SYMBOL,
    MSG_FIELD_TEMPLATE,
    MSG_PARAM_ID,
    MSG_PARAM_SYMBOL,
    MSG_PARAM_TEMPLATE,
)
from const_linter.domain.entities import ConstViolation
from const_linter.domain.protocols import AstroidProtocol, CommentGatewayProtocol
from const_linter.use_cases.build_index import DeclarationIndexBuilder
from const_linter.use_cases.classify_context import InitializationContextClassifier
from const_linter.use_cases.report_violations import ViolationReporter
from const_linter.use_cases.scan_mutations import MutationSiteScanner

if TYPE_CHECKING:
    from pylint.lint import PyLinter


class ConstChecker(BaseChecker):
    """
    W9801/W9802: writes to fields and parameters marked `# +const`.

    `visit_module` runs before any child node is visited, so the whole
    declaration index of the module is built before the first store target
    reaches `visit_assignattr` or `visit_assignname`.
    """

    name: str = "const"
    msgs = {
        MSG_FIELD_ID: (
            MSG_FIELD_TEMPLATE,
            MSG_FIELD_SYMBOL,
            "A field marked '# +const' may only be assigned in an initialization context "
            "of its class: a constructor-named method, a routine returning the class, "
            "or a routine that instantiates the class.",
        ),
        MSG_PARAM_ID: (
            MSG_PARAM_TEMPLATE,
            MSG_PARAM_SYMBOL,
            "A parameter marked with '# +const' or '# +const:[...]' on its routine "
            "must not be reassigned anywhere in the routine body.",
        ),
    }

    def __init__(
        self,
        linter: "PyLinter",
        ast_gateway: Optional[AstroidProtocol] = None,
        comment_gateway: Optional[CommentGatewayProtocol] = None,
        config_loader: Optional[ConfigurationLoader] = None,
    ) -> None:
        super().__init__(linter)
        if ast_gateway is None or comment_gateway is None:
            # JUSTIFICATION: pylint.testutils builds checkers from the linter alone
            from const_linter.infrastructure.di.container import ConstLintContainer

            container = ConstLintContainer.get_instance()
            ast_gateway = ast_gateway or container.get_astroid_gateway()
            comment_gateway = comment_gateway or container.get_comment_gateway()
        self.config_loader = config_loader or ConfigurationLoader()
        self._index_builder = DeclarationIndexBuilder(ast_gateway, comment_gateway)
        self._scanner = MutationSiteScanner(
            ast_gateway,
            InitializationContextClassifier(ast_gateway, self.config_loader.constructor_prefixes),
            ViolationReporter(self),
            check_fields=self.config_loader.check_fields,
            check_parameters=self.config_loader.check_parameters,
            index_loader=self._index_builder.build_imported,
        )

    def emit(self, violation: ConstViolation) -> None:
        """Sink for the violation reporter: one pylint message per violation."""
        self.add_message(violation.symbol, node=violation.node, args=violation.args)

    def visit_module(self, node: astroid.nodes.Module) -> None:
        """Phase 1: index every const declaration of the module."""
        self._scanner.begin_unit(self._index_builder.build(node), node)

    def visit_assignattr(self, node: astroid.nodes.AssignAttr) -> None:
        """Phase 2: `receiver.field = ...`."""
        self._scanner.check_field_write(node)

    def visit_assignname(self, node: astroid.nodes.AssignName) -> None:
        """Phase 2: `param = ...`."""
        self._scanner.check_param_write(node)
