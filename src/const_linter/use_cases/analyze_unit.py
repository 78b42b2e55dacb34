"""Two-phase analysis of one compilation unit, independent of the pylint host."""

from dataclasses import dataclass, field

import astroid  # type: ignore[import-untyped]

from const_linter.domain.config import ConfigurationLoader
from const_linter.domain.entities import ConstViolation, DeclarationIndex, module_path
from const_linter.domain.protocols import AstroidProtocol, CommentGatewayProtocol
from const_linter.use_cases.build_index import DeclarationIndexBuilder
from const_linter.use_cases.classify_context import InitializationContextClassifier
from const_linter.use_cases.report_violations import CollectingSink, ViolationReporter
from const_linter.use_cases.scan_mutations import MutationSiteScanner


@dataclass(frozen=True)
class UnitAnalysis:
    """Index and violations of one module."""

    module_name: str
    path: str
    index: DeclarationIndex
    violations: list[ConstViolation] = field(default_factory=list)


class AnalyzeUnitUseCase:
    """Build the declaration index to completion, then scan every store target."""

    def __init__(
        self,
        ast_gateway: AstroidProtocol,
        comment_gateway: CommentGatewayProtocol,
        config_loader: ConfigurationLoader,
    ) -> None:
        self._ast_gateway = ast_gateway
        self._index_builder = DeclarationIndexBuilder(ast_gateway, comment_gateway)
        self._config_loader = config_loader

    def execute(self, module: astroid.nodes.Module) -> UnitAnalysis:
        index = self._index_builder.build(module)
        sink = CollectingSink()
        scanner = MutationSiteScanner(
            self._ast_gateway,
            InitializationContextClassifier(self._ast_gateway, self._config_loader.constructor_prefixes),
            ViolationReporter(sink),
            check_fields=self._config_loader.check_fields,
            check_parameters=self._config_loader.check_parameters,
            index_loader=self._index_builder.build_imported,
        )
        scanner.begin_unit(index, module)
        for target in module.nodes_of_class((astroid.nodes.AssignAttr, astroid.nodes.AssignName)):
            scanner.scan(target)
        return UnitAnalysis(
            module_name=module.name,
            path=module_path(module),
            index=index,
            violations=sink.violations,
        )
