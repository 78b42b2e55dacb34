"""
Pylint plugin entry point - composition root for the checker plugin.
Lives in infrastructure as it creates the container and wires dependencies.
"""

from pylint.lint import PyLinter

from const_linter.infrastructure.di.container import ConstLintContainer
from const_linter.infrastructure.reporters import ConstSummaryReporter
from const_linter.use_cases.checks.const import ConstChecker


def register(linter: PyLinter) -> None:
    """Register checkers."""
    container = ConstLintContainer.get_instance()
    linter.register_checker(
        ConstChecker(
            linter,
            ast_gateway=container.get_astroid_gateway(),
            comment_gateway=container.get_comment_gateway(),
            config_loader=container.get_config_loader(),
        )
    )
    linter.register_reporter(ConstSummaryReporter)
