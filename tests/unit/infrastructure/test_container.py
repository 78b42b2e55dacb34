"""Unit tests for ConstLintContainer."""

import pytest

from const_linter.domain.config import ConfigurationLoader
from const_linter.infrastructure.di.container import ConstLintContainer
from const_linter.infrastructure.gateways.astroid_gateway import AstroidGateway
from const_linter.infrastructure.gateways.comment_gateway import CommentGateway
from const_linter.infrastructure.reporters import TerminalViolationReporter
from const_linter.use_cases.analyze_unit import AnalyzeUnitUseCase


class TestConstLintContainer:
    def test_default_registrations(self) -> None:
        container = ConstLintContainer()
        assert container.get_config_loader() is ConfigurationLoader()
        assert isinstance(container.get_astroid_gateway(), AstroidGateway)
        assert isinstance(container.get_comment_gateway(), CommentGateway)
        assert isinstance(container.get_analyze_unit_use_case(), AnalyzeUnitUseCase)
        assert isinstance(container.get_reporter(), TerminalViolationReporter)

    def test_get_instance_is_shared_until_reset(self) -> None:
        first = ConstLintContainer.get_instance()
        assert ConstLintContainer.get_instance() is first
        ConstLintContainer.reset()
        assert ConstLintContainer.get_instance() is not first

    def test_register_singleton_overrides(self) -> None:
        container = ConstLintContainer()
        replacement = object()
        container.register_singleton("AstroidGateway", replacement)
        assert container.get_astroid_gateway() is replacement

    def test_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="not registered"):
            ConstLintContainer().get("Nope")
