from typing import TYPE_CHECKING, Any, Optional, cast

from const_linter.domain.config import ConfigurationLoader
from const_linter.infrastructure.gateways.astroid_gateway import AstroidGateway
from const_linter.infrastructure.gateways.comment_gateway import CommentGateway
from const_linter.infrastructure.reporters import TerminalViolationReporter
from const_linter.use_cases.analyze_unit import AnalyzeUnitUseCase

if TYPE_CHECKING:
    from const_linter.domain.protocols import AstroidProtocol, CommentGatewayProtocol


class ConstLintContainer:
    """Dependency Injection Container for the const linter."""

    _instance: Optional["ConstLintContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        config_loader = ConfigurationLoader()
        self.register_singleton("ConfigurationLoader", config_loader)
        astroid_gateway = AstroidGateway()
        comment_gateway = CommentGateway()
        self.register_singleton("AstroidGateway", astroid_gateway)
        self.register_singleton("CommentGateway", comment_gateway)
        self.register_singleton(
            "AnalyzeUnitUseCase",
            AnalyzeUnitUseCase(astroid_gateway, comment_gateway, config_loader),
        )
        self.register_singleton("ViolationReporter", TerminalViolationReporter())

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_astroid_gateway(self) -> "AstroidProtocol":
        return cast("AstroidProtocol", self.get("AstroidGateway"))

    def get_comment_gateway(self) -> "CommentGatewayProtocol":
        return cast("CommentGatewayProtocol", self.get("CommentGateway"))

    def get_analyze_unit_use_case(self) -> AnalyzeUnitUseCase:
        return cast(AnalyzeUnitUseCase, self.get("AnalyzeUnitUseCase"))

    def get_reporter(self) -> TerminalViolationReporter:
        return cast(TerminalViolationReporter, self.get("ViolationReporter"))

    @classmethod
    def get_instance(cls) -> "ConstLintContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = ConstLintContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
