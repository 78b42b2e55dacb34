"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from const_linter.infrastructure.di.container import ConstLintContainer
from const_linter.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = ConstLintContainer.get_instance()

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        astroid_gateway=container.get_astroid_gateway(),
        analyze_unit=container.get_analyze_unit_use_case(),
        reporter=container.get_reporter(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
