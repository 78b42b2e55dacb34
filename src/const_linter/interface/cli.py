"""CLI entry points for constlint - Thin Controller using Typer."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import astroid  # type: ignore[import-untyped]
import typer

from const_linter.domain.config import ConfigurationLoader
from const_linter.domain.entities import ConstViolation
from const_linter.domain.protocols import AstroidProtocol
from const_linter.infrastructure.reporters import TerminalViolationReporter
from const_linter.use_cases.analyze_unit import AnalyzeUnitUseCase, UnitAnalysis

logger = logging.getLogger(__name__)

EXIT_CLEAN: int = 0
EXIT_VIOLATIONS: int = 1
EXIT_UNPARSABLE: int = 2

_PATHS_ARGUMENT = typer.Argument(..., help="Python files or directories to analyze")
_SKIPPED_DIRS = frozenset({"__pycache__", "node_modules"})


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    astroid_gateway: AstroidProtocol
    analyze_unit: AnalyzeUnitUseCase
    reporter: TerminalViolationReporter


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def iter_python_files(paths: list[Path]) -> Iterator[Path]:
        """Expand directories to the .py files below them, skipping hidden and cache dirs."""
        for path in paths:
            if path.is_dir():
                for candidate in sorted(path.rglob("*.py")):
                    relative = candidate.relative_to(path).parts[:-1]
                    if any(part.startswith(".") or part in _SKIPPED_DIRS for part in relative):
                        continue
                    yield candidate
            else:
                yield path

    @staticmethod
    def analyze_paths(deps: CLIDependencies, paths: list[Path]) -> tuple[list[UnitAnalysis], list[str]]:
        """Analyze every unit; unparsable files are collected, not fatal."""
        analyses: list[UnitAnalysis] = []
        failures: list[str] = []
        for path in CLIAppFactory.iter_python_files(paths):
            try:
                module = deps.astroid_gateway.parse_file(str(path))
            except astroid.AstroidBuildingError as exc:
                logger.debug("Cannot parse %s", path, exc_info=True)
                failures.append(f"{path}: {exc}")
                continue
            analyses.append(deps.analyze_unit.execute(module))
        return analyses, failures

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        app = typer.Typer(
            name="constlint",
            help="Flag writes to fields and parameters marked with # +const.",
            add_completion=False,
        )

        @app.callback()
        def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
            logging.basicConfig(
                level=logging.DEBUG if verbose else logging.WARNING,
                format="%(levelname)s %(name)s: %(message)s",
            )

        @app.command()
        def check(
            paths: list[Path] = _PATHS_ARGUMENT,
            output_format: str = typer.Option("text", "--format", "-f", help="Output format: text or json"),
        ) -> None:
            """Report assignments to const fields and parameters."""
            if output_format not in ("text", "json"):
                raise typer.BadParameter("format must be 'text' or 'json'", param_hint="--format")
            analyses, failures = CLIAppFactory.analyze_paths(deps, paths)
            violations: list[ConstViolation] = [v for analysis in analyses for v in analysis.violations]
            deps.reporter.report_violations(violations, output_format=output_format)
            for failure in failures:
                typer.secho(f"error: {failure}", fg=typer.colors.RED, err=True)
            if failures:
                raise typer.Exit(code=EXIT_UNPARSABLE)
            raise typer.Exit(code=EXIT_VIOLATIONS if violations else EXIT_CLEAN)

        @app.command()
        def markers(paths: list[Path] = _PATHS_ARGUMENT) -> None:
            """List the const declarations discovered in each module."""
            analyses, failures = CLIAppFactory.analyze_paths(deps, paths)
            for analysis in analyses:
                deps.reporter.report_index(analysis.path, analysis.index)
            for failure in failures:
                typer.secho(f"error: {failure}", fg=typer.colors.RED, err=True)
            if failures:
                raise typer.Exit(code=EXIT_UNPARSABLE)

        return app


def create_app(deps: CLIDependencies) -> typer.Typer:
    """Module-level alias for CLIAppFactory.create_app."""
    return CLIAppFactory.create_app(deps)
