"""Reporters: a pylint summary reporter and the terminal output of the CLI."""

import json
from collections import defaultdict
from typing import IO, Any, Optional

import typer
from pylint.message import Message
from pylint.reporters import BaseReporter

from const_linter.domain.constants import MSG_FIELD_ID, MSG_PARAM_ID
from const_linter.domain.entities import ConstViolation, DeclarationIndex

_CONST_MSG_IDS = frozenset({MSG_FIELD_ID, MSG_PARAM_ID})


class ConstSummaryReporter(BaseReporter):
    """
    pylint reporter (`--output-format=const-summary`) that tabulates const
    violations per message and per module.
    """

    name: str = "const-summary"

    RED: str = "\033[38;2;196;30;58m"
    BLUE: str = "\033[38;2;0;123;255m"
    GOLD: str = "\033[38;2;249;166;2m"
    RESET: str = "\033[0m"
    BOLD: str = "\033[1m"

    def __init__(self, output: Optional[Any] = None) -> None:
        super().__init__(output)
        self.messages: list[Message] = []

    def handle_message(self, msg: Message) -> None:
        """Collect const messages; everything else is left to other reporters."""
        if msg.msg_id in _CONST_MSG_IDS:
            self.messages.append(msg)

    def display_reports(self, _layout: Any) -> None:
        if not self.messages:
            print(f"{self.BOLD}{self.GOLD}No const violations detected.{self.RESET}", file=self.out)
            return
        stats, modules = self._collect_stats()
        headers = ["Message", "Symbol", "Total", *modules]
        widths = self._calculate_widths(headers, stats, modules)
        self._print_table(headers, widths, stats, modules)

    def _collect_stats(self) -> tuple[dict[str, dict[str, Any]], list[str]]:
        stats: dict[str, dict[str, Any]] = defaultdict(lambda: {"symbol": "", "total": 0, "modules": defaultdict(int)})
        modules: set[str] = set()
        for msg in self.messages:
            module = msg.module or "unknown"
            modules.add(module)
            entry = stats[msg.msg_id]
            entry["symbol"] = msg.symbol
            entry["total"] += 1
            entry["modules"][module] += 1
        return dict(stats), sorted(modules)

    @staticmethod
    def _calculate_widths(
        headers: list[str], stats: dict[str, dict[str, Any]], modules: list[str]
    ) -> list[int]:
        widths = [len(h) for h in headers]
        for msg_id, entry in stats.items():
            widths[0] = max(widths[0], len(msg_id))
            widths[1] = max(widths[1], len(entry["symbol"]))
            widths[2] = max(widths[2], len(str(entry["total"])))
            for i, module in enumerate(modules):
                widths[3 + i] = max(widths[3 + i], len(str(entry["modules"].get(module, 0))))
        return widths

    def _print_table(
        self, headers: list[str], widths: list[int], stats: dict[str, dict[str, Any]], modules: list[str]
    ) -> None:
        fmt = " | ".join(f"{{:<{w}}}" for w in widths)
        print(file=self.out)
        print(f"{self.BOLD}{self.BLUE}{fmt.format(*headers)}{self.RESET}", file=self.out)
        print(f"{self.BLUE}{'-|-'.join('-' * w for w in widths)}{self.RESET}", file=self.out)

        total = 0
        for msg_id, entry in sorted(stats.items(), key=lambda item: item[1]["total"], reverse=True):
            row = [msg_id, entry["symbol"], entry["total"], *(entry["modules"].get(m, 0) for m in modules)]
            print(fmt.format(*(str(cell) for cell in row)), file=self.out)
            total += entry["total"]

        print(f"{self.BLUE}{'-' * (sum(widths) + 3 * (len(widths) - 1))}{self.RESET}", file=self.out)
        print(f"{self.BOLD}{self.RED}{total} const violation(s) detected.{self.RESET}", file=self.out)

    def _display(self, _layout: Any) -> None:
        """Legacy method for older Pylint versions."""
        self.display_reports(_layout)


class TerminalViolationReporter:
    """Renders CLI results as text lines or JSON."""

    def report_violations(
        self, violations: list[ConstViolation], output_format: str = "text", out: Optional[IO[str]] = None
    ) -> None:
        if output_format == "json":
            typer.echo(json.dumps([v.to_dict() for v in violations], indent=2), file=out)
            return
        for violation in violations:
            typer.echo(f"{violation.location}: {violation.msg_id} {violation.message}", file=out)
        if violations:
            typer.secho(f"{len(violations)} const violation(s) found.", fg=typer.colors.RED, file=out)
        else:
            typer.secho("No const violations found.", fg=typer.colors.GREEN, file=out)

    def report_index(self, path: str, index: DeclarationIndex, out: Optional[IO[str]] = None) -> None:
        """List the declarations discovered in one module."""
        typer.secho(path, bold=True, file=out)
        if index.is_empty():
            typer.echo("  (no const markers)", file=out)
            return
        for key, site in index.fields.items():
            typer.echo(f"  field     {key.owner.name}.{key.field_name}  ({site})", file=out)
        for key, site in index.params.items():
            typer.echo(f"  parameter {key.routine.name}({key.param_name})  ({site})", file=out)
