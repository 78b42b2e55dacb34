"""Run a checker over a snippet without a full PyLinter."""

import astroid  # type: ignore[import-untyped]


class RecordingLinter:
    """Option registration and add_message, the parts of PyLinter a BaseChecker touches."""

    def __init__(self) -> None:
        self.symbols: list[str] = []

    def _register_options_provider(self, provider) -> None:
        pass

    def add_message(self, msg_id, *args, **kwargs) -> None:
        self.symbols.append(msg_id)


def _visit(checker, node) -> None:
    handler = getattr(checker, f"visit_{node.__class__.__name__.lower()}", None)
    if handler is not None:
        handler(node)
    for child in node.get_children():
        _visit(checker, child)


def run_checker(checker_cls, code: str, filename: str = "test.py", module_name: str = "test_module") -> list[str]:
    """Symbols emitted by a fresh `checker_cls` over `code`, in visiting order."""
    linter = RecordingLinter()
    checker = checker_cls(linter)
    tree = astroid.parse(code, module_name=module_name)
    tree.file = filename
    _visit(checker, tree)
    return linter.symbols
