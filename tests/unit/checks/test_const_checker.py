"""Unit tests for ConstChecker (W9801, W9802)."""

import textwrap
import unittest
from unittest.mock import MagicMock

import astroid  # type: ignore[import-untyped]
from pylint.testutils import CheckerTestCase as PylintCheckerTestCase
from pylint.testutils import MessageTest

from const_linter.domain.config import ConfigurationLoader
from const_linter.domain.entities import ConstViolation, SourceLocation, ViolationKind
from const_linter.infrastructure.gateways.astroid_gateway import AstroidGateway
from const_linter.infrastructure.gateways.comment_gateway import CommentGateway
from const_linter.use_cases.checks.const import ConstChecker
from tests.linter_test_utils import run_checker
from tests.unit.checker_test_utils import CheckerTestCase


class TestConstCheckerMessages(PylintCheckerTestCase):
    CHECKER_CLASS = ConstChecker

    def test_field_assignment_outside_constructor(self) -> None:
        module = astroid.parse(
            textwrap.dedent(
                """
                class Person:
                    name: str  # +const

                    def __init__(self, name):
                        self.name = name

                    def rename(self, name):
                        self.name = name
                """
            ),
            module_name="people",
        )
        target = list(module.nodes_of_class(astroid.nodes.AssignAttr))[-1]

        with self.assertAddsMessages(
            MessageTest(
                msg_id="const-field-assignment",
                node=target,
                args=("Person", "name", "people:3:4"),
            ),
            ignore_position=True,
        ):
            self.walk(module)

    def test_parameter_assignment(self) -> None:
        module = astroid.parse(
            textwrap.dedent(
                """
                # +const:[limit]
                def clamp(value, limit):
                    value = min(value, limit)
                    limit = 0
                    return value
                """
            ),
            module_name="params",
        )
        target = [n for n in module.nodes_of_class(astroid.nodes.AssignName) if n.name == "limit"][-1]

        with self.assertAddsMessages(
            MessageTest(
                msg_id="const-parameter-assignment",
                node=target,
                args=("limit", "clamp", "params:3:0"),
            ),
            ignore_position=True,
        ):
            self.walk(module)

    def test_unmarked_code_is_silent(self) -> None:
        module = astroid.parse(
            "class A:\n    x = 1\n\n    def set(self):\n        self.x = 2\n",
            module_name="plain",
        )
        with self.assertNoMessages():
            self.walk(module)


class TestConstCheckerWiring(unittest.TestCase, CheckerTestCase):
    def setUp(self) -> None:
        self.linter = MagicMock()
        self.config_loader = ConfigurationLoader()
        self.checker = ConstChecker(
            self.linter,
            ast_gateway=AstroidGateway(),
            comment_gateway=CommentGateway(),
            config_loader=self.config_loader,
        )

    def test_emit_forwards_symbol_node_and_args(self) -> None:
        node = MagicMock()
        violation = ConstViolation(
            kind=ViolationKind.PARAMETER,
            name="x",
            context="f",
            location=SourceLocation("m", 2, 4),
            marker_location=SourceLocation("m", 1, 0),
            node=node,
        )
        self.checker.emit(violation)
        self.assertAddsMessage(self.checker, "const-parameter-assignment", args=("x", "f", "m:1:0"))

    def test_configured_switches_are_honoured(self) -> None:
        self.config_loader.set_config({"check-parameters": False})
        checker = ConstChecker(
            self.linter,
            ast_gateway=AstroidGateway(),
            comment_gateway=CommentGateway(),
            config_loader=self.config_loader,
        )
        module = astroid.parse("# +const\ndef f(x):\n    x = 1\n", module_name="m")
        checker.visit_module(module)
        checker.visit_assignname(module.body[0].body[0].targets[0])
        self.assertNoMessages(checker)

    def test_msgs_table(self) -> None:
        assert set(ConstChecker.msgs) == {"W9801", "W9802"}
        assert ConstChecker.msgs["W9801"][1] == "const-field-assignment"
        assert ConstChecker.msgs["W9802"][1] == "const-parameter-assignment"


class TestConstCheckerWalk:
    def test_run_checker_reports_both_kinds(self) -> None:
        code = textwrap.dedent(
            """
            class Config:
                def __init__(self, path):
                    self.path = path  # +const

            # +const
            def reload(config: Config, path):
                config.path = path
                path = None
            """
        )
        msgs = run_checker(ConstChecker, code, "config.py")
        assert msgs == ["const-field-assignment", "const-parameter-assignment"]

    def test_run_checker_fresh_instance(self) -> None:
        code = textwrap.dedent(
            """
            class Config:
                path = ""  # +const

            def load(path) -> Config:
                config = Config()
                config.path = path
                return config
            """
        )
        assert run_checker(ConstChecker, code, "config.py") == []

    def test_run_checker_string_annotations(self) -> None:
        code = textwrap.dedent(
            """
            class Person:
                name = ""  # +const

                def renamed(self, name) -> "Person":
                    self.name = name
                    return self

            def rename(p: "Person"):
                p.name = "x"
            """
        )
        assert run_checker(ConstChecker, code, "people.py") == ["const-field-assignment"]
