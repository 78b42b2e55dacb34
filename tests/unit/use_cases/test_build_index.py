"""Unit tests for the declaration phase."""

import logging

import pytest

from const_linter.domain.entities import RoutineIdentity, SourceLocation
from tests.unit.checker_test_utils import build_index, find_class, parse_module


class TestFieldDeclarations:
    def test_class_body_markers(self) -> None:
        module = parse_module(
            """
            class Person:
                # +const
                name: str
                age: int = 0  # +const
                nickname: str = ""
                # unrelated

                email = "x"
            """
        )
        index = build_index(module)
        person = find_class(module, "Person")

        assert sorted(index.fields_of(person)) == ["age", "name"]
        assert index.field_site(person, "name") == SourceLocation("sample", 4, 4)

    def test_marker_in_initializer(self) -> None:
        module = parse_module(
            """
            class Config:
                def __init__(self, path):
                    self.path = path  # +const
                    self.cache = {}
                    other = object()
                    other.path = path  # +const
            """
        )
        index = build_index(module)
        config = find_class(module, "Config")

        assert index.fields_of(config) == ["path"]
        assert index.field_site(config, "path") == SourceLocation("sample", 4, 8)

    def test_markers_outside_initializers_are_ignored(self) -> None:
        module = parse_module(
            """
            class Config:
                def reload(self):
                    self.path = "x"  # +const
            """
        )
        assert build_index(module).is_empty()

    def test_same_field_name_in_two_classes(self) -> None:
        module = parse_module(
            """
            class A:
                x = 1  # +const

            class B:
                x = 1
            """
        )
        index = build_index(module)
        assert index.fields_of(find_class(module, "A")) == ["x"]
        assert index.fields_of(find_class(module, "B")) == []

    def test_multi_target_assignment(self) -> None:
        module = parse_module(
            """
            class Point:
                x = y = 0  # +const
            """
        )
        index = build_index(module)
        assert sorted(index.fields_of(find_class(module, "Point"))) == ["x", "y"]

    def test_field_marker_is_not_a_list_marker(self) -> None:
        module = parse_module(
            """
            class Point:
                x = 0  # +const:[x]
            """
        )
        assert build_index(module).is_empty()


class TestParameterDeclarations:
    def test_explicit_list(self) -> None:
        module = parse_module(
            """
            # +const:[a, c]
            def f(a, b, c):
                pass
            """
        )
        index = build_index(module)
        routine = RoutineIdentity("sample", "f")

        assert sorted(key.param_name for key in index.params) == ["a", "c"]
        assert index.param_site(routine, "a") == SourceLocation("sample", 3, 0)

    def test_all_parameters(self) -> None:
        module = parse_module(
            """
            class Scaler:
                # +const
                def scale(self, x, *args, factor=2, **kwargs):
                    pass
            """
        )
        index = build_index(module)
        names = sorted(key.param_name for key in index.params)

        assert names == ["args", "factor", "kwargs", "self", "x"]
        assert all(key.routine == RoutineIdentity("sample", "Scaler.scale") for key in index.params)

    def test_marker_above_decorators(self) -> None:
        module = parse_module(
            """
            import functools

            # +const:[x]
            @functools.lru_cache
            def f(x):
                pass
            """
        )
        assert [key.param_name for key in build_index(module).params] == ["x"]

    def test_marker_in_docstring(self) -> None:
        module = parse_module(
            '''
            def f(x, y):
                """Scale a point.

                +const:[y]
                """
            '''
        )
        assert [key.param_name for key in build_index(module).params] == ["y"]

    def test_unclosed_list_marks_nothing(self) -> None:
        module = parse_module(
            """
            # +const:[a, b
            def f(a, b):
                pass
            """
        )
        assert build_index(module).is_empty()

    def test_blank_line_detaches_marker(self) -> None:
        module = parse_module(
            """
            # +const

            def f(a):
                pass
            """
        )
        assert build_index(module).is_empty()

    def test_unknown_names_are_kept_and_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        module = parse_module(
            """
            # +const:[missing]
            def f(a):
                pass
            """
        )
        with caplog.at_level(logging.DEBUG, logger="const_linter.use_cases.build_index"):
            index = build_index(module)

        assert index.param_site(RoutineIdentity("sample", "f"), "missing") is not None
        assert "unknown parameter 'missing'" in caplog.text

    def test_async_routines(self) -> None:
        module = parse_module(
            """
            # +const
            async def fetch(url):
                pass
            """
        )
        assert [key.routine.name for key in build_index(module).params] == ["fetch"]

    def test_all_marker_without_parameters(self) -> None:
        module = parse_module(
            """
            # +const
            def tick():
                pass
            """
        )
        assert build_index(module).is_empty()
