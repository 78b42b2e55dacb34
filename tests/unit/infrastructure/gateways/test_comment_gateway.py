"""Unit tests for CommentGateway."""

import logging
import textwrap

import astroid  # type: ignore[import-untyped]
import pytest

from const_linter.infrastructure.gateways.comment_gateway import CommentGateway, ModuleComments

SOURCE = textwrap.dedent(
    '''\
    # header
    x = 1  # +const
    # lead 1
    # lead 2
    y = 2

    # detached
    
    z = """a
    # not a comment
    """
    '''
).encode()


class TestModuleComments:
    def setup_method(self) -> None:
        self.comments = CommentGateway().tokenize_source(SOURCE, "sample")

    def test_comment_lines_are_recorded(self) -> None:
        assert self.comments.comments[1] == "# header"
        assert self.comments.comments[2] == "# +const"
        assert 10 not in self.comments.comments

    def test_leading_block_stops_at_code(self) -> None:
        assert self.comments.leading(5) == ["# lead 1", "# lead 2"]
        assert self.comments.leading(3) == []

    def test_leading_block_stops_at_blank_line(self) -> None:
        assert self.comments.leading(9) == []

    def test_inline_comments_only_on_code_lines(self) -> None:
        assert self.comments.inline(1, 2) == ["# +const"]
        assert self.comments.inline(3, 4) == []

    def test_multiline_string_counts_as_code(self) -> None:
        assert {9, 10, 11} <= self.comments.code_lines


class TestCommentGateway:
    def test_comments_for_parsed_module(self) -> None:
        module = astroid.parse("class A:\n    # +const\n    x = 1\n", module_name="a")
        comments = CommentGateway().comments_for(module)
        assert comments.leading(3) == ["# +const"]

    def test_untokenizable_source_yields_no_comments(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            comments = CommentGateway().tokenize_source(b'x = """never closed\n', "broken")
        assert comments == ModuleComments()
        assert "broken" in caplog.text
