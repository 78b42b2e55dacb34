"""Comment extraction with tokenize; astroid drops comments from its tree."""

import io
import logging
import tokenize
from dataclasses import dataclass, field

import astroid  # type: ignore[import-untyped]

from const_linter.domain.protocols import CommentGatewayProtocol, CommentsProtocol

logger = logging.getLogger(__name__)

_LAYOUT_TOKENS = frozenset(
    {
        tokenize.COMMENT,
        tokenize.NL,
        tokenize.NEWLINE,
        tokenize.INDENT,
        tokenize.DEDENT,
        tokenize.ENCODING,
        tokenize.ENDMARKER,
    }
)


@dataclass
class ModuleComments(CommentsProtocol):
    """Comment text per line, and the set of lines that hold code."""

    comments: dict[int, str] = field(default_factory=dict)
    code_lines: set[int] = field(default_factory=set)

    def leading(self, line: int) -> list[str]:
        block: list[str] = []
        current = line - 1
        while current in self.comments and current not in self.code_lines:
            block.append(self.comments[current])
            current -= 1
        block.reverse()
        return block

    def inline(self, first: int, last: int) -> list[str]:
        return [
            self.comments[n]
            for n in range(first, last + 1)
            if n in self.comments and n in self.code_lines
        ]


class CommentGateway(CommentGatewayProtocol):
    """Tokenizes module sources to recover comments by line."""

    def comments_for(self, module: astroid.nodes.Module) -> ModuleComments:
        try:
            stream = module.stream()
        except OSError as exc:
            logger.warning("Cannot read source of %s: %s", module.name, exc)
            return ModuleComments()
        if stream is None:
            logger.debug("No source available for %s", module.name)
            return ModuleComments()
        with stream:
            return self.tokenize_source(stream.read(), module.name)

    def tokenize_source(self, source: bytes, name: str = "<string>") -> ModuleComments:
        result = ModuleComments()
        try:
            for tok in tokenize.tokenize(io.BytesIO(source).readline):
                if tok.type == tokenize.COMMENT:
                    result.comments[tok.start[0]] = tok.string
                elif tok.type not in _LAYOUT_TOKENS:
                    result.code_lines.update(range(tok.start[0], tok.end[0] + 1))
        except (tokenize.TokenError, SyntaxError, UnicodeDecodeError) as exc:
            logger.warning("Cannot tokenize %s, const markers ignored: %s", name, exc)
            return ModuleComments()
        return result
