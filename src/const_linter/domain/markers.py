"""
Marker grammar for `+const` comments.

Parsing never raises: malformed markers (an unclosed `+const:[`, a token
glued to other words) are indistinguishable from no marker at all. A typo in
a marker therefore fails open, without enforcement and without a warning.
"""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

from const_linter.domain.constants import CONST_LIST_CLOSE, CONST_LIST_OPEN, CONST_MARKER

_FIELD_MARKER_RE = re.compile(r"(?<![\w+])\+const(?![\w:])")


@dataclass(frozen=True)
class ParamMarker:
    """A parsed parameter marker: an explicit name list, or all parameters."""

    names: tuple[str, ...] = ()
    all_params: bool = False

    def expand(self, declared: Sequence[str]) -> list[str]:
        """Names this marker makes immutable, given the routine's declared parameters."""
        if self.all_params:
            return list(declared)
        return list(self.names)


def comment_text(line: str) -> str:
    """Strip the leading `#` characters and surrounding whitespace of a comment line."""
    return line.strip().lstrip("#").strip()


def has_field_marker(lines: Iterable[str]) -> bool:
    """True if any line carries the field marker token."""
    return any(_FIELD_MARKER_RE.search(line) for line in lines)


def parse_param_list(line: str) -> Optional[tuple[str, ...]]:
    """
    Parse `+const:[a, b]` on one line.

    Returns None when the line has no list marker or the list is not closed.
    """
    start = line.find(CONST_LIST_OPEN)
    if start == -1:
        return None
    start += len(CONST_LIST_OPEN)
    end = line.find(CONST_LIST_CLOSE, start)
    if end == -1:
        return None
    names = (name.strip() for name in line[start:end].split(","))
    return tuple(name for name in names if name)


def is_all_params_marker(line: str) -> bool:
    return comment_text(line) == CONST_MARKER


def parse_param_marker(lines: Iterable[str]) -> Optional[ParamMarker]:
    """Find the parameter marker of a routine; an explicit list wins over `+const` alone."""
    lines = list(lines)
    for line in lines:
        names = parse_param_list(line)
        if names is not None:
            return ParamMarker(names=names)
    if any(is_all_params_marker(line) for line in lines):
        return ParamMarker(all_params=True)
    return None
