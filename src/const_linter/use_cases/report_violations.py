"""Violation reporter: turns a flagged write into a diagnostic citing its marker."""

import logging

import astroid  # type: ignore[import-untyped]

from const_linter.domain.entities import (
    ConstViolation,
    RoutineIdentity,
    SourceLocation,
    ViolationKind,
)
from const_linter.domain.protocols import ViolationSinkProtocol

logger = logging.getLogger(__name__)


class CollectingSink(ViolationSinkProtocol):
    """Keeps violations in emission order."""

    def __init__(self) -> None:
        self.violations: list[ConstViolation] = []

    def emit(self, violation: ConstViolation) -> None:
        self.violations.append(violation)


class ViolationReporter:
    def __init__(self, sink: ViolationSinkProtocol) -> None:
        self._sink = sink

    def report_field(
        self, target: astroid.nodes.AssignAttr, owner: astroid.nodes.ClassDef, marker: SourceLocation
    ) -> ConstViolation:
        violation = ConstViolation(
            kind=ViolationKind.FIELD,
            name=target.attrname,
            context=owner.name,
            location=SourceLocation.of(target),
            marker_location=marker,
            node=target,
        )
        return self._emit(violation)

    def report_parameter(
        self, target: astroid.nodes.AssignName, routine: RoutineIdentity, marker: SourceLocation
    ) -> ConstViolation:
        violation = ConstViolation(
            kind=ViolationKind.PARAMETER,
            name=target.name,
            context=routine.name,
            location=SourceLocation.of(target),
            marker_location=marker,
            node=target,
        )
        return self._emit(violation)

    def _emit(self, violation: ConstViolation) -> ConstViolation:
        logger.debug("%s: %s", violation.location, violation.message)
        self._sink.emit(violation)
        return violation
