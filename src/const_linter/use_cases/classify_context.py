"""Initialization-context classifier for const field writes."""

from typing import Optional

import astroid  # type: ignore[import-untyped]

from const_linter.domain.constants import DEFAULT_CONSTRUCTOR_PREFIXES
from const_linter.domain.protocols import AstroidProtocol


class InitializationContextClassifier:
    """
    Decides whether a routine may perform first-time writes to a class's fields.

    Three independent rules, combined by logical OR:

    1. the routine is a method of the owner with a constructor-like name;
    2. the routine is annotated to return the owner;
    3. the routine body instantiates the owner anywhere.

    Rule 3 is syntactic and flow-insensitive: a call to `Owner(...)` in any
    branch exempts every write to any `Owner` in the routine, even writes that
    happen before the call or on another path.
    """

    def __init__(
        self,
        ast_gateway: AstroidProtocol,
        constructor_prefixes: tuple[str, ...] = DEFAULT_CONSTRUCTOR_PREFIXES,
    ) -> None:
        self._ast_gateway = ast_gateway
        self._constructor_prefixes = tuple(p.lower() for p in constructor_prefixes)
        self._memo: dict[tuple[int, int], bool] = {}
        self._instantiations: dict[int, list[astroid.nodes.ClassDef]] = {}

    def reset(self) -> None:
        """Forget memoized results; called once per compilation unit."""
        self._memo.clear()
        self._instantiations.clear()

    def is_initialization_context(
        self, routine: Optional[astroid.nodes.FunctionDef], owner: astroid.nodes.ClassDef
    ) -> bool:
        if routine is None:
            return False
        key = (id(routine), id(owner))
        if key not in self._memo:
            self._memo[key] = (
                self.is_constructor_method(routine, owner)
                or self.returns_owner(routine, owner)
                or self.instantiates_owner(routine, owner)
            )
        return self._memo[key]

    def is_constructor_method(self, routine: astroid.nodes.FunctionDef, owner: astroid.nodes.ClassDef) -> bool:
        """Rule 1: defined in the owner's class body under a constructor-like name."""
        if routine.parent is not owner:
            return False
        name = routine.name.lstrip("_").lower()
        return name.startswith(self._constructor_prefixes)

    def returns_owner(self, routine: astroid.nodes.FunctionDef, owner: astroid.nodes.ClassDef) -> bool:
        """Rule 2: the return annotation names the owner, one wrapper level deep."""
        returned = self._ast_gateway.annotation_owners(routine.returns, routine)
        return any(cls is owner for cls in returned)

    def instantiates_owner(self, routine: astroid.nodes.FunctionDef, owner: astroid.nodes.ClassDef) -> bool:
        """Rule 3: `Owner(...)` is called somewhere in the body."""
        key = id(routine)
        if key not in self._instantiations:
            self._instantiations[key] = self._ast_gateway.instantiated_classes(routine)
        return any(cls is owner for cls in self._instantiations[key])
