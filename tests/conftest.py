"""Pytest configuration shared by the const-linter suite.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
and the project root on sys.path so `tests.*` helpers import cleanly.
"""

from collections.abc import Iterator

import pytest

from const_linter.domain.config import ConfigurationLoader
from const_linter.infrastructure.di.container import ConstLintContainer


@pytest.fixture(autouse=True)
def isolated_configuration() -> Iterator[None]:
    """Every test starts from default settings and a fresh container."""
    ConfigurationLoader.reset()
    ConfigurationLoader().set_config({})
    ConstLintContainer.reset()
    yield
    ConfigurationLoader.reset()
    ConstLintContainer.reset()
