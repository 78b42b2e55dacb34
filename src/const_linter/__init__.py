"""Pylint plugin enforcing `# +const` immutability markers on fields and parameters."""

from const_linter.infrastructure.checker import register

__all__ = ["register"]
__version__ = "0.1.0"
