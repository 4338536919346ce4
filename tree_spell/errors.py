"""Exception hierarchy shared by the tree spell checker modules."""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "InvalidQueryError",
    "TreeSpellError",
]


class TreeSpellError(ValueError):
    """Base class for errors raised by :mod:`tree_spell`."""


class ConfigurationError(TreeSpellError):
    """Raised when a dictionary or checker option is unusable."""


class InvalidQueryError(TreeSpellError, TypeError):
    """Raised when a query cannot be tokenized."""
