"""Splitting and re-joining of path-like identifiers.

Identifiers are treated as ordered sequences of *segments* separated by a
single delimiter string.  Splitting is lossless: empty segments produced by
leading, trailing or doubled delimiters are preserved so that
:func:`join_segments` always reproduces the original identifier.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Sequence, Tuple

from .errors import ConfigurationError, InvalidQueryError

__all__ = [
    "DEFAULT_DELIMITER",
    "DictionaryEntry",
    "join_segments",
    "tokenize",
    "validate_delimiter",
]

DEFAULT_DELIMITER = os.sep


def validate_delimiter(delimiter: str) -> str:
    """Return *delimiter* or raise :class:`ConfigurationError` when unusable."""

    if not isinstance(delimiter, str) or not delimiter:
        raise ConfigurationError("delimiter must be a non-empty string")
    return delimiter


def tokenize(identifier: str, delimiter: str = DEFAULT_DELIMITER) -> Tuple[str, ...]:
    """Split *identifier* into its segments.

    Raises
    ------
    InvalidQueryError
        If *identifier* is not a string.
    """

    if not isinstance(identifier, str):
        raise InvalidQueryError(
            f"identifier must be a string, received {type(identifier).__name__}"
        )
    return tuple(identifier.split(validate_delimiter(delimiter)))


def join_segments(segments: Sequence[str], delimiter: str = DEFAULT_DELIMITER) -> str:
    """Inverse of :func:`tokenize`."""

    return validate_delimiter(delimiter).join(segments)


@dataclass(frozen=True, slots=True)
class DictionaryEntry:
    """A dictionary identifier together with its segments."""

    segments: Tuple[str, ...]
    original: str
    delimiter: str = DEFAULT_DELIMITER

    def __post_init__(self) -> None:
        if join_segments(self.segments, self.delimiter) != self.original:
            raise ConfigurationError(
                f"segments {self.segments!r} do not re-join to {self.original!r}"
            )

    @classmethod
    def from_string(
        cls, identifier: str, delimiter: str = DEFAULT_DELIMITER
    ) -> "DictionaryEntry":
        if not isinstance(identifier, str):
            raise ConfigurationError(
                f"dictionary entries must be strings, received {type(identifier).__name__}"
            )
        if not identifier:
            raise ConfigurationError("dictionary entries must be non-empty strings")
        return cls(tokenize(identifier, delimiter), identifier, delimiter)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self.segments)
