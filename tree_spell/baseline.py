"""Flat comparison correctors.

``FlatSpellChecker`` is the classic "did you mean" algorithm that treats each
dictionary entry as an opaque string: candidates are pre-filtered with the
Jaro-Winkler similarity and then accepted when their Levenshtein distance to
the input is within a quarter of the input length.  It exists so the tree
checker can be benchmarked against a conventional corrector and is never
used by :class:`~tree_spell.checker.TreeSpellChecker` itself.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Protocol, Sequence, runtime_checkable

from rapidfuzz.distance import JaroWinkler, Levenshtein

from .errors import ConfigurationError, InvalidQueryError

__all__ = [
    "Corrector",
    "FallbackCorrector",
    "FlatSpellChecker",
]

logger = logging.getLogger(__name__)

SHORT_INPUT_THRESHOLD = 0.77
LONG_INPUT_THRESHOLD = 0.834
MISTYPE_RATIO = 0.25


@runtime_checkable
class Corrector(Protocol):
    """Anything exposing ``correct(query) -> sequence of suggestions``."""

    def correct(self, query: str) -> Sequence[str]:
        ...


def _normalize(value: str) -> str:
    return value.lower()


class FlatSpellChecker:
    """Dictionary-wide Jaro-Winkler + Levenshtein corrector."""

    def __init__(self, dictionary: Iterable[str]) -> None:
        if dictionary is None or isinstance(dictionary, (str, bytes)):
            raise ConfigurationError("dictionary must be a sequence of strings")
        words = list(dict.fromkeys(dictionary))
        for word in words:
            if not isinstance(word, str):
                raise ConfigurationError("dictionary entries must be strings")
        self.dictionary = tuple(words)

    def correct(self, query: str) -> List[str]:
        if not isinstance(query, str):
            raise InvalidQueryError(
                f"query must be a string, received {type(query).__name__}"
            )
        normalized = _normalize(query)
        threshold = LONG_INPUT_THRESHOLD if len(normalized) > 3 else SHORT_INPUT_THRESHOLD

        scored = []
        for word in self.dictionary:
            if word == query:
                continue
            similarity = JaroWinkler.similarity(_normalize(word), normalized)
            if similarity >= threshold:
                scored.append((similarity, word))
        scored.sort(key=lambda item: (-item[0], item[1]))
        words = [word for _, word in scored]

        # Mistypes: small distance relative to the input length.
        limit = math.ceil(len(normalized) * MISTYPE_RATIO)
        corrections = [
            word for word in words if Levenshtein.distance(_normalize(word), normalized) <= limit
        ]
        if corrections:
            return corrections

        # Misspellings: keep only the single most similar plausible word.
        for word in words:
            candidate = _normalize(word)
            if Levenshtein.distance(candidate, normalized) < min(len(normalized), len(candidate)):
                return [word]
        return []


class FallbackCorrector:
    """Use ``fallback`` whenever ``primary`` has no suggestions."""

    def __init__(self, primary: Corrector, fallback: Corrector) -> None:
        self.primary = primary
        self.fallback = fallback

    def correct(self, query: str) -> List[str]:
        suggestions = list(self.primary.correct(query))
        if suggestions:
            return suggestions
        logger.debug("Primary corrector had no suggestion for %r; falling back", query)
        return list(self.fallback.correct(query))
