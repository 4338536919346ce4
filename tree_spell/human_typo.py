"""Synthetic typing mistakes for evaluating the checkers.

``HumanTypo`` simulates an error-prone typist.  Starting at a random position
it applies one randomly chosen :class:`TypoOperation`, then skips ahead by a
random gap and repeats until it runs off the end of the word.  With the
default ``lambda_`` of ``0.05`` gaps are drawn uniformly from ``[0, 40)``, so a
40 character identifier receives on average a little over two edits, while
short identifiers usually receive a single one.

Every drawn edit changes the word it is applied to: a case flip on an uncased
character, a swap of two equal characters and a deletion from a one
character word are drawn as substitutions instead, and a substitution never
reuses the character it replaces.  The mean Levenshtein distance for the 40
character calibration word used by :mod:`tree_spell.explore` is about ``2.04``.

Each generator owns its own :class:`random.Random` instance.  Pass ``seed``
(or an explicit ``rng``) for reproducible samples.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
import random
import string
from typing import Iterator, Optional

__all__ = [
    "DEFAULT_LAMBDA",
    "DEFAULT_MAX_EDITS",
    "HumanTypo",
    "HumanTypoError",
    "TYPO_CHARACTERS",
    "TypoEdit",
    "TypoOperation",
    "new_typo_generator",
]

DEFAULT_LAMBDA = 0.05
DEFAULT_MAX_EDITS = 8
TYPO_CHARACTERS = string.ascii_letters + '?<>,.!`+=-_":;@#$%^&*()'


class HumanTypoError(ValueError):
    """Raised when a typo generator is configured with invalid inputs."""


class TypoOperation(str, Enum):
    INSERTION = "insertion"
    DELETION = "deletion"
    SUBSTITUTION = "substitution"
    TRANSPOSITION = "transposition"
    CASE_FLIP = "case_flip"


@dataclass(frozen=True, slots=True)
class TypoEdit:
    """A single character-level edit applied at ``position``.

    ``character`` is required for insertions and substitutions; ``direction``
    selects the neighbour swapped by a transposition.
    """

    operation: TypoOperation
    position: int
    character: Optional[str] = None
    direction: int = 1

    def apply(self, word: str) -> str:
        position = self.position
        if not 0 <= position <= len(word):
            raise HumanTypoError(f"position {position} is outside {word!r}")

        if self.operation is TypoOperation.INSERTION:
            return word[:position] + self._require_character() + word[position:]
        if position == len(word):
            raise HumanTypoError(f"{self.operation.value} needs a character at {position}")

        if self.operation is TypoOperation.DELETION:
            if len(word) == 1:
                raise HumanTypoError(f"deleting from {word!r} would leave an empty word")
            return word[:position] + word[position + 1 :]
        if self.operation is TypoOperation.SUBSTITUTION:
            return word[:position] + self._require_character() + word[position + 1 :]
        if self.operation is TypoOperation.CASE_FLIP:
            return word[:position] + word[position].swapcase() + word[position + 1 :]

        if len(word) < 2:
            return word
        other = position + self.direction
        if not 0 <= other < len(word):
            other = position - self.direction
        left, right = sorted((position, other))
        return word[:left] + word[right] + word[left] + word[right + 1 :]

    def _require_character(self) -> str:
        if not self.character:
            raise HumanTypoError(f"{self.operation.value} requires a character")
        return self.character


class HumanTypo:
    """Produce corrupted copies of ``word``."""

    def __init__(
        self,
        word: str,
        *,
        lambda_: float = DEFAULT_LAMBDA,
        max_edits: int = DEFAULT_MAX_EDITS,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not isinstance(word, str) or not word:
            raise HumanTypoError("word must be a non-empty string")
        if isinstance(lambda_, bool) or not 0 < lambda_ <= 1:
            raise HumanTypoError("lambda_ must be in the interval (0, 1]")
        if isinstance(max_edits, bool) or not isinstance(max_edits, int) or max_edits < 0:
            raise HumanTypoError("max_edits must be a non-negative integer")
        self.word = word
        self.lambda_ = lambda_
        self.max_edits = max_edits
        self._span = 2.0 / lambda_
        self._rng = rng if rng is not None else random.Random(seed)

    def call(self) -> str:
        """Return a corrupted copy of the source word (possibly unchanged)."""

        word = self.word
        if self.max_edits == 0:
            return word

        position = self._rng.randrange(min(len(word), math.ceil(self._span)))
        for _ in range(self.max_edits):
            word = self._draw_edit(word, position).apply(word)
            position += self._gap()
            if position >= len(word):
                break
        return word

    __call__ = call

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        return self.call()

    def _gap(self) -> int:
        return int(self._rng.random() * self._span)

    def _draw_edit(self, word: str, position: int) -> TypoEdit:
        operation = self._rng.choice(list(TypoOperation))
        if operation is TypoOperation.INSERTION:
            return TypoEdit(operation, position, character=self._rng.choice(TYPO_CHARACTERS))
        if operation is TypoOperation.DELETION and len(word) > 1:
            return TypoEdit(operation, position)
        if operation is TypoOperation.TRANSPOSITION:
            edit = TypoEdit(operation, position, direction=self._rng.choice((-1, 1)))
        elif operation is TypoOperation.CASE_FLIP:
            edit = TypoEdit(operation, position)
        else:
            return self._substitution(word, position)
        # Uncased characters and equal neighbours would leave the word as is.
        if edit.apply(word) == word:
            return self._substitution(word, position)
        return edit

    def _substitution(self, word: str, position: int) -> TypoEdit:
        replacement = self._rng.choice(TYPO_CHARACTERS.replace(word[position], ""))
        return TypoEdit(TypoOperation.SUBSTITUTION, position, character=replacement)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(word={self.word!r}, lambda_={self.lambda_!r})"


def new_typo_generator(word: str, seed: Optional[int] = None) -> HumanTypo:
    """Return a :class:`HumanTypo` with its own random source seeded by *seed*."""

    return HumanTypo(word, seed=seed)
