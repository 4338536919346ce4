"""Per-segment similarity costs.

Two scoring modes are provided:

* ``STANDARD`` - classic Levenshtein distance where insertions, deletions and
  substitutions each cost ``1``.
* ``AUGMENTED`` - a weighted optimal-string-alignment distance tuned for
  typing mistakes.  Case-only substitutions, QWERTY-adjacent substitutions and
  adjacent transpositions are cheaper than in the standard metric, and the
  total is discounted by the length of the prefix both strings share.

The augmented cost of a pair never exceeds its standard cost and is never
below ``MIN_AUGMENTED_RATIO`` times it, so budgets expressed in standard edits
remain meaningful in both modes.

Both metrics accept an optional ``limit``.  When the cost provably exceeds
the limit the computation stops and ``math.inf`` is returned, which is what
allows the checker to abandon a subtree after a handful of DP rows.
"""

from __future__ import annotations

from enum import Enum
import math
from typing import Dict, FrozenSet, List, Optional, Union

__all__ = [
    "ADJACENT_KEY_COST",
    "CASE_ONLY_COST",
    "MIN_AUGMENTED_RATIO",
    "PREFIX_DISCOUNT",
    "PREFIX_DISCOUNT_SPAN",
    "ScoringMode",
    "TRANSPOSITION_COST",
    "augmented_distance",
    "are_adjacent_keys",
    "levenshtein",
    "segment_cost",
]

Cost = Union[int, float]

CASE_ONLY_COST = 0.25
ADJACENT_KEY_COST = 0.5
TRANSPOSITION_COST = 1.0
PREFIX_DISCOUNT = 0.2
PREFIX_DISCOUNT_SPAN = 4
MIN_AUGMENTED_RATIO = CASE_ONLY_COST * (1.0 - PREFIX_DISCOUNT)

_KEYBOARD_ROWS = (
    "1234567890-=",
    "qwertyuiop[]",
    "asdfghjkl;'",
    "zxcvbnm,./",
)


class ScoringMode(str, Enum):
    """Available segment scoring strategies."""

    STANDARD = "standard"
    AUGMENTED = "augmented"


def _build_key_neighbours() -> Dict[str, FrozenSet[str]]:
    positions = {
        key: (row, column)
        for row, keys in enumerate(_KEYBOARD_ROWS)
        for column, key in enumerate(keys)
    }
    neighbours: Dict[str, set[str]] = {key: set() for key in positions}
    for key, (row, column) in positions.items():
        # Rows are staggered: the key above sits at the same or next column.
        candidates = [
            (row, column - 1),
            (row, column + 1),
            (row - 1, column),
            (row - 1, column + 1),
            (row + 1, column - 1),
            (row + 1, column),
        ]
        for other_row, other_column in candidates:
            if 0 <= other_row < len(_KEYBOARD_ROWS):
                keys = _KEYBOARD_ROWS[other_row]
                if 0 <= other_column < len(keys):
                    neighbour = keys[other_column]
                    neighbours[key].add(neighbour)
                    neighbours[neighbour].add(key)
    return {key: frozenset(values) for key, values in neighbours.items()}


_KEY_NEIGHBOURS = _build_key_neighbours()


def are_adjacent_keys(left: str, right: str) -> bool:
    """Return ``True`` when two characters sit next to each other on QWERTY."""

    return right.lower() in _KEY_NEIGHBOURS.get(left.lower(), frozenset())


def levenshtein(source: str, target: str, limit: Optional[Cost] = None) -> Cost:
    """Return the Levenshtein distance between *source* and *target*.

    ``math.inf`` is returned when *limit* is given and the distance exceeds it.
    """

    if source == target:
        return 0
    if limit is not None and abs(len(source) - len(target)) > limit:
        return math.inf
    if not source or not target:
        return max(len(source), len(target))

    previous: List[int] = list(range(len(target) + 1))
    for i, source_char in enumerate(source, start=1):
        current = [i] + [0] * len(target)
        for j, target_char in enumerate(target, start=1):
            substitution = previous[j - 1] + (source_char != target_char)
            current[j] = min(previous[j] + 1, current[j - 1] + 1, substitution)
        if limit is not None and min(current) > limit:
            return math.inf
        previous = current

    distance = previous[-1]
    if limit is not None and distance > limit:
        return math.inf
    return distance


def _substitution_cost(source_char: str, target_char: str) -> float:
    if source_char == target_char:
        return 0.0
    if source_char.lower() == target_char.lower():
        return CASE_ONLY_COST
    if are_adjacent_keys(source_char, target_char):
        return ADJACENT_KEY_COST
    return 1.0


def _prefix_factor(source: str, target: str) -> float:
    shared = 0
    for source_char, target_char in zip(source, target):
        if source_char != target_char:
            break
        shared += 1
    return 1.0 - PREFIX_DISCOUNT * min(shared, PREFIX_DISCOUNT_SPAN) / PREFIX_DISCOUNT_SPAN


def augmented_distance(
    source: str, target: str, limit: Optional[Cost] = None
) -> float:
    """Return the typing-aware distance between *source* and *target*.

    ``math.inf`` is returned when *limit* is given and the distance exceeds it.
    """

    if source == target:
        return 0.0
    factor = _prefix_factor(source, target)
    # Raw cost is compared against the limit before the prefix discount.
    raw_limit = None if limit is None else limit / factor
    if raw_limit is not None and abs(len(source) - len(target)) > raw_limit:
        return math.inf

    rows: List[List[float]] = [[float(j) for j in range(len(target) + 1)]]
    for i in range(1, len(source) + 1):
        previous = rows[-1]
        current = [float(i)] + [0.0] * len(target)
        for j in range(1, len(target) + 1):
            best = min(
                previous[j] + 1.0,
                current[j - 1] + 1.0,
                previous[j - 1] + _substitution_cost(source[i - 1], target[j - 1]),
            )
            if (
                i > 1
                and j > 1
                and source[i - 1] == target[j - 2]
                and source[i - 2] == target[j - 1]
                and source[i - 1] != source[i - 2]
            ):
                best = min(best, rows[-2][j - 2] + TRANSPOSITION_COST)
            current[j] = best
        if raw_limit is not None and min(current) > raw_limit:
            return math.inf
        rows.append(current)

    distance = round(rows[-1][-1] * factor, 6)
    if limit is not None and distance > limit:
        return math.inf
    return distance


def segment_cost(
    query_segment: str,
    node_label: str,
    mode: ScoringMode = ScoringMode.STANDARD,
    *,
    limit: Optional[Cost] = None,
) -> Cost:
    """Return the cost of reading *query_segment* as *node_label*."""

    if ScoringMode(mode) is ScoringMode.AUGMENTED:
        return augmented_distance(query_segment, node_label, limit)
    return levenshtein(query_segment, node_label, limit)
