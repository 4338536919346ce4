"""Tree-structured spell checker for path-like identifiers.

The checker walks the segment prefix tree against the segments of a query.
At every query position it keeps a frontier of ``(node, accumulated cost)``
states and scores the current query segment against every child label of
every frontier node.  Branches whose accumulated cost exceeds
``max_total_distance`` are dropped before their children are visited, so a
whole subtree behind a dissimilar directory name is discarded with a single
(early terminated) segment comparison instead of one comparison per leaf.

Queries with a missing or an extra path component are still matched: each
candidate may use one segment-level edit, charged ``segment_penalty``, that
either descends into the tree without consuming a query segment or consumes a
query segment without descending.

Example
-------
>>> checker = TreeSpellChecker(["src/main", "src/mainTest", "lib/main"], delimiter="/")
>>> checker.correct("src/man")
['src/main', 'lib/main']
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from numbers import Real
from typing import Dict, Iterable, List, Tuple, Union

from .errors import ConfigurationError
from .prefix_tree import PrefixTree, TreeNode
from .similarity import ScoringMode, segment_cost
from .tokenizer import DEFAULT_DELIMITER, tokenize, validate_delimiter

__all__ = [
    "CheckerOptions",
    "DEFAULT_MAX_SUGGESTIONS",
    "DEFAULT_MAX_TOTAL_DISTANCE",
    "DEFAULT_SEGMENT_PENALTY",
    "MatchCandidate",
    "TreeSpellChecker",
    "new_checker",
]

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOTAL_DISTANCE = 4
DEFAULT_MAX_SUGGESTIONS = 5
DEFAULT_SEGMENT_PENALTY = 2

Cost = Union[int, float]
_StateKey = Tuple[Tuple[str, ...], bool]
_Frontier = Dict[_StateKey, Tuple[TreeNode, Cost]]


def _validate_positive(value: object, label: str, *, integral: bool = False) -> None:
    if isinstance(value, bool) or not isinstance(value, (int if integral else Real)):
        kind = "an integer" if integral else "a number"
        raise ConfigurationError(f"{label} must be {kind}")
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{label} must be positive and finite")


@dataclass(frozen=True, slots=True)
class CheckerOptions:
    """Validated construction options for :class:`TreeSpellChecker`."""

    augment: bool = False
    delimiter: str = DEFAULT_DELIMITER
    max_total_distance: Cost = DEFAULT_MAX_TOTAL_DISTANCE
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS
    segment_penalty: Cost = DEFAULT_SEGMENT_PENALTY

    def __post_init__(self) -> None:
        if not isinstance(self.augment, bool):
            raise ConfigurationError("augment must be a boolean")
        validate_delimiter(self.delimiter)
        _validate_positive(self.max_total_distance, "max_total_distance")
        _validate_positive(self.max_suggestions, "max_suggestions", integral=True)
        _validate_positive(self.segment_penalty, "segment_penalty")

    @property
    def mode(self) -> ScoringMode:
        return ScoringMode.AUGMENTED if self.augment else ScoringMode.STANDARD


@dataclass(frozen=True, slots=True)
class MatchCandidate:
    """A dictionary entry reached by the traversal and its total cost."""

    segments: Tuple[str, ...]
    cost: Cost
    path: str

    def __post_init__(self) -> None:
        if self.cost < 0:
            raise ValueError("MatchCandidate.cost must be non-negative")

    @property
    def sort_key(self) -> Tuple[Cost, Tuple[str, ...]]:
        return (self.cost, self.segments)


def _relax(frontier: _Frontier, key: _StateKey, node: TreeNode, cost: Cost) -> None:
    known = frontier.get(key)
    if known is None or cost < known[1]:
        frontier[key] = (node, cost)


class TreeSpellChecker:
    """Suggest dictionary identifiers close to a misspelled query."""

    def __init__(
        self,
        dictionary: Iterable[str],
        *,
        augment: bool = False,
        delimiter: str = DEFAULT_DELIMITER,
        max_total_distance: Cost = DEFAULT_MAX_TOTAL_DISTANCE,
        max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
        segment_penalty: Cost = DEFAULT_SEGMENT_PENALTY,
    ) -> None:
        self.options = CheckerOptions(
            augment=augment,
            delimiter=delimiter,
            max_total_distance=max_total_distance,
            max_suggestions=max_suggestions,
            segment_penalty=segment_penalty,
        )
        if dictionary is None or isinstance(dictionary, (str, bytes)):
            raise ConfigurationError("dictionary must be a sequence of strings")
        entries = list(dictionary)
        if entries:
            self.tree = PrefixTree.build(entries, delimiter)
        else:
            logger.warning("Empty dictionary supplied; every query will return no suggestions")
            self.tree = PrefixTree.empty(delimiter)

    @property
    def mode(self) -> ScoringMode:
        return self.options.mode

    def correct(self, query: str) -> List[str]:
        """Return suggested identifiers for *query*, best first."""

        return [candidate.path for candidate in self.candidates(query)]

    def candidates(self, query: str) -> List[MatchCandidate]:
        """Return ranked :class:`MatchCandidate` objects for *query*.

        Raises
        ------
        InvalidQueryError
            If *query* is not a string.
        """

        segments = tokenize(query, self.options.delimiter)
        if not query:
            return []

        reached = self._traverse(segments)
        ranked = sorted(
            (
                MatchCandidate(path, cost, self.options.delimiter.join(path))
                for path, cost in reached.items()
            ),
            key=lambda candidate: candidate.sort_key,
        )
        logger.debug(
            "Query %r matched %d candidate(s) in %s mode",
            query,
            len(ranked),
            self.mode.value,
        )
        return ranked[: self.options.max_suggestions]

    def _traverse(self, segments: Tuple[str, ...]) -> Dict[Tuple[str, ...], Cost]:
        budget = self.options.max_total_distance
        penalty = self.options.segment_penalty
        mode = self.mode

        frontier: _Frontier = {((), False): (self.tree.root, 0)}
        reached: Dict[Tuple[str, ...], Cost] = {}

        for index in range(len(segments) + 1):
            # Component present in the tree but missing from the query.
            if penalty <= budget:
                for (path, skipped), (node, cost) in list(frontier.items()):
                    if skipped or cost + penalty > budget:
                        continue
                    for child in node.iter_children():
                        _relax(frontier, (path + (child.label,), True), child, cost + penalty)

            if index == len(segments):
                for (path, _), (node, cost) in frontier.items():
                    if node.is_terminal and cost < reached.get(path, math.inf):
                        reached[path] = cost
                break

            query_segment = segments[index]
            following: _Frontier = {}
            for (path, skipped), (node, cost) in frontier.items():
                remaining = budget - cost
                for child in node.iter_children():
                    step = segment_cost(query_segment, child.label, mode, limit=remaining)
                    if step <= remaining:
                        _relax(following, (path + (child.label,), skipped), child, cost + step)
                # Component present in the query but missing from the tree.
                if not skipped and penalty <= remaining:
                    _relax(following, (path, True), node, cost + penalty)

            if not following:
                break
            frontier = following

        return reached

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(entries={len(self.tree)}, mode={self.mode.value!r}, "
            f"max_total_distance={self.options.max_total_distance!r}, "
            f"max_suggestions={self.options.max_suggestions!r})"
        )


def new_checker(dictionary: Iterable[str], **options: object) -> TreeSpellChecker:
    """Build a :class:`TreeSpellChecker`; *options* mirror its keyword arguments."""

    return TreeSpellChecker(dictionary, **options)  # type: ignore[arg-type]
