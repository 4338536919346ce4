"""Spell checking for path-like identifiers using a segment prefix tree."""

from .checker import (
    DEFAULT_MAX_SUGGESTIONS,
    DEFAULT_MAX_TOTAL_DISTANCE,
    DEFAULT_SEGMENT_PENALTY,
    CheckerOptions,
    MatchCandidate,
    TreeSpellChecker,
    new_checker,
)
from .errors import ConfigurationError, InvalidQueryError, TreeSpellError
from .human_typo import (
    HumanTypo,
    HumanTypoError,
    TypoEdit,
    TypoOperation,
    new_typo_generator,
)
from .prefix_tree import PrefixTree, TreeNode
from .similarity import ScoringMode, augmented_distance, levenshtein, segment_cost
from .tokenizer import DictionaryEntry, join_segments, tokenize

__all__ = [
    "CheckerOptions",
    "ConfigurationError",
    "DEFAULT_MAX_SUGGESTIONS",
    "DEFAULT_MAX_TOTAL_DISTANCE",
    "DEFAULT_SEGMENT_PENALTY",
    "DictionaryEntry",
    "HumanTypo",
    "HumanTypoError",
    "InvalidQueryError",
    "MatchCandidate",
    "PrefixTree",
    "ScoringMode",
    "TreeNode",
    "TreeSpellChecker",
    "TreeSpellError",
    "TypoEdit",
    "TypoOperation",
    "augmented_distance",
    "join_segments",
    "levenshtein",
    "new_checker",
    "new_typo_generator",
    "segment_cost",
    "tokenize",
]
