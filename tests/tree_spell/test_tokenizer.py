"""Tests for identifier tokenization."""

from __future__ import annotations

import pytest

from tree_spell.errors import ConfigurationError, InvalidQueryError
from tree_spell.tokenizer import DictionaryEntry, join_segments, tokenize, validate_delimiter


@pytest.mark.parametrize(
    "identifier",
    ["src/main", "/abs/path", "trailing/", "a//b", "", "no_delimiter", "lib/mini/test_task.rb"],
)
def test_tokenize_round_trips(identifier: str) -> None:
    assert join_segments(tokenize(identifier, "/"), "/") == identifier


def test_tokenize_preserves_empty_segments() -> None:
    assert tokenize("/a//b/", "/") == ("", "a", "", "b", "")


def test_tokenize_supports_multi_character_delimiters() -> None:
    assert tokenize("tree_spell::checker::correct", "::") == (
        "tree_spell",
        "checker",
        "correct",
    )


@pytest.mark.parametrize("identifier", [None, 42, b"src/main"])
def test_tokenize_rejects_non_strings(identifier: object) -> None:
    with pytest.raises(InvalidQueryError):
        tokenize(identifier, "/")  # type: ignore[arg-type]


def test_invalid_query_error_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        tokenize(None, "/")  # type: ignore[arg-type]


@pytest.mark.parametrize("delimiter", ["", None, 3])
def test_validate_delimiter_rejects_unusable_values(delimiter: object) -> None:
    with pytest.raises(ConfigurationError):
        validate_delimiter(delimiter)  # type: ignore[arg-type]


def test_dictionary_entry_from_string() -> None:
    entry = DictionaryEntry.from_string("src/main", "/")
    assert entry.segments == ("src", "main")
    assert entry.original == "src/main"


def test_dictionary_entry_rejects_lossy_segments() -> None:
    with pytest.raises(ConfigurationError):
        DictionaryEntry(("a", "b"), "a-b", "/")


@pytest.mark.parametrize("identifier", ["", 5])
def test_dictionary_entry_rejects_malformed_identifiers(identifier: object) -> None:
    with pytest.raises(ConfigurationError):
        DictionaryEntry.from_string(identifier, "/")  # type: ignore[arg-type]
