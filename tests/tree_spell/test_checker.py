"""Tests for the tree spell checker."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import logging
import random

import pytest

from tree_spell import checker as checker_module
from tree_spell.checker import MatchCandidate, TreeSpellChecker, new_checker
from tree_spell.errors import ConfigurationError, InvalidQueryError
from tree_spell.explore import DEFAULT_FIXTURE, load_fixture
from tree_spell.human_typo import HumanTypo
from tree_spell.similarity import ScoringMode

SCENARIO = ["src/main", "src/mainTest", "lib/main"]
FIXTURE = load_fixture(DEFAULT_FIXTURE)


def _typo_queries(count: int, seed: int) -> list[str]:
    rng = random.Random(seed)
    return [HumanTypo(rng.choice(FIXTURE), rng=rng).call() for _ in range(count)]


def test_scenario_ranks_closest_entry_first() -> None:
    checker = TreeSpellChecker(SCENARIO, delimiter="/")

    candidates = checker.candidates("src/man")

    assert candidates[0] == MatchCandidate(("src", "main"), 1, "src/main")
    assert checker.correct("src/man") == ["src/main", "lib/main"]


@pytest.mark.parametrize("augment", [False, True])
def test_exact_entries_rank_first_with_zero_cost(augment: bool) -> None:
    checker = TreeSpellChecker(FIXTURE, delimiter="/", augment=augment)
    for entry in FIXTURE:
        best = checker.candidates(entry)[0]
        assert best.path == entry
        assert best.cost == 0


@pytest.mark.parametrize("augment", [False, True])
def test_results_respect_bounds_and_ordering(augment: bool) -> None:
    checker = TreeSpellChecker(
        FIXTURE, delimiter="/", augment=augment, max_total_distance=3, max_suggestions=2
    )
    for query in _typo_queries(200, seed=17):
        candidates = checker.candidates(query)
        assert len(candidates) <= 2
        assert all(0 <= candidate.cost <= 3 for candidate in candidates)
        keys = [candidate.sort_key for candidate in candidates]
        assert keys == sorted(keys)
        assert checker.correct(query) == [candidate.path for candidate in candidates]


def test_correct_is_deterministic() -> None:
    checker = TreeSpellChecker(FIXTURE, delimiter="/")
    for query in _typo_queries(50, seed=3):
        assert checker.correct(query) == checker.correct(query)


def test_ties_break_on_lexicographic_segment_order() -> None:
    forward = TreeSpellChecker(["b/main", "a/main"], delimiter="/")
    backward = TreeSpellChecker(["a/main", "b/main"], delimiter="/")

    assert forward.correct("c/main") == ["a/main", "b/main"]
    assert backward.correct("c/main") == ["a/main", "b/main"]


def test_missing_leading_component_costs_one_segment_penalty() -> None:
    checker = TreeSpellChecker(
        ["lib/mini/mock.rb", "lib/mini/spec.rb", "test/test_helper.rb"], delimiter="/"
    )
    candidates = checker.candidates("mini/mock.rb")

    assert [candidate.path for candidate in candidates] == ["lib/mini/mock.rb"]
    assert candidates[0].cost == 2


def test_extra_query_component_costs_one_segment_penalty() -> None:
    checker = TreeSpellChecker(["src/main"], delimiter="/")
    candidates = checker.candidates("src/extra/main")

    assert [candidate.path for candidate in candidates] == ["src/main"]
    assert candidates[0].cost == 2


def test_query_deeper_than_tree_uses_penalty_instead_of_failing() -> None:
    checker = TreeSpellChecker(["a/b"], delimiter="/")

    assert checker.correct("a/b/c") == ["a/b"]
    # Only one segment-level edit is allowed per candidate.
    assert checker.correct("a/b/c/d") == []


def test_augmented_mode_discounts_transpositions() -> None:
    dictionary = ["app/models/user.rb", "app/models/order.rb"]
    standard = TreeSpellChecker(dictionary, delimiter="/")
    augmented = TreeSpellChecker(dictionary, delimiter="/", augment=True)

    assert standard.candidates("app/modles/user.rb")[0].cost == 2
    best = augmented.candidates("app/modles/user.rb")[0]
    assert best.path == "app/models/user.rb"
    assert best.cost == pytest.approx(0.85)


def test_zero_round_typo_returns_entry_first() -> None:
    word = "lib/mini/test_task.rb"
    query = HumanTypo(word, max_edits=0).call()
    checker = TreeSpellChecker(FIXTURE, delimiter="/")

    best = checker.candidates(query)[0]
    assert best.path == word
    assert best.cost == 0


def test_empty_dictionary_returns_no_suggestions(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="tree_spell.checker"):
        checker = TreeSpellChecker([], delimiter="/")

    assert checker.correct("anything") == []
    assert "Empty dictionary" in caplog.text


def test_empty_query_returns_no_suggestions() -> None:
    checker = TreeSpellChecker(SCENARIO, delimiter="/")
    assert checker.correct("") == []


@pytest.mark.parametrize("query", [None, 42, ["src", "main"]])
def test_non_string_queries_raise(query: object) -> None:
    checker = TreeSpellChecker(SCENARIO, delimiter="/")
    with pytest.raises(InvalidQueryError):
        checker.correct(query)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "options",
    [
        {"max_total_distance": 0},
        {"max_total_distance": -1},
        {"max_total_distance": float("inf")},
        {"max_total_distance": True},
        {"max_suggestions": 0},
        {"max_suggestions": 1.5},
        {"segment_penalty": 0},
        {"delimiter": ""},
        {"augment": "yes"},
    ],
)
def test_invalid_options_raise_configuration_error(options: dict) -> None:
    with pytest.raises(ConfigurationError):
        TreeSpellChecker(SCENARIO, **options)


@pytest.mark.parametrize("dictionary", ["src/main", None, ["src/main", 7], ["src/main", ""]])
def test_malformed_dictionaries_raise_configuration_error(dictionary: object) -> None:
    with pytest.raises(ConfigurationError):
        TreeSpellChecker(dictionary, delimiter="/")  # type: ignore[arg-type]


def test_dissimilar_subtrees_are_pruned(monkeypatch: pytest.MonkeyPatch) -> None:
    dictionary = ["src/main"] + [f"qwxyzv/leaf{index}" for index in range(50)]
    checker = TreeSpellChecker(dictionary, delimiter="/", segment_penalty=5)
    calls: list[tuple[str, str]] = []
    original = checker_module.segment_cost

    def counting_cost(query_segment, node_label, mode, *, limit=None):  # noqa: ANN001, ANN202
        calls.append((query_segment, node_label))
        return original(query_segment, node_label, mode, limit=limit)

    monkeypatch.setattr(checker_module, "segment_cost", counting_cost)

    assert checker.correct("src/main") == ["src/main"]
    assert not any(label.startswith("leaf") for _, label in calls)
    assert len(calls) == 3


def test_concurrent_queries_match_sequential_results() -> None:
    checker = TreeSpellChecker(FIXTURE, delimiter="/", augment=True)
    queries = _typo_queries(40, seed=23)
    expected = [checker.correct(query) for query in queries]

    with ThreadPoolExecutor(max_workers=4) as pool:
        assert list(pool.map(checker.correct, queries)) == expected


def test_new_checker_forwards_options() -> None:
    checker = new_checker(SCENARIO, delimiter="/", augment=True, max_suggestions=1)
    assert checker.mode is ScoringMode.AUGMENTED
    assert checker.correct("src/man") == ["src/main"]
