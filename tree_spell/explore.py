"""Statistical exploration of the tree checker against a flat baseline.

Each trial picks a random identifier from a dictionary fixture, corrupts it
with :class:`~tree_spell.human_typo.HumanTypo` and asks every corrector for
suggestions.  Three figures are reported per corrector:

* ``first_time_pct`` - share of trials where the original identifier is the
  first suggestion;
* ``mean_suggestions`` - suggestions returned over all trials divided by the
  number of trials that did not fail (``0`` when every trial failed);
  suggestions from failed trials count towards the total;
* ``failure_pct`` - share of trials where the original identifier is missing
  from the suggestions entirely.

The module also measures per-call latency and the mean edit distance produced
by the typo generator, which is the calibration figure for every other
number.  ``main`` exposes the experiments as a CLI.  Without ``--fixture`` it
reports accuracy on both bundled fixtures and times the correctors on the
largest one::

    python -m tree_spell.explore --repeat 2000
    python -m tree_spell.explore --fixture tree_spell/fixtures/mini_dir.yml --repeat 2000
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import argparse
import csv
import logging
import random
import time
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import yaml

from .baseline import Corrector, FallbackCorrector, FlatSpellChecker
from .checker import TreeSpellChecker
from .errors import ConfigurationError
from .human_typo import HumanTypo
from .similarity import levenshtein

logger = logging.getLogger(__name__)

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"
DEFAULT_FIXTURE = FIXTURE_DIR / "mini_dir.yml"
RSPEC_FIXTURE = FIXTURE_DIR / "rspec_dir.yml"
DEFAULT_FIXTURES = (DEFAULT_FIXTURE, RSPEC_FIXTURE)
DEFAULT_REPEAT = 10_000
CALIBRATION_WORD = "any_string_that_is_40_characters_long_sp"


@dataclass(frozen=True)
class AccuracySummary:
    """Accuracy figures collected for one corrector."""

    name: str
    trials: int
    first_time_pct: float
    mean_suggestions: float
    failure_pct: float

    def to_row(self) -> List[str]:
        """Serialise the summary for CSV persistence."""

        return [
            self.name,
            str(self.trials),
            f"{self.first_time_pct:.1f}",
            f"{self.mean_suggestions:.2f}",
            f"{self.failure_pct:.1f}",
        ]


@dataclass(frozen=True)
class TimingProfile:
    """Latency of ``correct`` calls for one corrector."""

    name: str
    calls: int
    mean_ms: float
    std_ms: float
    total_seconds: float


@dataclass(frozen=True)
class TypoDistanceReport:
    """Edit distance statistics of the typo generator for one word."""

    word: str
    trials: int
    mean_distance: float
    std_distance: float
    unchanged_pct: float
    max_length_growth: int


def _validate_repeat(repeat: int) -> None:
    if isinstance(repeat, bool) or not isinstance(repeat, int) or repeat <= 0:
        raise ConfigurationError("repeat must be a positive integer")


def load_fixture(path: Path) -> List[str]:
    """Load a YAML dictionary fixture holding a list of identifiers."""

    if not path.exists():
        raise FileNotFoundError(f"Dictionary fixture not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in fixture {path}: {exc}") from exc
    if not isinstance(data, list) or not data:
        raise ConfigurationError(f"Fixture {path} must contain a non-empty list")
    for item in data:
        if not isinstance(item, str) or not item:
            raise ConfigurationError(
                f"Fixture {path} must only contain non-empty strings, found {item!r}"
            )
    return data


def default_correctors(
    dictionary: Sequence[str], *, delimiter: str = "/"
) -> Dict[str, Corrector]:
    """Return the correctors compared by the CLI, keyed by display name."""

    tree = TreeSpellChecker(dictionary, delimiter=delimiter)
    flat = FlatSpellChecker(dictionary)
    return {
        "Tree": tree,
        "Standard": flat,
        "Augmented": TreeSpellChecker(dictionary, delimiter=delimiter, augment=True),
        "Fallback": FallbackCorrector(tree, flat),
    }


def _iter_trials(
    dictionary: Sequence[str], repeat: int, rng: random.Random
) -> Iterator[Tuple[str, str]]:
    for _ in range(repeat):
        word = rng.choice(dictionary)
        yield word, HumanTypo(word, rng=rng).call()


def evaluate_accuracy(
    dictionary: Sequence[str],
    correctors: Mapping[str, Corrector],
    *,
    repeat: int = DEFAULT_REPEAT,
    seed: Optional[int] = None,
) -> List[AccuracySummary]:
    """Run ``repeat`` typo trials and summarise each corrector's accuracy."""

    _validate_repeat(repeat)
    if not dictionary:
        raise ConfigurationError("dictionary must contain at least one entry")

    first_hits: Dict[str, List[bool]] = {name: [] for name in correctors}
    lengths: Dict[str, List[int]] = {name: [] for name in correctors}
    failures: Dict[str, List[bool]] = {name: [] for name in correctors}

    rng = random.Random(seed)
    for word, word_error in _iter_trials(dictionary, repeat, rng):
        for name, corrector in correctors.items():
            suggestions = list(corrector.correct(word_error))
            first_hits[name].append(bool(suggestions) and suggestions[0] == word)
            lengths[name].append(len(suggestions))
            failures[name].append(word not in suggestions)

    summaries: List[AccuracySummary] = []
    for name in correctors:
        failed = np.asarray(failures[name], dtype=bool)
        counts = np.asarray(lengths[name], dtype=np.int64)
        found = repeat - int(failed.sum())
        summaries.append(
            AccuracySummary(
                name=name,
                trials=repeat,
                first_time_pct=float(np.mean(first_hits[name]) * 100.0),
                mean_suggestions=float(counts.sum() / found) if found else 0.0,
                failure_pct=float(failed.mean() * 100.0),
            )
        )
        logger.debug("%s accuracy: %s", name, summaries[-1])
    return summaries


def measure_execution_speed(
    dictionary: Sequence[str],
    correctors: Mapping[str, Corrector],
    *,
    repeat: int = DEFAULT_REPEAT,
    seed: Optional[int] = None,
) -> List[TimingProfile]:
    """Time ``correct`` on identical typo streams for every corrector."""

    _validate_repeat(repeat)
    if not dictionary:
        raise ConfigurationError("dictionary must contain at least one entry")

    queries = [error for _, error in _iter_trials(dictionary, repeat, random.Random(seed))]
    profiles: List[TimingProfile] = []
    for name, corrector in correctors.items():
        samples = np.empty(len(queries), dtype=np.float64)
        for index, query in enumerate(queries):
            start = time.perf_counter()
            corrector.correct(query)
            samples[index] = time.perf_counter() - start
        profiles.append(
            TimingProfile(
                name=name,
                calls=len(queries),
                mean_ms=float(samples.mean() * 1_000),
                std_ms=float(samples.std() * 1_000),
                total_seconds=float(samples.sum()),
            )
        )
    return profiles


def measure_typo_distance(
    word: str = CALIBRATION_WORD,
    *,
    repeat: int = DEFAULT_REPEAT,
    seed: Optional[int] = None,
) -> TypoDistanceReport:
    """Sample the typo generator and report the resulting edit distances."""

    _validate_repeat(repeat)
    generator = HumanTypo(word, seed=seed)
    samples = [generator.call() for _ in range(repeat)]
    distances = np.asarray([levenshtein(word, sample) for sample in samples], dtype=np.float64)
    growth = max(len(sample) - len(word) for sample in samples)
    return TypoDistanceReport(
        word=word,
        trials=repeat,
        mean_distance=float(distances.mean()),
        std_distance=float(distances.std()),
        unchanged_pct=float(np.mean(distances == 0) * 100.0),
        max_length_growth=growth,
    )


def format_accuracy_table(title: str, summaries: Iterable[AccuracySummary]) -> List[str]:
    """Render accuracy summaries as fixed-width text lines."""

    lines = [
        f"{title} Summary".center(80).rstrip(),
        "-" * 80,
        f" {'Method':<10}| {'First Time (%)':>16} {'Mean Suggestions':>18} {'Failures (%)':>14}",
        "-" * 80,
    ]
    for summary in summaries:
        lines.append(
            f" {summary.name:<10}| {summary.first_time_pct:>16.1f}"
            f" {summary.mean_suggestions:>18.1f} {summary.failure_pct:>14.1f}"
        )
    return lines


def write_summaries_to_csv(
    path: Path, summaries: Iterable[AccuracySummary], *, newline: str = ""
) -> None:
    """Persist accuracy summaries to ``path`` using a deterministic header."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline=newline) as handle:
        writer = csv.writer(handle)
        writer.writerow(
            ["corrector", "trials", "first_time_pct", "mean_suggestions", "failure_pct"]
        )
        for summary in summaries:
            writer.writerow(summary.to_row())


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point running every experiment on the selected fixtures."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--fixture",
        type=Path,
        action="append",
        default=None,
        help=(
            "YAML file containing the list of dictionary identifiers. Repeat to "
            "compare several fixtures; defaults to every bundled fixture."
        ),
    )
    parser.add_argument(
        "--repeat",
        type=int,
        default=DEFAULT_REPEAT,
        help="Number of typo trials per experiment.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs.")
    parser.add_argument(
        "--delimiter",
        default="/",
        help="Segment delimiter used by the fixture identifiers.",
    )
    parser.add_argument(
        "--word",
        default=CALIBRATION_WORD,
        help="Word used to calibrate the typo generator's mean edit distance.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional CSV destination for the accuracy summaries.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))
    fixtures: List[Path] = args.fixture or list(DEFAULT_FIXTURES)

    reports: List[Tuple[Path, List[AccuracySummary]]] = []
    try:
        dictionaries = {fixture: load_fixture(fixture) for fixture in fixtures}
        for fixture, dictionary in dictionaries.items():
            correctors = default_correctors(dictionary, delimiter=args.delimiter)
            reports.append(
                (
                    fixture,
                    evaluate_accuracy(dictionary, correctors, repeat=args.repeat, seed=args.seed),
                )
            )
        timing_fixture = max(dictionaries, key=lambda fixture: len(dictionaries[fixture]))
        timing_dictionary = dictionaries[timing_fixture]
        timings = measure_execution_speed(
            timing_dictionary,
            default_correctors(timing_dictionary, delimiter=args.delimiter),
            repeat=args.repeat,
            seed=args.seed,
        )
        typo_report = measure_typo_distance(args.word, repeat=args.repeat, seed=args.seed)
    except (ConfigurationError, FileNotFoundError) as exc:
        logger.error("Exploration failed: %s", exc)
        return 1

    for fixture, summaries in reports:
        for line in format_accuracy_table(fixture.stem, summaries):
            print(line)
        print()
    print(f"Timing on {timing_fixture.stem} ({len(timing_dictionary)} identifiers)")
    for timing in timings:
        print(f"{timing.name:<10} average time (ms): {timing.mean_ms:.3f} (std {timing.std_ms:.3f})")
    print()
    print(
        f"HumanTypo mean_changes: {typo_report.mean_distance:.2f}"
        f" with n_repeat: {typo_report.trials}"
    )

    if args.output is not None:
        rows = [
            replace(summary, name=f"{fixture.stem}:{summary.name}")
            for fixture, summaries in reports
            for summary in summaries
        ]
        write_summaries_to_csv(args.output, rows)
        logger.info("Summaries written to %s", args.output)
    return 0


__all__ = [
    "AccuracySummary",
    "DEFAULT_FIXTURE",
    "DEFAULT_FIXTURES",
    "RSPEC_FIXTURE",
    "TimingProfile",
    "TypoDistanceReport",
    "default_correctors",
    "evaluate_accuracy",
    "format_accuracy_table",
    "load_fixture",
    "main",
    "measure_execution_speed",
    "measure_typo_distance",
    "write_summaries_to_csv",
]


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
