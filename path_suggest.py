"""Command line demonstration of the tree spell checker.

Running the module prints, for a few built-in cases, the best suggestion the
checker finds for a corrupted path together with the full suggestion list.
Each case covers one kind of mistake the checker is designed for: a typo
inside a file name, a missing leading directory and a transposition scored in
augmented mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from tree_spell import TreeSpellChecker


@dataclass(frozen=True)
class DemoCase:
    """Container describing a dictionary, a corrupted query and the expected fix."""

    name: str
    dictionary: Sequence[str]
    query: str
    expected_first: str
    augment: bool = False

    def build(self) -> TreeSpellChecker:
        """Materialise the checker associated with this demo case."""

        return TreeSpellChecker(self.dictionary, delimiter="/", augment=self.augment)


DEMO_CASES = (
    DemoCase(
        name="Typo in file name",
        dictionary=("src/main", "src/mainTest", "lib/main"),
        query="src/man",
        expected_first="src/main",
    ),
    DemoCase(
        name="Missing directory",
        dictionary=("lib/mini/mock.rb", "lib/mini/spec.rb", "test/test_helper.rb"),
        query="mini/mock.rb",
        expected_first="lib/mini/mock.rb",
    ),
    DemoCase(
        name="Transposition (augmented)",
        dictionary=("app/models/user.rb", "app/models/order.rb", "app/views/users"),
        query="app/modles/user.rb",
        expected_first="app/models/user.rb",
        augment=True,
    ),
)


def _format_report(case: DemoCase, suggestions: List[str]) -> List[str]:
    """Return formatted output lines for *case* and its *suggestions*."""

    first = suggestions[0] if suggestions else "<none>"
    if first != case.expected_first:
        raise RuntimeError(
            "Demo case expectation mismatch:"
            f" {case.name} expected {case.expected_first!r}"
            f" but received {first!r}"
        )
    return [
        f"{case.name}: {case.query!r} -> {first} (expected: {case.expected_first})",
        "  suggestions: " + ", ".join(suggestions),
    ]


def main() -> None:
    """Execute the demonstration flow for all configured cases."""

    for case in DEMO_CASES:
        suggestions = case.build().correct(case.query)
        for line in _format_report(case, suggestions):
            print(line)
        print()  # Spacer between cases


if __name__ == "__main__":
    main()
