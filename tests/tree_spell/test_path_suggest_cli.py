"""Tests for the ``path_suggest`` CLI demonstration script."""

from __future__ import annotations

import importlib
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import path_suggest  # noqa: E402  -- imported after path mutation for pytest


def test_cli_outputs_expected_demo_lines(capsys) -> None:
    """Ensure the CLI emits the documented demonstration output."""

    importlib.reload(path_suggest)
    path_suggest.main()
    lines = capsys.readouterr().out.splitlines()

    assert lines[0:3] == [
        "Typo in file name: 'src/man' -> src/main (expected: src/main)",
        "  suggestions: src/main, lib/main",
        "",
    ]
    assert lines[3:6] == [
        "Missing directory: 'mini/mock.rb' -> lib/mini/mock.rb (expected: lib/mini/mock.rb)",
        "  suggestions: lib/mini/mock.rb",
        "",
    ]
    assert lines[6] == (
        "Transposition (augmented): 'app/modles/user.rb'"
        " -> app/models/user.rb (expected: app/models/user.rb)"
    )
    assert lines[7].startswith("  suggestions: app/models/user.rb")
