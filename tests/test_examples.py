"""Run each script under examples/ as ``__main__`` and check it prints something."""

from __future__ import annotations

import runpy
import warnings
from pathlib import Path

import pytest

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"
SCRIPTS = sorted(EXAMPLES.glob("*/*.py"))


def test_examples_exist() -> None:
    assert {path.name for path in SCRIPTS} >= {"basic_usage.py", "observers.py"}


@pytest.mark.parametrize("script", SCRIPTS, ids=lambda path: path.name)
def test_example_script_runs(script: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        runpy.run_path(str(script), run_name="__main__")

    assert capsys.readouterr().out.strip()
