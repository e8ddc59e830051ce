"""Developer tasks powered by Invoke."""

from __future__ import annotations

import pathlib
import subprocess
from typing import Iterable

from invoke import task

ROOT = pathlib.Path(__file__).parent.resolve()
RESULTS_DIR = ROOT / "results"


def _run(command: Iterable[str] | str) -> None:
    if isinstance(command, str):
        cmd = command
    else:
        cmd = " ".join(command)
    subprocess.run(cmd, shell=True, check=True, cwd=ROOT)


def _ensure_results_dir() -> None:
    RESULTS_DIR.mkdir(exist_ok=True)


@task
def tests(_context):
    """Run the unit tests (quick feedback)."""
    _run(["uv", "run", "pytest", "tests/"])


@task
def coverage(_context):
    """Run tests under coverage and generate reports."""
    _ensure_results_dir()
    _run(["uv", "run", "coverage", "erase"])
    _run(
        [
            "uv",
            "run",
            "coverage",
            "run",
            "--source=src/ariaview",
            "-m",
            "pytest",
            "tests/",
            "--junitxml=results/pytest.xml",
        ]
    )
    _run(["uv", "run", "coverage", "report"])
    _run(["uv", "run", "coverage", "html", "-d", "results/htmlcov"])
    _run(["uv", "run", "coverage", "xml", "-o", "results/coverage.xml"])


@task
def attribute_table(_context, output="attribute-table.yaml"):
    """Write the built-in attribute table as YAML (a starting point for ARIAVIEW_ATTRIBUTE_TABLE)."""
    from ariaview.config import default_attribute_definitions, dump_attribute_table

    path = ROOT / output
    path.write_text(dump_attribute_table(default_attribute_definitions()), encoding="utf-8")
    print(f"Wrote {path}")


@task
def build(_context):
    """Build distribution artifacts."""
    _run(["uv", "build"])
