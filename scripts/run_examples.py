#!/usr/bin/env python3
"""Run every example script and report results.

Examples are discovered in examples/, run in order, each in its own scratch
working directory, and the run stops at the first failure.
"""

import subprocess
import sys
import tempfile
from pathlib import Path

EXAMPLE_TIMEOUT_SECONDS = 60


def find_examples(examples_dir: Path) -> list[Path]:
    """Example scripts sorted by their numeric prefix."""
    return sorted(f for f in examples_dir.glob("*.py") if f.name != "__init__.py")


def run_example(example_path: Path) -> bool:
    """Run one example, printing its output. True on exit code 0."""
    print(f"Running: {example_path.name}...", flush=True)

    with tempfile.TemporaryDirectory() as workdir:
        try:
            result = subprocess.run(
                [sys.executable, str(example_path)],
                capture_output=True,
                text=True,
                cwd=workdir,
                timeout=EXAMPLE_TIMEOUT_SECONDS,
            )
        except subprocess.TimeoutExpired:
            print(f"✗ {example_path.name} TIMED OUT (>{EXAMPLE_TIMEOUT_SECONDS}s)")
            return False

    if result.returncode != 0:
        print(f"✗ {example_path.name} FAILED (exit code {result.returncode})")
        for label, stream in (("STDOUT", result.stdout), ("STDERR", result.stderr)):
            if stream:
                print(f"{label}:\n{stream}")
        return False

    print(f"✓ {example_path.name} passed\n")
    if result.stdout:
        print(result.stdout)
    return True


def main() -> int:
    examples_dir = Path(__file__).resolve().parent.parent / "examples"
    if not examples_dir.is_dir():
        print(f"Error: Examples directory not found: {examples_dir}")
        return 1

    examples = find_examples(examples_dir)
    print(f"Found {len(examples)} example(s) to run\n")
    print("=" * 60)

    for done, example in enumerate(examples):
        if not run_example(example):
            print("=" * 60)
            print(f"\nFAILED after {done}/{len(examples)} examples: {example.name}\n")
            return 1

    print("=" * 60)
    print(f"\nAll {len(examples)} example(s) passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
