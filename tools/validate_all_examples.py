#!/usr/bin/env python3
"""Validate all example project documents in examples/projects/.

Usage:
  python tools/validate_all_examples.py [--examples-dir examples/projects]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from validate_project import collect_errors, load_json


def main(argv: list[str] | None = None) -> int:
    """Run the contract and jsonschema checks on every example project."""
    ap = argparse.ArgumentParser()
    ap.add_argument("--examples-dir", type=Path, default=Path("examples/projects"))
    args = ap.parse_args(argv)
    examples_dir = args.examples_dir

    if not examples_dir.exists():
        print(f"ERROR: Examples directory not found: {examples_dir}")
        return 1

    project_files = sorted(examples_dir.glob("*.json"))

    if not project_files:
        print(f"WARNING: No .json files found in {examples_dir}")
        return 0

    print(f"Validating {len(project_files)} example project(s)...\n")

    failed = []
    passed = []

    for project_file in project_files:
        print(f"Validating {project_file.name}...", end=" ")
        errors = collect_errors(load_json(project_file), "projectData", use_jsonschema=True, strict=True)
        if not errors:
            print("[PASS]")
            passed.append(project_file.name)
        else:
            print("[FAIL]")
            for err in errors:
                print(f"  - {err}")
            failed.append(project_file.name)

    print(f"\n{'='*60}")
    print(f"Results: {len(passed)} passed, {len(failed)} failed")

    if failed:
        print("\nFailed files:")
        for name in failed:
            print(f"  - {name}")
        return 1

    print("\n[SUCCESS] All examples valid!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
