#!/usr/bin/env python3
"""Validate a project document (or a single item) against the pmcontract schemas.

Usage:
  python tools/validate_project.py path/to/project.json [--kind project|item|feature|bug|task] [--jsonschema] [--strict]
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from pmcontract.config import configure_logging
from pmcontract.schema_validator import SchemaValidator
from pmcontract.schemas import registered_schema
from pmcontract.validation import validate_with_jsonschema

KIND_TO_SCHEMA = {
    "project": "projectData",
    "feature": "feature",
    "bug": "bug",
    "task": "task",
}


def load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def resolve_schema_name(kind: str, document: Any) -> str | None:
    """Map --kind to a schema name; 'item' reads the document's type tag."""
    if kind != "item":
        return KIND_TO_SCHEMA[kind]
    if isinstance(document, dict) and document.get("type") in ("feature", "bug", "task"):
        return document["type"]
    return None


def collect_errors(document: Any, schema_name: str, *, use_jsonschema: bool, strict: bool) -> list[str]:
    all_errors = []

    result = SchemaValidator(strict=strict).validate(document, registered_schema(schema_name))
    for err in result.errors:
        all_errors.append(f"Contract: {err}")

    if use_jsonschema:
        for err in validate_with_jsonschema(document, schema_name):
            all_errors.append(f"Schema: {err}")

    return all_errors


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("document", type=Path, help="Path to JSON document")
    ap.add_argument(
        "--kind",
        choices=["project", "item", "feature", "bug", "task"],
        default="project",
        help="What the document contains (default: project)",
    )
    ap.add_argument("--jsonschema", action="store_true", help="Also run the draft 7 jsonschema validator")
    ap.add_argument("--strict", action="store_true", help="Report fields the schema does not declare")
    args = ap.parse_args(argv)

    configure_logging()
    document = load_json(args.document)

    schema_name = resolve_schema_name(args.kind, document)
    if schema_name is None:
        tag = document.get("type") if isinstance(document, dict) else None
        print("INVALID: 1 error(s)")
        print(f"- Contract: Expected 'feature', 'bug', or 'task', got '{tag}'")
        return 2

    all_errors = collect_errors(document, schema_name, use_jsonschema=args.jsonschema, strict=args.strict)

    if not all_errors:
        print(f"OK: {args.document.name} is a valid {schema_name}")
        return 0

    print(f"INVALID: {len(all_errors)} error(s)")
    for err in all_errors:
        print(f"- {err}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
