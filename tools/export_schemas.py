#!/usr/bin/env python3
"""Write every registered pmcontract schema to <outdir>/<name>.schema.json.

The exported files are standard draft 7 JSON Schema, usable by any
compliant validator.

Usage:
  python tools/export_schemas.py schemas/
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from pmcontract.schemas import SCHEMA_NAMES, get_schema

DRAFT7 = "http://json-schema.org/draft-07/schema#"


def export_schemas(outdir: Path) -> list[Path]:
    outdir.mkdir(parents=True, exist_ok=True)
    written = []
    for name in SCHEMA_NAMES:
        schema = {"$schema": DRAFT7, "title": name, **get_schema(name)}
        path = outdir / f"{name}.schema.json"
        with path.open("w", encoding="utf-8") as f:
            json.dump(schema, f, indent=2)
            f.write("\n")
        written.append(path)
    return written


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("outdir", type=Path, help="Directory to write schema files into")
    args = ap.parse_args(argv)

    for path in export_schemas(args.outdir):
        print(f"wrote {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
