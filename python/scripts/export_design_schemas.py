#!/usr/bin/env python3
"""Write the designer request/response JSON schemas to a directory."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

SCRIPT_PATH = Path(__file__).resolve()
PYTHON_ROOT = SCRIPT_PATH.parent.parent
PROJECT_ROOT = PYTHON_ROOT.parent

for candidate in (PROJECT_ROOT, PYTHON_ROOT):
    if str(candidate) not in sys.path:
        sys.path.insert(0, str(candidate))

from speakerbox_core import designer_json_schemas  # noqa: E402 - path adjusted above


def _write_json(path: Path, document: Any, indent: int | None) -> Path:
    path.write_text(json.dumps(document, indent=indent, sort_keys=indent is not None) + "\n", encoding="utf-8")
    return path


def export_design_schemas(
    output_dir: Path,
    *,
    operations: list[str] | None = None,
    pretty: bool = False,
) -> list[Path]:
    """Write ``catalog.json`` plus one ``<operation>-<request|response>.schema.json`` per schema.

    ``operations`` restricts the export; the catalog always mirrors what was written.
    """

    catalog = designer_json_schemas()
    if operations:
        unknown = sorted(set(operations) - set(catalog))
        if unknown:
            raise ValueError(f"Unknown designer operation(s): {', '.join(unknown)}")
        catalog = {name: catalog[name] for name in operations}

    indent = 2 if pretty else None
    output_dir.mkdir(parents=True, exist_ok=True)
    written = [_write_json(output_dir / "catalog.json", catalog, indent)]
    for operation, pair in catalog.items():
        for direction in ("request", "response"):
            written.append(
                _write_json(output_dir / f"{operation}-{direction}.schema.json", pair[direction], indent)
            )
    return written


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("schemas"),
        help="Target directory (created when missing).",
    )
    parser.add_argument(
        "--operation",
        dest="operations",
        action="append",
        choices=sorted(designer_json_schemas()),
        help="Only export this operation (repeatable; default: all).",
    )
    parser.add_argument("--pretty", action="store_true", help="Indent and sort keys in the JSON output.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    output_dir = args.output.expanduser()
    written = export_design_schemas(output_dir, operations=args.operations, pretty=args.pretty)
    names = ", ".join(path.name for path in written)
    print(f"Wrote {len(written)} schema files to {output_dir.resolve()} ({names})")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
