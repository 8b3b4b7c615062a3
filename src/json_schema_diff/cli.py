"""Command-line interface for json-schema-diff.

Usage:
    json-schema-diff old.json new.json        # one JSON change per line
    json-schema-diff old.json new.json -v     # with DEBUG logging on stderr
    json-schema-diff --version

Each output line is the change's wire form plus an ``is_breaking`` field::

    {"path": "", "change": "TypeAdd", "added": "number", "is_breaking": false}

Exit status is 0 whenever the diff ran, whether or not changes were found,
and 1 when a file cannot be read or is not a valid JSON Schema.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from json_schema_diff import __version__
from json_schema_diff.api import diff
from json_schema_diff.errors import SchemaDiffError

logger = logging.getLogger(__name__)


def _load(path: str) -> Any:
    with Path(path).open(encoding="utf-8") as fh:
        return json.load(fh)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-schema-diff",
        description="Print the changes between two JSON Schema documents.",
    )
    parser.add_argument("old", help="Path to the old (LHS) schema")
    parser.add_argument("new", help="Path to the new (RHS) schema")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log diagnostic messages to stderr",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        lhs = _load(args.old)
        rhs = _load(args.new)
        changes = diff(lhs, rhs)
    except OSError as e:
        print(f"Error: cannot read schema: {e}", file=sys.stderr)
        return 1
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        print(f"Error: invalid JSON: {e}", file=sys.stderr)
        return 1
    except SchemaDiffError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.debug("Writing %d change(s)", len(changes))
    for change in changes:
        print(json.dumps(change.to_dict(include_breaking=True)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
