"""Run a WHERE clause through the sanitizer from the command line.

Usage:
    cd backend
    python -m tools.sanitize_where --table users "wrong.status = 'active' AND 1=1"
    python -m tools.sanitize_where --table users --qualify "(status = 'a' OR status = 'b')"
    python -m tools.sanitize_where --table users --allow Department --check "Department.name = 'x'"
    echo "status = 'active'" | python -m tools.sanitize_where --table users -
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from whereguard.core.config import get_settings
from whereguard.core.exceptions import ClauseTooLongError, SchemaRegistryError
from whereguard.core.logging_config import configure_logging
from whereguard.core.models import RequestOptions
from whereguard.sanitizer import prepare_where_clause, sanitize_where_clause
from whereguard.schema.registry import load_column_registry
from whereguard.security.where_guard import validate_security


def build_parser(default_schema: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sanitize a SQL WHERE clause fragment")
    parser.add_argument("clause", help="WHERE clause, or '-' to read it from stdin")
    parser.add_argument("--table", default="", help="Table the clause filters")
    parser.add_argument(
        "--allow",
        action="append",
        default=[],
        help="Additional allowed prefix (preload relation or join alias); repeatable",
    )
    parser.add_argument(
        "--schema",
        default=default_schema,
        help="Column registry file (YAML or JSON)",
    )
    parser.add_argument(
        "--qualify",
        action="store_true",
        help="Also prefix bare columns with the table name",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only run the security check; exit 1 when the clause is rejected",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    args = build_parser(settings.schema_registry_path).parse_args(argv)
    configure_logging(settings.log_level)

    clause = sys.stdin.read() if args.clause == "-" else args.clause

    if args.check:
        check = validate_security(clause)
        if check.ok:
            print("OK")
            return 0
        print(f"REJECTED: {check.reason}")
        return 1

    try:
        registry = load_column_registry(args.schema)
    except SchemaRegistryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    options = RequestOptions(join_aliases=args.allow)
    try:
        if args.qualify:
            result = prepare_where_clause(clause, args.table, column_oracle=registry, options=options)
        else:
            result = sanitize_where_clause(clause, args.table, column_oracle=registry, options=options)
    except ClauseTooLongError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
