"""CLI commands for previewing targeting and pricing offline or against the backend."""

import argparse
import json
import logging
import sys
from contextlib import closing
from pathlib import Path

from pydantic import ValidationError

from ..domain.customer import Customer
from ..domain.filters import FilterSet
from ..errors import BackendError
from ..models.mcp_requests import PreviewRequest
from ..wiring import build_preview_service, build_pricing_table
from .validation import validate_filters


def _load_json(path: Path, what: str):
    if not path.exists():
        print(f"Error: {what} file not found: {path}", file=sys.stderr)
        sys.exit(1)
    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            print(f"Error: {what} file is not valid JSON: {e}", file=sys.stderr)
            sys.exit(1)


def load_filters_from_file(path: Path, legacy: bool = False) -> FilterSet:
    """Load a FilterSet (or the console's legacy filter shape) from a JSON file."""
    raw = _load_json(path, "filters")
    if not isinstance(raw, dict):
        print("Error: filters file must contain a JSON object.", file=sys.stderr)
        sys.exit(1)
    try:
        return FilterSet.from_legacy(raw) if legacy else FilterSet.model_validate(raw)
    except ValidationError as e:
        print(f"Error: invalid filters: {e}", file=sys.stderr)
        sys.exit(1)


def load_customers_from_file(path: Path) -> list[Customer]:
    """Load customers from a JSON list (or a directory page with a ``customers`` key)."""
    raw = _load_json(path, "customers")
    if isinstance(raw, dict):
        raw = raw.get("customers")
    if not isinstance(raw, list):
        print("Error: customers file must contain a list of customer objects.", file=sys.stderr)
        sys.exit(1)
    customers: list[Customer] = []
    for i, item in enumerate(raw):
        try:
            customers.append(Customer.model_validate(item))
        except ValidationError as e:
            print(f"Error: invalid customer at index {i}: {e}", file=sys.stderr)
            sys.exit(1)
    return customers


def run_preview(args: argparse.Namespace) -> int:
    filters = load_filters_from_file(args.filters, legacy=args.legacy) if args.filters else FilterSet()
    customers = load_customers_from_file(args.customers) if args.customers else None

    validation = validate_filters(filters, build_pricing_table(), args.year)
    for error in validation.errors:
        print(f"Error: {error}", file=sys.stderr)
    for warning in validation.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    try:
        with closing(build_preview_service(with_directory=customers is None)) as service:
            response, _ = service.preview(
                PreviewRequest(filters=filters, customers=customers, current_year=args.year)
            )
    except BackendError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(response.model_dump(by_alias=True), indent=2))
        return 0
    print(f"Active filters: {', '.join(response.active_filters) or 'none'}")
    print(f"Recipients: {response.recipients:,}")
    print(f"Unit price: {response.unit_price:,} won")
    print(f"Estimated cost: {response.estimated_cost:,} won")
    if not response.can_submit:
        print("Submission blocked: estimated cost is zero.")
    return 0


def run_pricing(args: argparse.Namespace) -> int:
    table = build_pricing_table()
    if args.active is not None:
        result = table.quote(args.recipients, args.active)
        print(json.dumps(result.to_dict()))
        return 0
    for tier in table.to_dict()["tiers"]:
        print(f"{tier['active_filters']} filter(s): {tier['unit_price']:,} won")
    print(f"(more than {table.max_index} filters: {table.unit_price(table.max_index):,} won)")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Campaign targeting and pricing preview")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    preview_parser = subparsers.add_parser("preview", help="Count matching customers and estimate cost")
    preview_parser.add_argument("--filters", type=Path, default=None, help="JSON file with filters")
    preview_parser.add_argument(
        "--legacy", action="store_true", help="Filters file uses the console's flag-less shape"
    )
    preview_parser.add_argument(
        "--customers", type=Path, default=None, help="JSON file with customers (default: fetch from backend)"
    )
    preview_parser.add_argument("--year", type=int, default=None, help="Year used for age computation")
    preview_parser.add_argument("--json", action="store_true", help="Print the preview as JSON")

    pricing_parser = subparsers.add_parser("pricing", help="Show the pricing table or quote a campaign")
    pricing_parser.add_argument("--active", type=int, default=None, help="Number of active filters")
    pricing_parser.add_argument("--recipients", type=int, default=0, help="Number of recipients")

    serve_parser = subparsers.add_parser("serve", help="Run the MCP server over stdio")
    serve_parser.add_argument("--mode", choices=["preview", "console"], default="preview")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, stream=sys.stderr)

    if args.command == "preview":
        return run_preview(args)
    if args.command == "pricing":
        return run_pricing(args)
    if args.command == "serve":
        from .mcp_console import main as serve_main
        serve_main([args.mode])
        return 0
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
