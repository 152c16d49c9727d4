"""Command-line utility for parsing queries, searching flights, and managing history."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from app.deps import get_app_state
from app.services.flight_service import FlightServiceError
from app.services.maintenance_service import purge_system
from app.services.query_service import (
    QueryParseError,
    list_history,
    parse_natural_language_query,
    run_ai_query,
)
from core.router.temporal_router import match_fallback_rule


def cmd_parse(args: argparse.Namespace) -> int:
    """Resolve a query into filters and print them."""
    try:
        resolution = parse_natural_language_query(args.query)
    except QueryParseError as exc:
        print(f"Could not parse your query: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(resolution.to_dict(), indent=2))
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    """Run the full AI search and pretty-print the flights that came back."""
    try:
        response = run_ai_query(args.query)
    except QueryParseError as exc:
        print(f"Could not parse your query: {exc}", file=sys.stderr)
        return 1
    except FlightServiceError as exc:
        print(f"Flight search failed: {exc}", file=sys.stderr)
        return 1

    filters = response["filters"]
    print("Filters:")
    print(json.dumps(filters, indent=2))
    print(f"\nTime range source: {response['time_range_source']}")
    flights = response["flights"]
    print(f"\nFlights ({flights['count']}):")
    for item in flights["items"]:
        data = item.get("data", {})
        print(
            "  {number:<8} {origin} → {dest}  {dep}".format(
                number=data.get("flight_number") or "?",
                origin=data.get("origin_iata") or "???",
                dest=data.get("destination_iata") or "???",
                dep=data.get("dep_hhmm_local") or "--:--",
            )
        )
    return 0


def cmd_fallback(args: argparse.Namespace) -> int:
    """Show what the rule-based router alone makes of a query."""
    rule, tags = match_fallback_rule(args.query)
    print(json.dumps({"rule": rule, "departure_time_range": tags}, indent=2))
    return 0


def cmd_history(args: argparse.Namespace) -> int:
    for record in list_history(args.limit):
        print(f"{record['created_at']}  [{record['result_count']:>4}]  {record['user_query']}")
    return 0


def cmd_purge(_args: argparse.Namespace) -> int:
    """Clear query history and cached flight responses."""
    print(json.dumps(purge_system(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(prog="flightquery")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    parse_p = sub.add_parser("parse")
    parse_p.add_argument("--query", required=True)
    parse_p.set_defaults(func=cmd_parse)

    search_p = sub.add_parser("search")
    search_p.add_argument("--query", required=True)
    search_p.set_defaults(func=cmd_search)

    fallback_p = sub.add_parser("fallback")
    fallback_p.add_argument("--query", required=True)
    fallback_p.set_defaults(func=cmd_fallback)

    history_p = sub.add_parser("history")
    history_p.add_argument("--limit", type=int, default=10)
    history_p.set_defaults(func=cmd_history)

    purge_p = sub.add_parser("purge")
    purge_p.set_defaults(func=cmd_purge)

    return parser


def main() -> None:
    """CLI entry point invoked via `python -m cli.flightquery_cli ...`."""
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    if not hasattr(args, "func"):
        parser.print_help()
        return
    get_app_state()  # ensure initialization
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
