from __future__ import annotations

import argparse
import logging
from typing import Any, Optional, Sequence

import orjson

from .api import api_state, call_api
from .config import get_settings
from .domain import DatebookError, EventAvailability, EventStatus
from .logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings().server
    parser = argparse.ArgumentParser(prog="datebook", description="Datebook calendar tools.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    mcp_parser = subparsers.add_parser("mcp", help="Start the MCP server.")
    mcp_parser.add_argument("--transport", choices=("stdio", "http", "streamable-http", "sse"), default="stdio")
    mcp_parser.add_argument("--host", default=settings.mcp_host)
    mcp_parser.add_argument("--port", type=int, default=settings.mcp_port)

    api_parser = subparsers.add_parser("api", help="Start the HTTP server exposing the tools.")
    api_parser.add_argument("--host", default=settings.api_host)
    api_parser.add_argument("--port", type=int, default=settings.api_port)

    subparsers.add_parser("calendars", help="List calendars.")

    events_parser = subparsers.add_parser("events", help="Fetch events in a date range.")
    events_parser.add_argument("--start", help="ISO 8601 start; defaults to now.")
    events_parser.add_argument("--end", help="ISO 8601 end; defaults to one week (or one day) after start.")
    events_parser.add_argument("--calendar", action="append", dest="calendars", default=[])
    events_parser.add_argument("--query")
    events_parser.add_argument("--exclude-all-day", action="store_true")
    events_parser.add_argument("--status", choices=[status.value for status in EventStatus])
    events_parser.add_argument("--availability", choices=[item.value for item in EventAvailability])
    events_parser.add_argument("--has-alarms", action=argparse.BooleanOptionalAction, default=None)
    events_parser.add_argument("--is-recurring", action=argparse.BooleanOptionalAction, default=None)

    add_parser = subparsers.add_parser("add-calendar", help="Create a calendar in the local store.")
    add_parser.add_argument("title")
    add_parser.add_argument("--color")
    add_parser.add_argument("--read-only", action="store_true")

    subparsers.add_parser("authorize", help="Grant calendar access for the local store.")

    return parser


def _print_json(payload: Any) -> None:
    print(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8"))


def main(argv: Optional[Sequence[str]] = None) -> None:
    configure_logging()
    logger = logging.getLogger(__name__)
    parser = build_parser()
    args = parser.parse_args(argv)
    logger.debug("Datebook CLI command: %s", args.command)

    try:
        if args.command == "mcp":
            from .services.mcp import run_mcp_server

            run_mcp_server(transport=args.transport, host=args.host, port=args.port)
        elif args.command == "api":
            from .services.http import run_local_server

            run_local_server(host=args.host, port=args.port)
        elif args.command == "calendars":
            _print_json(call_api("calendars_list"))
        elif args.command == "events":
            _print_json(
                call_api(
                    "events_fetch",
                    start=args.start,
                    end=args.end,
                    calendars=args.calendars,
                    query=args.query,
                    include_all_day=not args.exclude_all_day,
                    status=args.status,
                    availability=args.availability,
                    has_alarms=args.has_alarms,
                    is_recurring=args.is_recurring,
                )
            )
        elif args.command == "add-calendar":
            gateway = api_state.context.gateway
            calendar = gateway.create_calendar(args.title, color=args.color, is_editable=not args.read_only)
            _print_json(calendar.to_record())
        elif args.command == "authorize":
            _print_json({"granted": api_state.calendar.activate()})
        else:  # pragma: no cover - argparse enforces choices
            parser.print_help()
    except DatebookError as exc:
        logger.error("%s failed: %s", args.command, exc)
        parser.exit(1, f"error: {exc}\n")


if __name__ == "__main__":
    main()
