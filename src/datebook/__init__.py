"""Datebook: calendar event tools with lenient ISO 8601 date handling."""

from __future__ import annotations

__version__ = "0.1.0"


def main() -> None:
    from .cli import main as cli_main

    cli_main()
