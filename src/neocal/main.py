#!/usr/bin/env python
'''
@File    :   main.py
@Desc    :   Command-line calendar viewer
'''
import argparse
import importlib
import logging
import os
import sys
from typing import Protocol

from neocal import __version__
from neocal.config import ConfigError, load_config
from neocal.fetcher import FetchError, fetch_events
from neocal.models import Event
from neocal.query import QueryError, ViewMode, resolve_query


class BaseHandler(Protocol):
    def __call__(self, events: list[Event]) -> None: ...


def no_padding(value: str) -> str:
    """argparse type rejecting empty values and surrounding whitespace."""
    if not value:
        raise argparse.ArgumentTypeError("Values cannot be empty")
    if value.strip() != value:
        raise argparse.ArgumentTypeError("Values cannot have leading and trailing space")
    return value


def week_count(value: str) -> int:
    try:
        weeks = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid week count: {value!r}") from None
    if weeks < 0:
        raise argparse.ArgumentTypeError(f"Week count cannot be negative: {weeks}")
    return weeks


def load_handler(view_mode: ViewMode) -> BaseHandler:
    """Load and instantiate the handler for a view mode.

    Args:
        view_mode: View to render

    Returns:
        Callable handler instance
    """
    module = importlib.import_module(f'neocal.handlers.{view_mode.value}')
    handler_class = getattr(module, 'Handler')
    return handler_class()


def add_query_arguments(parser: argparse.ArgumentParser, suppress: bool = False) -> None:
    """Add the flags shared by the top level and the view subcommands.

    With ``suppress`` the flags leave no default behind, so a subcommand
    only overrides what was actually given on its own command line.
    """
    def default(value):
        return argparse.SUPPRESS if suppress else value

    parser.add_argument(
        '-c', '--for', '--calendar',
        dest='calendar',
        type=no_padding,
        default=default(None),
        help='name of the calendar to use (default: [neocal] default in the config)'
    )

    parser.add_argument(
        '-s', '--search',
        type=no_padding,
        default=default(None),
        help='only show events matching this search term'
    )

    parser.add_argument(
        '-z', '--timezone',
        type=no_padding,
        default=default(None),
        help='time zone for the provider to use, e.g. "Europe/Madrid"'
    )

    parser.add_argument(
        '--weeks',
        type=week_count,
        default=default(None),
        help='show the current week and this many ISO weeks ahead'
    )

    parser.add_argument(
        '--week',
        action='store_true',
        default=default(False),
        help='show the current ISO week (Monday to Sunday)'
    )

    parser.add_argument(
        '--today',
        action='store_true',
        default=default(False),
        help='show today only'
    )

    parser.add_argument(
        '--tomorrow',
        action='store_true',
        default=default(False),
        help='show tomorrow only; when several range flags are given the last of --weeks, --week, --today, --tomorrow wins'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='neocal',
        description='Command-line calendar viewer'
    )

    add_query_arguments(parser)

    parser.add_argument(
        '-m', '--mode',
        type=no_padding,
        help='view to use when no subcommand is given: agenda or calendar (default: [neocal] mode in the config)'
    )

    parser.add_argument(
        '-l', '--log-level',
        type=str.upper,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help='set the logging level (default: WARNING)'
    )

    parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'neocal {__version__}',
        help='show program version and exit'
    )

    subparsers = parser.add_subparsers(dest='view', metavar='{agenda,calendar}')
    for view_mode, help_text in [
        (ViewMode.AGENDA, 'list events grouped by day'),
        (ViewMode.CALENDAR, 'show events in a calendar grid'),
    ]:
        subparser = subparsers.add_parser(view_mode.value, help=help_text)
        add_query_arguments(subparser, suppress=True)

    return parser


def main(argv: list[str] | None = None, session=None) -> int:
    """Main entry point for the calendar viewer.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])
        session: HTTP session handed to the fetcher

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    try:
        config = load_config()
        query = resolve_query(
            config,
            calendar=args.calendar,
            search=args.search,
            timezone=args.timezone,
            weeks=args.weeks,
            week=args.week,
            today=args.today,
            tomorrow=args.tomorrow,
            view=args.view,
            mode=args.mode,
        )
    except ConfigError as e:
        logging.error(f"Configuration error: {e}")
        return 1
    except QueryError as e:
        print(e, file=sys.stderr)
        return 0

    logging.info(f"Using calendar '{query.calendar_name}' in {query.view_mode.value} view")

    try:
        events = fetch_events(query, session=session)
    except FetchError as e:
        print(e, file=sys.stderr)
        return 0

    handler = load_handler(query.view_mode)
    handler(events)
    return 0


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print(file=sys.stderr)
        sys.exit(130)
    except BrokenPipeError:
        sys.stderr = open(os.devnull, 'w')
        sys.exit(1)


if __name__ == "__main__":
    run()
