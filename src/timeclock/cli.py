"""Timeclock CLI interface."""

import argparse
import asyncio
import os
import sys
from datetime import date, datetime
from pathlib import Path

from .engine import (
    ClockState,
    ClockStateMachine,
    LiveTicker,
    LiveTotals,
    Period,
    TimeclockError,
    aggregate,
    format_hours,
    period_range,
)
from .logging_setup import configure_logging
from .reports import render_daily_report, render_history, render_period_report, share_links
from .store import JsonSessionStore


def get_root_path() -> Path:
    """Get the root path from environment or current directory."""
    root = os.environ.get("TIMECLOCK_ROOT")
    if root:
        return Path(root)
    return Path.cwd()


def get_store(root: Path | None = None) -> JsonSessionStore:
    """Get the session store for the data root."""
    if root is None:
        root = get_root_path()
    return JsonSessionStore(root)


def get_machine(store: JsonSessionStore, day: date | None = None) -> ClockStateMachine:
    """Build today's clock state machine from the stored config."""
    config = store.get_config()
    return ClockStateMachine(
        store,
        day=day,
        threshold=config.daily_threshold_hours,
        user_name=config.user_name,
    )


def format_live(totals: LiveTotals) -> str:
    """One-line rendering of live totals."""
    if totals.state is ClockState.SESSION_ACTIVE:
        prefix = f"[>] Clocked in ({totals.session_id})"
    else:
        prefix = "[ ] Clocked out"
    return (
        f"{prefix}  Regular: {format_hours(totals.day_regular)}"
        f"  Extra: {format_hours(totals.day_extra)}"
        f"  Today: {format_hours(totals.day_total)}"
    )


def selected_period(args: argparse.Namespace, default: Period = Period.WEEK) -> Period:
    """Map --week/--month/--year flags to a Period."""
    for period in (Period.DAY, Period.WEEK, Period.MONTH, Period.YEAR):
        if getattr(args, period.value, False):
            return period
    return default


def cmd_init(args: argparse.Namespace) -> int:
    """Initialize .timeclock/ in the data root."""
    store = get_store()

    if store.sessions_dir.exists():
        print("Timeclock already initialized in this directory.")
        return 0

    store.initialize()
    print(f"Initialized Timeclock in {store.timeclock_dir}")
    return 0


def cmd_in(args: argparse.Namespace) -> int:
    """Clock in."""
    store = get_store()

    try:
        machine = get_machine(store)
        session = machine.clock_in()
        print(f"Clocked in at {session.start_time.strftime('%H:%M:%S')} ({session.id})")
        return 0

    except (FileNotFoundError, TimeclockError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_out(args: argparse.Namespace) -> int:
    """Clock out."""
    store = get_store()

    try:
        machine = get_machine(store)
        description = args.description
        if description is None:
            description = input("Describe the work done: ").strip()

        session = machine.clock_out(description)
        print(
            f"Clocked out at {session.end_time.strftime('%H:%M:%S')}: "
            f"{format_hours(session.total_hours)} "
            f"(regular {format_hours(session.regular_hours)}, "
            f"extra {format_hours(session.extra_hours)})"
        )
        return 0

    except (FileNotFoundError, TimeclockError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


async def watch(machine: ClockStateMachine, interval: float) -> None:
    """Redraw live totals until the session is closed."""

    def show(totals: LiveTotals) -> None:
        print(f"\r{format_live(totals)}", end="", flush=True)

    try:
        async with LiveTicker(machine, show, interval) as ticker:
            while ticker.running:
                await asyncio.sleep(interval)
                # Pick up a clock-out made from another process
                machine.refresh()
                ticker.follow()
    finally:
        print()


def cmd_status(args: argparse.Namespace) -> int:
    """Show today's live totals."""
    store = get_store()

    try:
        machine = get_machine(store)
        if args.watch and machine.state is ClockState.SESSION_ACTIVE:
            interval = store.get_config().tick_interval_seconds
            try:
                asyncio.run(watch(machine, interval))
            except KeyboardInterrupt:
                pass
            return 0

        print(format_live(machine.tick()))
        return 0

    except (FileNotFoundError, TimeclockError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_day(args: argparse.Namespace) -> int:
    """Print the daily report."""
    store = get_store()

    try:
        day = date.fromisoformat(args.date) if args.date else date.today()
        sessions = store.filter(day=day, is_active=False)
        report = render_daily_report(day, sessions)
        print(report)
        if args.share:
            subject = f"Timeclock report - {day.strftime('%d/%m/%Y')}"
            print()
            print(share_links(subject, report)[args.share])
        return 0

    except (FileNotFoundError, TimeclockError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_history(args: argparse.Namespace) -> int:
    """Show sessions of a week, month or year, most recent first."""
    store = get_store()

    try:
        period = selected_period(args)
        date_range = period_range(period, date.today(), offset=args.offset)
        sessions = store.filter(
            start=date_range.start, end=date_range.end, is_active=False
        )
        summary = aggregate(sessions, date_range.start, date_range.end)

        print(f"## {date_range.title(period)}")
        print()
        print(render_history(summary))
        return 0

    except (FileNotFoundError, TimeclockError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_report(args: argparse.Namespace) -> int:
    """Generate a period report."""
    store = get_store()

    try:
        period = selected_period(args)
        date_range = period_range(period, date.today(), offset=args.ago)
        sessions = store.filter(
            start=date_range.start, end=date_range.end, is_active=False
        )
        summary = aggregate(sessions, date_range.start, date_range.end)
        report = render_period_report(period, date_range, summary, datetime.now())

        print(report)
        if args.share:
            subject = f"Timeclock report - {date_range.title(period)}"
            print()
            print(share_links(subject, report)[args.share])
        return 0

    except (FileNotFoundError, TimeclockError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_config(args: argparse.Namespace) -> int:
    """Show or update the configuration."""
    store = get_store()

    try:
        config = store.get_config()
        changed = False

        if args.threshold is not None:
            if args.threshold <= 0:
                print("Error: threshold must be positive.", file=sys.stderr)
                return 1
            config.daily_threshold_hours = args.threshold
            changed = True
        if args.tick is not None:
            if args.tick <= 0:
                print("Error: tick interval must be positive.", file=sys.stderr)
                return 1
            config.tick_interval_seconds = args.tick
            changed = True
        if args.user is not None:
            config.user_name = args.user or None
            changed = True

        if changed:
            store.save_config(config)
            print("Configuration saved.")

        print(f"Daily threshold: {config.daily_threshold_hours:g}h")
        print(f"Tick interval: {config.tick_interval_seconds:g}s")
        print(f"User: {config.user_name or '-'}")
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the MCP server."""
    from .server import main as server_main

    server_main()
    return 0


def cmd_web(args: argparse.Namespace) -> int:
    """Start the web API."""
    from .web import main as web_main

    web_main()
    return 0


def add_period_flags(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--week", action="store_true", help="Week starting Monday (default)")
    group.add_argument("--month", action="store_true", help="Calendar month")
    group.add_argument("--year", action="store_true", help="Calendar year")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="timeclock",
        description="Personal work-time tracker with regular/overtime accounting",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log engine activity to stderr"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init
    subparsers.add_parser("init", help="Initialize .timeclock/ in the data root")

    # in / out
    subparsers.add_parser("in", help="Clock in")
    out_parser = subparsers.add_parser("out", help="Clock out")
    out_parser.add_argument(
        "--description", "-d", help="Work done during the session (prompted if omitted)"
    )

    # status
    status_parser = subparsers.add_parser("status", help="Show today's totals")
    status_parser.add_argument(
        "--watch", "-w", action="store_true", help="Keep updating while clocked in"
    )

    # day
    day_parser = subparsers.add_parser("day", help="Daily report")
    day_parser.add_argument("--date", help="Day of record (YYYY-MM-DD, default: today)")
    day_parser.add_argument(
        "--share", choices=["whatsapp", "email"], help="Also print a share link"
    )

    # history
    history_parser = subparsers.add_parser("history", help="Sessions by week, month or year")
    add_period_flags(history_parser)
    history_parser.add_argument(
        "--offset", "-o", type=int, default=0, help="Periods back from the current one"
    )

    # report
    report_parser = subparsers.add_parser("report", help="Period report")
    add_period_flags(report_parser)
    report_parser.add_argument(
        "--ago", "-a", type=int, default=0, help="Periods back from the current one"
    )
    report_parser.add_argument(
        "--share", choices=["whatsapp", "email"], help="Also print a share link"
    )

    # config
    config_parser = subparsers.add_parser("config", help="Show or update configuration")
    config_parser.add_argument("--threshold", type=float, help="Daily regular hours")
    config_parser.add_argument("--tick", type=float, help="Live refresh interval in seconds")
    config_parser.add_argument("--user", help="Name recorded on new sessions")

    # serve / web
    subparsers.add_parser("serve", help="Start the MCP server")
    subparsers.add_parser("web", help="Start the web API")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging("INFO" if args.verbose else None)

    if args.command is None:
        parser.print_help()
        return 0

    # Dispatch to command handlers
    handlers = {
        "init": cmd_init,
        "in": cmd_in,
        "out": cmd_out,
        "status": cmd_status,
        "day": cmd_day,
        "history": cmd_history,
        "report": cmd_report,
        "config": cmd_config,
        "serve": cmd_serve,
        "web": cmd_web,
    }

    handler = handlers.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
