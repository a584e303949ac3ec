"""Timeclock MCP Server."""

import logging
import os
from datetime import date, datetime
from pathlib import Path

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from .engine import (
    ClockStateMachine,
    Period,
    TimeclockError,
    aggregate,
    format_hours,
    period_range,
)
from .logging_setup import configure_logging
from .reports import render_daily_report, render_period_report
from .store import JsonSessionStore

logger = logging.getLogger(__name__)


def get_root_path() -> Path:
    """Get the root path from environment or current directory."""
    root = os.environ.get("TIMECLOCK_ROOT")
    if root:
        return Path(root)
    return Path.cwd()


def get_store() -> JsonSessionStore:
    """Get the session store."""
    return JsonSessionStore(get_root_path())


def get_machine(store: JsonSessionStore) -> ClockStateMachine:
    """Build today's clock state machine from the stored config."""
    config = store.get_config()
    return ClockStateMachine(
        store,
        threshold=config.daily_threshold_hours,
        user_name=config.user_name,
    )


# Create the MCP server
server = Server("timeclock")

PERIOD_NAMES = [p.value for p in Period if p is not Period.DAY]


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="clock_in",
            description="Clock in: open a work session starting now. Fails if a session is already open today.",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="clock_out",
            description="Clock out: close today's open session now and record what was done.",
            inputSchema={
                "type": "object",
                "properties": {
                    "work_description": {
                        "type": "string",
                        "description": "Summary of the work done during the session. May be empty.",
                    },
                },
                "required": ["work_description"],
            },
        ),
        Tool(
            name="clock_status",
            description="Show today's regular and extra hours, including the open session if any.",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="daily_report",
            description="Daily report of closed sessions with regular/extra/total hours.",
            inputSchema={
                "type": "object",
                "properties": {
                    "date": {
                        "type": "string",
                        "description": "Day of record as YYYY-MM-DD. Defaults to today.",
                    },
                },
            },
        ),
        Tool(
            name="period_report",
            description="Week, month or year report with totals, worked days and daily average.",
            inputSchema={
                "type": "object",
                "properties": {
                    "period": {
                        "type": "string",
                        "enum": PERIOD_NAMES,
                        "description": "Reporting window. Defaults to 'week'.",
                        "default": "week",
                    },
                    "ago": {
                        "type": "integer",
                        "description": "Periods back from the current one. Defaults to 0.",
                        "default": 0,
                    },
                },
            },
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    store = get_store()

    if name == "clock_in":
        return await handle_clock_in(store, arguments)
    elif name == "clock_out":
        return await handle_clock_out(store, arguments)
    elif name == "clock_status":
        return await handle_clock_status(store, arguments)
    elif name == "daily_report":
        return await handle_daily_report(store, arguments)
    elif name == "period_report":
        return await handle_period_report(store, arguments)
    else:
        return [TextContent(type="text", text=f"Unknown tool: {name}")]


async def handle_clock_in(
    store: JsonSessionStore, arguments: dict
) -> list[TextContent]:
    """Handle clock_in tool call."""
    try:
        session = get_machine(store).clock_in()
        return [
            TextContent(
                type="text",
                text=f"Clocked in at {session.start_time.strftime('%H:%M:%S')} (session {session.id})",
            )
        ]

    except (FileNotFoundError, TimeclockError) as e:
        return [TextContent(type="text", text=f"Error: {e}")]


async def handle_clock_out(
    store: JsonSessionStore, arguments: dict
) -> list[TextContent]:
    """Handle clock_out tool call."""
    try:
        description = arguments.get("work_description", "")
        session = get_machine(store).clock_out(description)
        return [
            TextContent(
                type="text",
                text=(
                    f"Clocked out at {session.end_time.strftime('%H:%M:%S')}\n"
                    f"Total: {format_hours(session.total_hours)}\n"
                    f"Regular: {format_hours(session.regular_hours)}\n"
                    f"Extra: {format_hours(session.extra_hours)}"
                ),
            )
        ]

    except (FileNotFoundError, TimeclockError) as e:
        return [TextContent(type="text", text=f"Error: {e}")]


async def handle_clock_status(
    store: JsonSessionStore, arguments: dict
) -> list[TextContent]:
    """Handle clock_status tool call."""
    try:
        totals = get_machine(store).tick()
        state = "clocked in" if totals.session_id else "clocked out"
        return [
            TextContent(
                type="text",
                text=(
                    f"Status: {state}\n"
                    f"Regular today: {format_hours(totals.day_regular)}\n"
                    f"Extra today: {format_hours(totals.day_extra)}\n"
                    f"Total today: {format_hours(totals.day_total)}"
                ),
            )
        ]

    except (FileNotFoundError, TimeclockError) as e:
        return [TextContent(type="text", text=f"Error: {e}")]


async def handle_daily_report(
    store: JsonSessionStore, arguments: dict
) -> list[TextContent]:
    """Handle daily_report tool call."""
    try:
        day_str = arguments.get("date")
        day = date.fromisoformat(day_str) if day_str else date.today()
        sessions = store.filter(day=day, is_active=False)
        return [TextContent(type="text", text=render_daily_report(day, sessions))]

    except ValueError as e:
        return [TextContent(type="text", text=f"Invalid date: {e}")]
    except FileNotFoundError as e:
        return [TextContent(type="text", text=f"Error: {e}")]


async def handle_period_report(
    store: JsonSessionStore, arguments: dict
) -> list[TextContent]:
    """Handle period_report tool call."""
    try:
        period = Period(arguments.get("period", "week"))
        ago = int(arguments.get("ago", 0))
        date_range = period_range(period, date.today(), offset=ago)
        sessions = store.filter(
            start=date_range.start, end=date_range.end, is_active=False
        )
        summary = aggregate(sessions, date_range.start, date_range.end)
        report = render_period_report(period, date_range, summary, datetime.now())
        return [TextContent(type="text", text=report)]

    except ValueError as e:
        return [TextContent(type="text", text=f"Invalid arguments: {e}")]
    except FileNotFoundError as e:
        return [TextContent(type="text", text=f"Error: {e}")]


async def run_server():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main():
    """Entry point for the MCP server."""
    import asyncio

    configure_logging()
    logger.info("Starting Timeclock MCP server in %s", get_root_path())
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
