"""FastAPI application for the Timeclock HTTP API."""

import os
from datetime import date, datetime
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Form, HTTPException, Query
from fastapi.responses import PlainTextResponse

from ..engine import (
    AlreadyActive,
    ClockStateMachine,
    InvalidInterval,
    LiveTotals,
    NoActiveSession,
    Period,
    aggregate,
    period_range,
    summarize_day,
)
from ..models import DaySummary, PeriodSummary, WorkSession
from ..reports import render_period_report
from ..store import JsonSessionStore, SessionNotFound

app = FastAPI(title="Timeclock", description="Personal work-time tracker")


def get_store() -> JsonSessionStore:
    """Dependency to get the session store."""
    root = os.environ.get("TIMECLOCK_ROOT", os.getcwd())
    store = JsonSessionStore(root)
    store.ensure_initialized()
    return store


StoreDep = Annotated[JsonSessionStore, Depends(get_store)]


def get_machine(store: StoreDep) -> ClockStateMachine:
    """Dependency to get today's clock state machine."""
    config = store.get_config()
    return ClockStateMachine(
        store,
        threshold=config.daily_threshold_hours,
        user_name=config.user_name,
    )


MachineDep = Annotated[ClockStateMachine, Depends(get_machine)]


# --- Serialization ---


def totals_payload(totals: LiveTotals) -> dict[str, Any]:
    return {
        "state": totals.state.value,
        "session_id": totals.session_id,
        "live_regular": totals.live_regular,
        "live_extra": totals.live_extra,
        "day_regular": totals.day_regular,
        "day_extra": totals.day_extra,
        "day_total": totals.day_total,
    }


def day_payload(day: DaySummary) -> dict[str, Any]:
    return {
        "date": day.date.isoformat(),
        "regular_hours": day.regular_hours,
        "extra_hours": day.extra_hours,
        "total_hours": day.total_hours,
        "sessions": [s.to_dict() for s in day.sessions],
    }


def summary_payload(summary: PeriodSummary) -> dict[str, Any]:
    return {
        "start": summary.start.isoformat(),
        "end": summary.end.isoformat(),
        "total_regular": summary.total_regular,
        "total_extra": summary.total_extra,
        "total_hours": summary.total_hours,
        "worked_days": summary.worked_days,
        "daily_average": summary.daily_average if summary.worked_days else None,
        "days": [day_payload(d) for d in summary.days_descending()],
    }


def session_payload(session: WorkSession) -> dict[str, Any]:
    return session.to_dict()


# --- Clock Routes ---


@app.get("/status")
async def status(machine: MachineDep):
    """Live totals for today."""
    return totals_payload(machine.tick())


@app.post("/clock-in", status_code=201)
async def clock_in(machine: MachineDep):
    """Open a session starting now."""
    try:
        session = machine.clock_in()
    except AlreadyActive as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidInterval as e:
        raise HTTPException(status_code=422, detail=str(e))
    return session_payload(session)


@app.post("/clock-out")
async def clock_out(
    machine: MachineDep,
    work_description: str = Form(default=""),
):
    """Close the open session now."""
    try:
        session = machine.clock_out(work_description)
    except NoActiveSession as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidInterval as e:
        raise HTTPException(status_code=422, detail=str(e))
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return session_payload(session)


# --- Reporting Routes ---


@app.get("/days/{day}")
async def get_day(day: date, store: StoreDep):
    """Closed sessions and totals of one day."""
    return day_payload(summarize_day(day, store.filter(day=day, is_active=False)))


@app.get("/history")
async def history(
    store: StoreDep,
    period: Period = Query(default=Period.WEEK),
    offset: int = Query(default=0, ge=0),
    anchor: date | None = Query(default=None),
):
    """Aggregated sessions of a period, most recent day first."""
    date_range = period_range(period, anchor or date.today(), offset=offset)
    sessions = store.filter(start=date_range.start, end=date_range.end, is_active=False)
    payload = summary_payload(aggregate(sessions, date_range.start, date_range.end))
    payload["title"] = date_range.title(period)
    return payload


@app.get("/reports/{period}", response_class=PlainTextResponse)
async def report(
    period: Period,
    store: StoreDep,
    ago: int = Query(default=0, ge=0),
    anchor: date | None = Query(default=None),
):
    """Plain-text period report."""
    date_range = period_range(period, anchor or date.today(), offset=ago)
    sessions = store.filter(start=date_range.start, end=date_range.end, is_active=False)
    summary = aggregate(sessions, date_range.start, date_range.end)
    return render_period_report(period, date_range, summary, datetime.now())
