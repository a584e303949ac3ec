"""Plain-text reports over aggregated sessions."""

from datetime import date, datetime
from urllib.parse import quote

from .engine.aggregator import summarize_day
from .engine.duration import format_hours
from .engine.periods import DateRange, Period
from .models import PeriodSummary, WorkSession

RULE = "-" * 20


def _long_date(day: date) -> str:
    return f"{day.strftime('%A')} {day.day} {day.strftime('%B %Y')}"


def format_session(session: WorkSession) -> str:
    """Format session for display."""
    if session.is_active:
        result = f"[>] {session.id}: {session.time_span()} (in progress)"
    else:
        result = (
            f"[x] {session.id}: {session.time_span()} {format_hours(session.total_hours)}"
            f" (regular {format_hours(session.regular_hours)},"
            f" extra {format_hours(session.extra_hours)})"
        )
    if session.work_description:
        result += f"\n    {session.work_description}"
    return result


def render_daily_report(day: date, sessions: list[WorkSession]) -> str:
    """Summary of one day's closed sessions."""
    summary = summarize_day(day, sessions)

    lines = [
        "DAILY REPORT",
        _long_date(day),
        "",
        "Summary:",
        f"- Regular hours: {format_hours(summary.regular_hours)}",
        f"- Extra hours: {format_hours(summary.extra_hours)}",
        f"- Total: {format_hours(summary.total_hours)}",
    ]

    if summary.sessions:
        lines.extend(["", "Sessions:"])
        for i, session in enumerate(summary.sessions, start=1):
            lines.append(f"{i}. {session.time_span()}")
            if session.work_description:
                lines.append(f"   Work: {session.work_description}")

    return "\n".join(lines)


def render_period_report(
    period: Period,
    date_range: DateRange,
    summary: PeriodSummary,
    generated_at: datetime | None = None,
) -> str:
    """Period report with general totals and per-day detail, oldest day first."""
    if generated_at is None:
        generated_at = datetime.now()

    lines = [
        f"{period.value.upper()} REPORT",
        date_range.title(period),
        "",
        RULE,
        "SUMMARY",
        RULE,
        f"- Worked days: {summary.worked_days}",
        f"- Regular hours: {format_hours(summary.total_regular)}",
        f"- Extra hours: {format_hours(summary.total_extra)}",
        f"- TOTAL: {format_hours(summary.total_hours)}",
        "",
    ]

    if summary.worked_days > 0:
        lines.extend([f"DAILY AVERAGE: {format_hours(summary.daily_average)}", ""])

    lines.extend([RULE, "DETAIL BY DAY", RULE])
    for day in summary.days_ascending():
        total = f"   Total: {format_hours(day.total_hours)}"
        if day.extra_hours > 0:
            total += f" ({format_hours(day.extra_hours)} extra)"
        lines.extend(["", _long_date(day.date), total])
        for session in day.sessions:
            lines.append(f"   - {session.time_span()}")
            if session.work_description:
                lines.append(f'     "{session.work_description}"')

    lines.extend(["", RULE, f"Generated {generated_at.strftime('%d/%m/%Y %H:%M')}"])
    return "\n".join(lines)


def render_history(summary: PeriodSummary) -> str:
    """History view: totals, then each worked day most recent first."""
    if summary.worked_days == 0:
        return (
            f"No sessions between {summary.start.isoformat()}"
            f" and {summary.end.isoformat()}."
        )

    lines = [
        f"Regular: {format_hours(summary.total_regular)}"
        f"  Extra: {format_hours(summary.total_extra)}"
        f"  Total: {format_hours(summary.total_hours)}",
        "",
    ]
    for day in summary.days_descending():
        lines.append(
            f"### {day.date.isoformat()}  {format_hours(day.total_hours)}"
            f" (regular {format_hours(day.regular_hours)},"
            f" extra {format_hours(day.extra_hours)})"
        )
        for session in day.sessions:
            lines.append(f"- {format_session(session)}")
        lines.append("")

    return "\n".join(lines).rstrip()


def share_links(subject: str, body: str) -> dict[str, str]:
    """Prefilled WhatsApp and e-mail links carrying a report."""
    return {
        "whatsapp": f"https://wa.me/?text={quote(body, safe='')}",
        "email": f"mailto:?subject={quote(subject, safe='')}&body={quote(body, safe='')}",
    }
