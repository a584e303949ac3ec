"""Tests for the Timeclock CLI."""

import asyncio
from datetime import date, datetime, time

import pytest

from timeclock.cli import main, watch
from timeclock.engine import ClockState, ClockStateMachine, InvalidInterval
from timeclock.store import JsonSessionStore


@pytest.fixture
def root(tmp_path, monkeypatch):
    """Point the CLI at an initialized temporary data root."""
    monkeypatch.setenv("TIMECLOCK_ROOT", str(tmp_path))
    assert main(["init"]) == 0
    return tmp_path


class TestCli:
    """Tests for CLI commands."""

    def test_init_twice(self, root, capsys):
        assert main(["init"]) == 0
        assert "already initialized" in capsys.readouterr().out

    def test_uninitialized(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("TIMECLOCK_ROOT", str(tmp_path))

        assert main(["in"]) == 1
        assert "not initialized" in capsys.readouterr().err

    def test_clock_in_out_cycle(self, root, capsys):
        assert main(["in"]) == 0
        assert "Clocked in at" in capsys.readouterr().out

        assert main(["in"]) == 1
        assert "already active" in capsys.readouterr().err

        assert main(["status"]) == 0
        assert "[>] Clocked in" in capsys.readouterr().out

        assert main(["out", "-d", "Refactoring"]) == 0
        assert "Clocked out at" in capsys.readouterr().out

        closed = JsonSessionStore(root).filter(is_active=False)
        assert [s.work_description for s in closed] == ["Refactoring"]

    def test_out_without_session(self, root, capsys):
        assert main(["out", "-d", ""]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_out_prompts_for_description(self, root, monkeypatch):
        main(["in"])
        monkeypatch.setattr("builtins.input", lambda prompt: "  Prompted  ")

        assert main(["out"]) == 0

        closed = JsonSessionStore(root).filter(is_active=False)
        assert closed[0].work_description == "Prompted"

    def test_day_report_with_share(self, root, capsys):
        store = JsonSessionStore(root)
        session = store.create(date=date(2025, 10, 6), start_time=time(8), is_active=True)
        store.update(
            session.id,
            end_time=time(17, 30),
            is_active=False,
            regular_hours=8.0,
            extra_hours=1.5,
            total_hours=9.5,
        )

        assert main(["day", "--date", "2025-10-06", "--share", "whatsapp"]) == 0

        out = capsys.readouterr().out
        assert "- Extra hours: 1h 30m" in out
        assert "https://wa.me/?text=" in out

    def test_day_bad_date(self, root, capsys):
        assert main(["day", "--date", "yesterday"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_history_and_report(self, root, capsys):
        assert main(["history", "--month"]) == 0
        assert "## Month:" in capsys.readouterr().out

        assert main(["report", "--year", "--share", "email"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("YEAR REPORT")
        assert "mailto:?subject=" in out

    def test_config(self, root, capsys):
        assert main(["config", "--threshold", "7.5", "--user", "Kim"]) == 0
        out = capsys.readouterr().out
        assert "Daily threshold: 7.5h" in out
        assert "User: Kim" in out

        config = JsonSessionStore(root).get_config()
        assert config.daily_threshold_hours == 7.5
        assert config.user_name == "Kim"

    def test_config_rejects_non_positive_threshold(self, root, capsys):
        assert main(["config", "--threshold", "0"]) == 1
        assert "threshold must be positive" in capsys.readouterr().err


class TestWatch:
    """Tests for the live status loop."""

    INTERVAL = 0.01

    @pytest.mark.asyncio
    async def test_exits_after_clock_out_elsewhere(self, root, capsys):
        store = JsonSessionStore(root)
        day = date(2025, 10, 6)
        machine = ClockStateMachine(store, day=day, clock=lambda: datetime(2025, 10, 6, 10, 0))
        machine.clock_in(datetime(2025, 10, 6, 8, 0))

        task = asyncio.create_task(watch(machine, self.INTERVAL))
        await asyncio.sleep(self.INTERVAL * 3)
        other = ClockStateMachine(store, day=day)
        other.clock_out("Closed elsewhere", datetime(2025, 10, 6, 10, 0))
        await asyncio.wait_for(task, timeout=2)

        assert machine.state is ClockState.NO_ACTIVE_SESSION
        assert "[>] Clocked in" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_raises_when_session_crosses_midnight(self, root):
        store = JsonSessionStore(root)
        machine = ClockStateMachine(
            store, day=date(2025, 10, 6), clock=lambda: datetime(2025, 10, 7, 0, 0, 5)
        )
        machine.clock_in(datetime(2025, 10, 6, 23, 59))

        with pytest.raises(InvalidInterval, match="crosses midnight"):
            await asyncio.wait_for(watch(machine, self.INTERVAL), timeout=2)
