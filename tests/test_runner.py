"""Async tick runner."""
import asyncio
import logging
import pytest
from battles import CANONICAL, WALLED_OFF
from combat.engine import Engine
from combat.errors import InvariantViolation
from combat.parser import parse
from runtime.runner import TickRunner


@pytest.mark.asyncio
async def test_step_once_plays_rounds_and_logs_events():
    runner = TickRunner(Engine(parse(CANONICAL)))
    evts = await runner.step_once(3)
    assert runner.engine.state.rounds == 3
    assert len(runner.events) == len(evts)
    assert [e.round for e in evts if e.kind == "RoundCompleted"] == [1, 2, 3]


@pytest.mark.asyncio
async def test_step_once_stops_at_battle_end():
    runner = TickRunner(Engine(parse(CANONICAL)))
    await runner.step_once(100)
    assert runner.finished()
    assert runner.engine.state.rounds == 47
    assert await runner.step_once() == []


@pytest.mark.asyncio
async def test_loop_finishes_by_itself():
    runner = TickRunner(Engine(parse(CANONICAL)), tick_ms=1, time_compression=1000.0)
    await runner.start()
    assert runner.running
    for _ in range(500):
        if not runner.running:
            break
        await asyncio.sleep(0.01)
    assert not runner.running
    state = await runner.snapshot()
    assert state.rounds == 47
    await runner.stop()


@pytest.mark.asyncio
async def test_stop_cancels_loop():
    runner = TickRunner(Engine(parse(CANONICAL)), tick_ms=10000, time_compression=1.0)
    await runner.start()
    await asyncio.sleep(0)
    await runner.stop()
    assert not runner.running
    assert runner.engine.state.rounds <= 1


@pytest.mark.asyncio
async def test_deadlock_is_detected():
    runner = TickRunner(Engine(parse(WALLED_OFF)))
    await runner.step_once(5)
    assert runner.deadlocked
    assert runner.finished()
    assert runner.engine.state.rounds == 1


def test_time_compression_sets_sleep():
    runner = TickRunner(Engine(parse(CANONICAL)), tick_ms=500, time_compression=1.0)
    runner.set_time_compression(10.0)
    assert runner.sleep_s == pytest.approx(0.05)
    runner.set_time_compression(0.01)
    assert runner.time_compression == 0.1
    assert runner.sleep_s == pytest.approx(0.5)


@pytest.mark.asyncio
async def test_engine_failure_is_logged_and_reported(monkeypatch, caplog):
    runner = TickRunner(Engine(parse(CANONICAL)), tick_ms=1, time_compression=1000.0)

    def broken_tick():
        raise InvariantViolation("opponent not found when attacking target: (1, 1)")

    monkeypatch.setattr(runner.engine, "tick", broken_tick)
    with caplog.at_level(logging.ERROR, logger="runtime.runner"):
        await runner.start()
        for _ in range(100):
            if not runner.running:
                break
            await asyncio.sleep(0.01)

    assert not runner.running
    assert runner.finished()
    assert "opponent not found" in runner.error
    assert any("aborted" in r.getMessage() for r in caplog.records)
    await runner.stop()
