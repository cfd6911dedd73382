import logging
from fastapi import FastAPI, HTTPException
from combat.engine import Engine
from combat.errors import ParseError, PowerSearchExhausted, Stalemate
from combat.model import Faction
from combat.parser import parse, render
from combat.search import find_min_power_for_lossless_victory
from runtime.runner import TickRunner
from .schemas import (
    EventsResponse, OutcomeRequest, OutcomeResponse, PowerSearchRequest,
    PowerSearchResponse, StartRequest,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Combat Arena API")
runner: TickRunner | None = None

DEFAULT_GRID = """\
#######
#.G...#
#...EG#
#.#.#G#
#..G#E#
#.....#
#######
"""

def _make_engine(grid: str | None = None, elf_power: int | None = None) -> Engine:
    """Parse the battle grid into a fresh engine, applying the requested elf power."""
    try:
        state = parse(DEFAULT_GRID if grid is None else grid)
    except ParseError as e:
        raise HTTPException(422, str(e))
    eng = Engine(state)
    if elf_power is not None:
        eng.set_power(Faction.ELF, elf_power)
    return eng

def _require_runner() -> TickRunner:
    if not runner:
        raise HTTPException(400, "Battle not started")
    return runner

@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "message": "Combat Arena API",
        "docs": "/docs",
        "version": "1.0"
    }

@app.on_event("startup")
async def startup():
    """Load the demo battle, paused, on app startup."""
    global runner
    runner = TickRunner(_make_engine())

@app.on_event("shutdown")
async def shutdown():
    """Stop the simulation on app shutdown."""
    global runner
    if runner:
        await runner.stop()

@app.post("/battle/start")
async def start_battle(req: StartRequest):
    """Start a new battle from the given grid."""
    eng = _make_engine(req.grid, req.elf_power)
    await shutdown()
    global runner
    runner = TickRunner(eng)
    if req.autoplay:
        await runner.start()
    logger.info("Started battle with %d units (autoplay=%s)", len(eng.state.units), req.autoplay)
    return {"battle_id": eng.state.battle_id, "units": len(eng.state.units)}

@app.get("/battle/local/state")
async def get_state():
    """Get current battle state snapshot."""
    r = _require_runner()
    s = await r.snapshot()
    winner = r.engine.winner()
    return {
        "rounds": s.rounds,
        "finished": r.engine.is_finished(),
        "deadlocked": r.deadlocked,
        "error": r.error,
        "winner": winner.value if winner else None,
        "score": r.engine.score(),
        "grid": render(s),
        "units": [
            {
                "id": u.id,
                "faction": u.faction.value,
                "pos": list(coord),
                "health": u.health,
                "power": u.power,
            } for coord, u in sorted(s.units.items())
        ]
    }

@app.post("/battle/local/step")
async def step_battle(rounds: int = 1):
    """Play rounds immediately and return how far the battle got."""
    r = _require_runner()
    if rounds < 1:
        raise HTTPException(422, "rounds must be positive")
    evts = await r.step_once(rounds)
    return {
        "rounds": r.engine.state.rounds,
        "finished": r.engine.is_finished(),
        "events": len(evts),
    }

@app.get("/battle/local/events")
async def get_events(since: int = 0, limit: int = 500, kind: str | None = None, round_no: int | None = None):
    """Get events since offset, optionally filtered by kind, or every event of one round."""
    r = _require_runner()
    if round_no is not None:
        evts, next_offset = r.events.for_round(round_no), len(r.events)
    else:
        evts, next_offset = r.events.since(since, limit, kind)
    return EventsResponse(
        next_offset=next_offset,
        total=len(r.events),
        events=[{"kind": e.kind, "round": e.round, "data": e.data} for e in evts]
    )

@app.post("/battle/local/time-control")
async def set_time_control(time_compression: float):
    """Set simulation time compression (1.0 = real-time, higher = faster)."""
    r = _require_runner()
    r.set_time_compression(time_compression)
    return {"time_compression": r.time_compression}

@app.get("/battle/local/time-control")
async def get_time_control():
    """Get current time compression setting."""
    r = _require_runner()
    return {"time_compression": r.time_compression}

@app.post("/battle/outcome", response_model=OutcomeResponse)
def battle_outcome(req: OutcomeRequest):
    """Run a battle to completion and score it."""
    eng = _make_engine(req.grid, req.elf_power)
    try:
        score = eng.run()
    except Stalemate as e:
        raise HTTPException(409, str(e))
    winner = eng.winner()
    return OutcomeResponse(
        score=score,
        rounds=eng.state.rounds,
        winner=winner.value if winner else None,
        healths=eng.healths(),
        grid=render(eng.state),
    )

@app.post("/battle/power-search", response_model=PowerSearchResponse)
def power_search(req: PowerSearchRequest):
    """Find the lowest power at which a faction wins without losses."""
    try:
        result = find_min_power_for_lossless_victory(
            req.grid, Faction(req.faction), req.min_power, req.max_power)
    except ParseError as e:
        raise HTTPException(422, str(e))
    except PowerSearchExhausted as e:
        raise HTTPException(404, str(e))
    return PowerSearchResponse(power=result.power, score=result.score, rounds=result.rounds)
