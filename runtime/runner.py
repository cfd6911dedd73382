import asyncio
import logging
from typing import List
from combat.config import TICK_MS, TIME_COMPRESSION
from combat.engine import Engine
from combat.errors import InvariantViolation
from combat.model import Event, State
from .eventlog import EventLog

logger = logging.getLogger(__name__)

class TickRunner:
    """Async driver that plays one battle round per tick."""

    def __init__(self, engine: Engine, tick_ms: int = TICK_MS, time_compression: float = TIME_COMPRESSION):
        self.engine = engine
        self.tick_ms = tick_ms
        self.time_compression = time_compression
        self.sleep_s = (tick_ms / 1000.0) / max(1.0, time_compression)
        self.events = EventLog()
        self.deadlocked = False
        self.error: str | None = None
        self._task: asyncio.Task | None = None
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self):
        """Start the tick loop."""
        if self.running:
            return
        logger.info("Starting battle %s", self.engine.state.battle_id)
        self._task = asyncio.create_task(self._loop())

    async def stop(self):
        """Stop the tick loop gracefully."""
        if not self._task:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    def _play_round(self) -> List[Event]:
        """Advance the engine one round and record its events. Caller holds the lock."""
        evts = self.engine.tick()
        if evts:
            self.events.append_many(evts)
        if evts and all(e.kind == "RoundCompleted" for e in evts):
            # Nobody moved or attacked: every later round is identical
            self.deadlocked = True
            logger.warning("Battle %s deadlocked at round %d",
                           self.engine.state.battle_id, self.engine.state.rounds)
        return evts

    def finished(self) -> bool:
        return self.engine.is_finished() or self.deadlocked or self.error is not None

    async def _loop(self):
        """Main tick loop - play a round, log events, sleep until the next tick."""
        while True:
            async with self._lock:
                if self.finished():
                    break
                try:
                    evts = self._play_round()
                except InvariantViolation as e:
                    logger.exception("Battle %s aborted at round %d",
                                     self.engine.state.battle_id, self.engine.state.rounds)
                    self.error = str(e)
                    return

            logger.debug("Tick produced %d events", len(evts))
            await asyncio.sleep(self.sleep_s)

        logger.info("Battle %s over after %d rounds, score %d",
                    self.engine.state.battle_id, self.engine.state.rounds, self.engine.score())

    async def step_once(self, rounds: int = 1) -> List[Event]:
        """Play up to `rounds` rounds immediately, regardless of the tick loop."""
        evts: List[Event] = []
        async with self._lock:
            for _ in range(rounds):
                if self.finished():
                    break
                evts += self._play_round()
        return evts

    async def snapshot(self) -> State:
        """Get current state (thread-safe)."""
        async with self._lock:
            return self.engine.snapshot()

    def set_time_compression(self, time_compression: float):
        """Update time compression factor (1.0 = real-time, higher = faster)."""
        self.time_compression = max(0.1, min(1000.0, time_compression))
        self.sleep_s = (self.tick_ms / 1000.0) / max(1.0, self.time_compression)
        logger.info("Time compression set to %sx (sleep: %.4fs)", self.time_compression, self.sleep_s)
