"""Minimal attack power for a lossless victory."""

import copy
import logging
from dataclasses import dataclass
from typing import Optional

from .config import DEFAULT_POWER, MAX_POWER
from .engine import Engine
from .errors import PowerSearchExhausted, Stalemate
from .model import Faction
from .parser import parse

logger = logging.getLogger(__name__)


@dataclass
class PowerSearchResult:
    power: int
    score: int
    rounds: int


def find_min_power_for_lossless_victory(
    grid: str,
    faction: Faction = Faction.ELF,
    min_power: Optional[int] = None,
    max_power: int = MAX_POWER,
) -> PowerSearchResult:
    """
    Replay the battle from the initial layout with increasing power for one
    faction until it wins without losing a unit.

    min_power defaults to one above the baseline power, since the baseline
    battle is the unmodified one. Raises PowerSearchExhausted if no power up
    to max_power (inclusive) works.
    """
    if min_power is None:
        min_power = DEFAULT_POWER + 1

    initial = parse(grid)

    for power in range(min_power, max_power + 1):
        eng = Engine(copy.deepcopy(initial))
        eng.set_power(faction, power)
        starting = eng.count(faction)
        try:
            score = eng.run()
        except Stalemate:
            logger.info("%s power %d: deadlocked after %d rounds", faction.name, power, eng.state.rounds)
            continue
        survivors = eng.count(faction)
        logger.info("%s power %d: %d/%d survived, score %d",
                    faction.name, power, survivors, starting, score)
        if survivors == starting and eng.winner() == faction:
            return PowerSearchResult(power=power, score=score, rounds=eng.state.rounds)

    raise PowerSearchExhausted(faction.name, min_power, max_power)
