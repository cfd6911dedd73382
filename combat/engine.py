import logging
from typing import Dict, List, Mapping, Optional, Set

from .errors import InvariantViolation, Stalemate
from .model import Action, Coordinate, Event, Faction, State, Unit
from .pathfinder import PathFinder

logger = logging.getLogger(__name__)


def attack(attacker: Unit, defender: Unit) -> bool:
    """Strike defender with attacker's power. Returns True if the defender dies."""
    if not attacker.is_opponent(defender):
        raise InvariantViolation(f"unit {attacker.id} attempted to attack ally {defender.id}")
    defender.health = max(0, defender.health - attacker.power)
    return defender.health == 0


class Engine:
    """Pure, deterministic battle simulation."""

    def __init__(self, initial_state: State):
        self.state = initial_state
        # Secondary index: unit id -> current cell
        self._positions: Dict[int, Coordinate] = {
            u.id: coord for coord, u in initial_state.units.items()
        }

    def factions(self) -> Set[Faction]:
        return {u.faction for u in self.state.units.values()}

    def is_finished(self) -> bool:
        return len(self.factions()) < 2

    def winner(self) -> Optional[Faction]:
        factions = self.factions()
        if len(factions) != 1:
            return None
        return next(iter(factions))

    def count(self, faction: Faction) -> int:
        return sum(1 for u in self.state.units.values() if u.faction == faction)

    def healths(self) -> List[int]:
        """Remaining health of every unit, in reading order."""
        return [u.health for _, u in sorted(self.state.units.items())]

    def score(self) -> int:
        return sum(u.health for u in self.state.units.values()) * self.state.rounds

    def set_power(self, faction: Faction, power: int) -> None:
        if power < 1:
            raise ValueError(f"power must be positive, got {power}")
        for u in self.state.units.values():
            if u.faction == faction:
                u.power = power

    def position_of(self, unit_id: int) -> Optional[Coordinate]:
        return self._positions.get(unit_id)

    def decide(self, unit: Unit, position: Coordinate, units: Mapping[Coordinate, Unit]) -> Action:
        """
        Pick this turn's action for a unit standing at position.

        units must not contain the deciding unit itself.
        """
        arena = self.state.arena
        pathfinder = PathFinder(position, arena, units)

        # Free, reachable cells next to an opponent
        attack_cells: Set[Coordinate] = set()
        for coord, other in units.items():
            if not unit.is_opponent(other):
                continue
            for cell in arena.get_adjacent(coord):
                if cell not in units and cell in pathfinder:
                    attack_cells.add(cell)

        if not attack_cells:
            return Action.stay()

        if position in attack_cells:
            return Action.attack(self._choose_target(unit, position, units))

        # Closest attack cell, ties broken by reading order
        goal = min(attack_cells, key=lambda c: (pathfinder.steps_to(c), c))
        step = pathfinder.get_first_step_toward(goal)
        if step in attack_cells:
            return Action.move_and_attack(step, self._choose_target(unit, step, units))
        return Action.move(step)

    def _choose_target(self, unit: Unit, cell: Coordinate, units: Mapping[Coordinate, Unit]) -> Coordinate:
        """Adjacent opponent with the lowest health, ties broken by reading order."""
        candidates = [
            c for c in self.state.arena.get_adjacent(cell)
            if c in units and unit.is_opponent(units[c])
        ]
        if not candidates:
            raise InvariantViolation(f"no opponent adjacent to attack cell {cell}")
        return min(candidates, key=lambda c: (units[c].health, c))

    def _place(self, unit: Unit, coord: Coordinate) -> None:
        if coord in self.state.units:
            raise InvariantViolation(f"unit {unit.id} moved onto occupied cell {coord}")
        self.state.units[coord] = unit
        self._positions[unit.id] = coord

    def _strike(self, attacker: Unit, target: Coordinate, round_no: int) -> List[Event]:
        evts: List[Event] = []
        defender = self.state.units.get(target)
        if defender is None:
            raise InvariantViolation(f"opponent not found when attacking target: {target}")
        killed = attack(attacker, defender)
        evts.append(Event("Attack", round_no,
                          {"attacker": attacker.id, "target": defender.id,
                           "pos": list(target), "dmg": attacker.power, "hp": defender.health}))
        if killed:
            del self.state.units[target]
            del self._positions[defender.id]
            evts.append(Event("Destroyed", round_no,
                              {"unit_id": defender.id, "faction": defender.faction.value,
                               "pos": list(target), "killer": attacker.id}))
        return evts

    def _take_turn(self, unit_id: int, round_no: int) -> List[Event]:
        evts: List[Event] = []
        pos = self._positions[unit_id]
        unit = self.state.units.pop(pos)
        action = self.decide(unit, pos, self.state.units)

        if action.kind == "stay":
            self._place(unit, pos)
        elif action.kind == "move":
            self._place(unit, action.dest)
            evts.append(Event("UnitMoved", round_no,
                              {"unit_id": unit.id, "from": list(pos), "to": list(action.dest)}))
        elif action.kind == "attack":
            self._place(unit, pos)
            evts += self._strike(unit, action.target, round_no)
        elif action.kind == "move_and_attack":
            self._place(unit, action.dest)
            evts.append(Event("UnitMoved", round_no,
                              {"unit_id": unit.id, "from": list(pos), "to": list(action.dest)}))
            evts += self._strike(unit, action.target, round_no)
        return evts

    def tick(self) -> List[Event]:
        """
        Play one round: every unit alive at round start takes one turn, in
        the reading order of the round-start layout.

        The round only counts towards the score if no unit found the enemy
        already wiped out when its turn came up.
        """
        evts: List[Event] = []
        if self.is_finished():
            return evts

        round_no = self.state.rounds + 1
        # Ids, not coords: coords change while the round is in progress
        order = [u.id for _, u in sorted(self.state.units.items())]
        completed = True
        for unit_id in order:
            if unit_id not in self._positions:
                continue  # killed earlier this round
            if self.is_finished():
                completed = False
                break
            evts += self._take_turn(unit_id, round_no)

        if completed:
            self.state.rounds = round_no
            evts.append(Event("RoundCompleted", round_no, {"units": len(self.state.units)}))
            logger.debug("Round %d completed with %d units", round_no, len(self.state.units))

        if self.is_finished():
            winner = self.winner()
            evts.append(Event("BattleEnded", round_no,
                              {"rounds": self.state.rounds,
                               "winner": winner.value if winner else None,
                               "score": self.score()}))
            logger.debug("Battle ended after %d full rounds, score %d",
                         self.state.rounds, self.score())
        return evts

    def run(self) -> int:
        """Play rounds until one faction remains. Returns the outcome score."""
        while not self.is_finished():
            evts = self.tick()
            if all(e.kind == "RoundCompleted" for e in evts):
                raise Stalemate(self.state.rounds)
        return self.score()

    def snapshot(self) -> State:
        """Return current state."""
        return self.state
