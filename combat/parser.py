"""Text grid <-> battle state."""

from typing import Dict, List

from .arena import Arena
from .config import DEFAULT_HEALTH, DEFAULT_POWER
from .errors import ParseError
from .model import Cell, Coordinate, Faction, State, Unit

_CELLS = {c.value: c for c in Cell}
_FACTIONS = {f.value: f for f in Faction}


def parse(text: str, health: int = DEFAULT_HEALTH, power: int = DEFAULT_POWER) -> State:
    """
    Build the initial state from a grid of '#', '.', 'E' and 'G'.

    Units stand on open ground and get ids in reading order. Blank lines and
    surrounding whitespace are ignored. The grid must be rectangular and
    enclosed by walls.
    """
    if health < 1:
        raise ParseError(f"unit health must be positive, got {health}")
    if power < 1:
        raise ParseError(f"unit power must be positive, got {power}")
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        raise ParseError("empty grid")

    width = len(lines[0])
    rows: List[List[Cell]] = []
    units: Dict[Coordinate, Unit] = {}
    for r, line in enumerate(lines):
        if len(line) != width:
            raise ParseError(f"expected {width} columns, found {len(line)}", row=r)
        row: List[Cell] = []
        for c, ch in enumerate(line):
            if ch in _FACTIONS:
                units[Coordinate(r, c)] = Unit(id=len(units), faction=_FACTIONS[ch],
                                               health=health, power=power)
                row.append(Cell.SPACE)
            elif ch in _CELLS:
                row.append(_CELLS[ch])
            else:
                raise ParseError(f"invalid character: {ch!r}", row=r, col=c)
        rows.append(row)

    height = len(rows)
    for r, row in enumerate(rows):
        for c, cell in enumerate(row):
            on_edge = r in (0, height - 1) or c in (0, width - 1)
            if on_edge and cell is not Cell.WALL:
                raise ParseError("grid is not enclosed by walls", row=r, col=c)

    return State(arena=Arena(rows), units=units)


def render(state: State, with_health: bool = False) -> str:
    """Draw the current layout. with_health appends each row's unit health, e.g. '   G(200), E(131)'."""
    arena = state.arena
    out = []
    for r in range(arena.height):
        chars = []
        annotations = []
        for c in range(arena.width):
            coord = Coordinate(r, c)
            unit = state.units.get(coord)
            if unit is not None:
                chars.append(unit.to_char())
                annotations.append(f"{unit.to_char()}({unit.health})")
            else:
                chars.append(arena.cell(coord).value)
        line = "".join(chars)
        if with_health and annotations:
            line += "   " + ", ".join(annotations)
        out.append(line + "\n")
    return "".join(out)
