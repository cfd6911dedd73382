from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, Literal, NamedTuple, Optional

from .config import DEFAULT_HEALTH, DEFAULT_POWER, ELF, GOBLIN, SPACE, WALL

if TYPE_CHECKING:
    from .arena import Arena


class Coordinate(NamedTuple):
    """Grid position. Tuple ordering is reading order (row first, then column)."""
    row: int
    col: int


class Cell(Enum):
    SPACE = SPACE
    WALL = WALL


class Faction(Enum):
    """The two opposing teams; the value is the grid symbol."""
    ELF = ELF
    GOBLIN = GOBLIN


def is_opponent(a: Faction, b: Faction) -> bool:
    return a != b


@dataclass
class Unit:
    id: int
    faction: Faction
    health: int = DEFAULT_HEALTH
    power: int = DEFAULT_POWER

    def to_char(self) -> str:
        return self.faction.value

    def is_opponent(self, other: "Unit") -> bool:
        return is_opponent(self.faction, other.faction)


class Link(NamedTuple):
    """Predecessor on the best known path, with the predecessor's step count."""
    steps: int
    coord: Coordinate


ActionKind = Literal["stay", "move", "attack", "move_and_attack"]


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    dest: Optional[Coordinate] = None    # cell to move into
    target: Optional[Coordinate] = None  # opponent to strike

    @classmethod
    def stay(cls) -> "Action":
        return cls("stay")

    @classmethod
    def move(cls, dest: Coordinate) -> "Action":
        return cls("move", dest=dest)

    @classmethod
    def attack(cls, target: Coordinate) -> "Action":
        return cls("attack", target=target)

    @classmethod
    def move_and_attack(cls, dest: Coordinate, target: Coordinate) -> "Action":
        return cls("move_and_attack", dest=dest, target=target)


@dataclass
class Event:
    kind: str
    round: int
    data: Dict


@dataclass
class State:
    arena: "Arena"
    units: Dict[Coordinate, Unit] = field(default_factory=dict)
    rounds: int = 0
    battle_id: str = "local"
