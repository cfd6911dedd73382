from typing import List, Literal, Optional
from pydantic import BaseModel, Field
from combat.config import DEFAULT_POWER, MAX_POWER

class StartRequest(BaseModel):
    """Battle start request schema."""
    grid: Optional[str] = None  # defaults to the demo arena
    elf_power: int = Field(default=DEFAULT_POWER, ge=1)
    autoplay: bool = True

class OutcomeRequest(BaseModel):
    """Run-to-completion request schema."""
    grid: str
    elf_power: int = Field(default=DEFAULT_POWER, ge=1)

class OutcomeResponse(BaseModel):
    score: int
    rounds: int
    winner: Optional[str]
    healths: List[int]
    grid: str

class PowerSearchRequest(BaseModel):
    """Lossless-victory power search request schema."""
    grid: str
    faction: Literal["E", "G"] = "E"
    min_power: Optional[int] = Field(default=None, ge=1)
    max_power: int = Field(default=MAX_POWER, ge=1)

class PowerSearchResponse(BaseModel):
    power: int
    score: int
    rounds: int

class EventsResponse(BaseModel):
    """Events response schema."""
    next_offset: int
    total: int
    events: list[dict]
