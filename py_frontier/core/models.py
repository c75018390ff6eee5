"""
Game snapshot models consumed by the AI planner.

These mirror the subset of game state the planner reads: star positions and
ownership, player research levels and credits, and the tick/production-cycle
counters that decide when the AI spends money.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import settings


class Location(BaseModel):
    """A point in galaxy coordinates."""

    x: float
    y: float


class Star(BaseModel):
    """A star system, possibly owned by a player."""

    id: str = Field(description="Unique star identifier")
    name: str = Field(default="", description="Star name")
    location: Location
    owned_by_player_id: Optional[str] = Field(
        default=None, description="Owning player id, None for neutral stars"
    )
    ignore_bulk_upgrade: bool = Field(
        default=False, description="Whether bulk upgrades skip this star"
    )


class ResearchLevel(BaseModel):
    level: int = Field(default=1, ge=1)


class PlayerResearch(BaseModel):
    hyperspace: ResearchLevel = Field(default_factory=ResearchLevel)
    scanning: ResearchLevel = Field(default_factory=ResearchLevel)


class Player(BaseModel):
    """A participant in the game."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(description="Unique player identifier")
    alias: str = Field(default="", description="Display name")
    defeated: bool = Field(default=False, description="Defeated players are AI controlled")
    ai: bool = Field(default=False, description="Whether the AI has been set up for this player")
    credits: float = Field(default=0.0, description="Credits available to spend")
    researching_next: Optional[str] = Field(default=None, description="Next research target")
    research: PlayerResearch = Field(default_factory=PlayerResearch)


class GameState(BaseModel):
    tick: int = Field(default=0, ge=0)


class GalaxySettings(BaseModel):
    production_ticks: int = Field(default_factory=lambda: settings.default_production_ticks, ge=2)


class GameConstants(BaseModel):
    light_year: float = Field(default_factory=lambda: settings.default_light_year, gt=0)


class Galaxy(BaseModel):
    stars: List[Star] = Field(default_factory=list)
    players: List[Player] = Field(default_factory=list)


class Game(BaseModel):
    """Snapshot of a running game."""

    id: str = Field(description="Unique game identifier")
    state: GameState = Field(default_factory=GameState)
    settings: GalaxySettings = Field(default_factory=GalaxySettings)
    constants: GameConstants = Field(default_factory=GameConstants)
    galaxy: Galaxy = Field(default_factory=Galaxy)
