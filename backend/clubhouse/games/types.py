from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Venue policy: the largest group sold as one game.
DEFAULT_MAX_PLAYERS = 8

# A score row is either one hole or a whole-round total; anything larger is a typo.
MAX_STROKES_PER_ENTRY = 999
MAX_HOLE = 99


class CreateGameRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    player_id: str = Field(min_length=1)
    player_names: list[str] = Field(min_length=1)
    player_count: int = Field(strict=True)
    is_weekend: bool = Field(strict=True)


class ScoreEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True, frozen=True)

    player_name: str = Field(min_length=1)
    strokes: int = Field(ge=-MAX_STROKES_PER_ENTRY, le=MAX_STROKES_PER_ENTRY, strict=True)
    hole: int = Field(default=1, ge=1, le=MAX_HOLE, strict=True)


class Standing(BaseModel, frozen=True):
    player_name: str
    total_strokes: int
