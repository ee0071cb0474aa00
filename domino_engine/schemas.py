from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

SideName = Literal["left", "right"]
LogActionName = Literal["start", "place", "pass", "win"]


class TileSchema(BaseModel):
    id: Optional[str] = None
    left: int = Field(ge=0)
    right: int = Field(ge=0)
    is_double: Optional[bool] = None
    rotation: int = 0

    @field_validator("rotation")
    @classmethod
    def check_rotation(cls, v: int) -> int:
        if v not in (0, 90, 180, 270):
            raise ValueError(f"rotation must be one of 0, 90, 180, 270, got {v}")
        return v


class PlacedTileSchema(TileSchema):
    x: float = 0.0
    y: float = 0.0
    connected_side: SideName
    placed_by: str


class LogEntrySchema(BaseModel):
    action: LogActionName
    player_id: str
    timestamp: datetime
    tile: Optional[TileSchema] = None
    side: Optional[SideName] = None
    details: Dict[str, Any] = Field(default_factory=dict)


class GameConfigSchema(BaseModel):
    max_pip: int = Field(default=6, ge=0)
    tiles_per_hand: int = Field(default=7, ge=1)
    strict_pass: bool = False
    seed: Optional[int] = None


class GameStateSchema(BaseModel):
    player_hands: Dict[str, List[TileSchema]]
    placed_tiles: List[PlacedTileSchema] = Field(default_factory=list)
    left_end: Optional[int] = None
    right_end: Optional[int] = None
    current_player: str
    player_order: List[str]
    pass_count: int = Field(default=0, ge=0)
    game_ended: bool = False
    winner: Optional[str] = None
    game_log: List[LogEntrySchema] = Field(default_factory=list)
    config: GameConfigSchema = Field(default_factory=GameConfigSchema)

    @model_validator(mode="after")
    def check_consistency(self) -> "GameStateSchema":
        if not self.player_order:
            raise ValueError("player_order must not be empty")
        if self.current_player not in self.player_order:
            raise ValueError(f"current_player {self.current_player!r} is not in player_order")
        if self.winner is not None and self.winner not in self.player_order:
            raise ValueError(f"winner {self.winner!r} is not in player_order")
        if self.placed_tiles and (self.left_end is None or self.right_end is None):
            raise ValueError("open ends are required once tiles are placed")
        if not self.placed_tiles and (self.left_end is not None or self.right_end is not None):
            raise ValueError("open ends must be empty before the first tile")
        if self.game_ended != (self.winner is not None):
            raise ValueError("winner must be set exactly when the match has ended")
        if not self.game_ended and self.pass_count >= len(self.player_order):
            raise ValueError(
                f"pass_count {self.pass_count} would have blocked a match of {len(self.player_order)} players"
            )
        return self
