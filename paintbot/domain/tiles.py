from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TileKind(str, Enum):
    EMPTY = "empty"
    POWER_UP = "power_up"
    OBSTACLE = "obstacle"
    CHARACTER = "character"
    COLOURED = "coloured"


_OWNED_KINDS = {TileKind.CHARACTER, TileKind.COLOURED}


@dataclass(frozen=True)
class Tile:
    kind: TileKind
    player_id: str | None = None

    def __post_init__(self) -> None:
        if self.kind in _OWNED_KINDS:
            if not self.player_id:
                raise ValueError(f"{self.kind.value} tile requires a player id")
        elif self.player_id is not None:
            raise ValueError(f"{self.kind.value} tile cannot carry a player id")

    @staticmethod
    def character(player_id: str) -> "Tile":
        return Tile(TileKind.CHARACTER, player_id)

    @staticmethod
    def coloured(player_id: str) -> "Tile":
        return Tile(TileKind.COLOURED, player_id)

    @property
    def is_blocking(self) -> bool:
        """True when a character cannot move onto this tile."""
        return self.kind in (TileKind.OBSTACLE, TileKind.CHARACTER)


EMPTY_TILE = Tile(TileKind.EMPTY)
POWER_UP_TILE = Tile(TileKind.POWER_UP)
OBSTACLE_TILE = Tile(TileKind.OBSTACLE)
