"""Pydantic models for the records nested inside wire messages."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Immutable record serialised with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class GameSettings(WireModel):
    """Game configuration; unset fields are left to the server."""

    max_noof_players: int | None = None
    time_in_ms_per_tick: int | None = None
    obstacles_enabled: bool | None = None
    power_ups_enabled: bool | None = None
    add_power_up_likelihood: int | None = None
    remove_power_up_likelihood: int | None = None
    training_game: bool | None = None
    points_per_tile_owned: int | None = None
    points_per_caused_stun: int | None = None
    no_of_ticks_invulnerable_after_stun: int | None = None
    no_of_ticks_stunned: int | None = None
    start_obstacles: int | None = None
    start_power_ups: int | None = None
    game_duration_in_seconds: int | None = None
    explosion_range: int | None = None
    points_per_tick: bool | None = None


class CharacterInfo(WireModel):
    id: str
    name: str
    points: int = 0
    position: int
    coloured_positions: tuple[int, ...] = ()
    stunned_for_game_ticks: int = 0
    carrying_power_up: bool = False


class CollisionInfo(WireModel):
    position: int
    colliders: tuple[str, ...] = ()


class ExplosionInfo(WireModel):
    position: int
    exploders: tuple[str, ...] = ()


class GameMap(WireModel):
    """One tick's grid snapshot; positions are row-major linear indices."""

    width: int
    height: int
    world_tick: int = 0
    power_up_positions: tuple[int, ...] = ()
    obstacle_positions: tuple[int, ...] = ()
    character_infos: tuple[CharacterInfo, ...] = ()
    collision_infos: tuple[CollisionInfo, ...] = ()
    explosion_infos: tuple[ExplosionInfo, ...] = ()

    @model_validator(mode="after")
    def _check_positions(self) -> "GameMap":
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Map dimensions must be positive")
        size = self.width * self.height
        for label, position in self._referenced_positions():
            if not 0 <= position < size:
                raise ValueError(f"{label} position {position} is outside the map")
        return self

    def _referenced_positions(self):
        for position in self.power_up_positions:
            yield "power-up", position
        for position in self.obstacle_positions:
            yield "obstacle", position
        for character in self.character_infos:
            yield f"character {character.id}", character.position
            for position in character.coloured_positions:
                yield f"character {character.id} coloured", position
        for collision in self.collision_infos:
            yield "collision", collision.position
        for explosion in self.explosion_infos:
            yield "explosion", explosion.position


class PlayerRank(WireModel):
    player_name: str
    player_id: str
    rank: int
    points: int
    alive: bool = True


class TournamentPlayerPoints(WireModel):
    name: str
    player_id: str
    points: int


class GameHistoryEntry(WireModel):
    game_id: str
    player_positions: tuple[str, ...] = ()
