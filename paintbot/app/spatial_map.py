"""Read-only spatial view over one map snapshot."""

from __future__ import annotations

from typing import Iterable

from paintbot.domain.actions import parse_action
from paintbot.domain.coordinate import Coordinate
from paintbot.domain.errors import CharacterNotFound, InvalidArgument
from paintbot.domain.tiles import EMPTY_TILE, OBSTACLE_TILE, POWER_UP_TILE, Tile
from paintbot.protocol.messages import MapUpdateEvent
from paintbot.protocol.models import CharacterInfo, GameMap


def build_tile_table(game_map: GameMap) -> dict[int, Tile]:
    """Classify every occupied cell of a snapshot.

    Writes are applied in a fixed order and later writes replace earlier
    ones: power-ups, obstacles, then for each character in snapshot order
    its own cell followed by its coloured cells.
    """
    tiles: dict[int, Tile] = {}
    for position in game_map.power_up_positions:
        tiles[position] = POWER_UP_TILE
    for position in game_map.obstacle_positions:
        tiles[position] = OBSTACLE_TILE
    for character in game_map.character_infos:
        tiles[character.position] = Tile.character(character.id)
        coloured = Tile.coloured(character.id)
        for position in character.coloured_positions:
            tiles[position] = coloured
    return tiles


class SpatialMap:
    """Tile classification and movement queries for the receiving player."""

    __slots__ = ("_map", "_player_id", "_characters", "_tiles")

    def __init__(self, game_map: GameMap, player_id: str) -> None:
        self._map = game_map
        self._player_id = player_id
        self._characters: dict[str, CharacterInfo] = {
            character.id: character for character in game_map.character_infos
        }
        self._tiles = build_tile_table(game_map)

    @classmethod
    def from_event(cls, event: MapUpdateEvent) -> "SpatialMap":
        return cls(event.map, event.receiving_player_id)

    @property
    def width(self) -> int:
        return self._map.width

    @property
    def height(self) -> int:
        return self._map.height

    @property
    def world_tick(self) -> int:
        return self._map.world_tick

    @property
    def player_id(self) -> str:
        return self._player_id

    @property
    def game_map(self) -> GameMap:
        return self._map

    @property
    def characters(self) -> tuple[CharacterInfo, ...]:
        return self._map.character_infos

    def get_coordinate_at_position(self, position: int) -> Coordinate:
        return Coordinate.from_position(position, self.width)

    def get_character_by_id(self, player_id: str) -> CharacterInfo:
        if not isinstance(player_id, str):
            raise InvalidArgument(f"player id must be a string, got {player_id!r}")
        try:
            return self._characters[player_id]
        except KeyError:
            raise CharacterNotFound(f"No character with id {player_id!r}") from None

    def get_my_character(self) -> CharacterInfo:
        return self.get_character_by_id(self._player_id)

    def get_my_coordinate(self) -> Coordinate:
        return self.get_coordinate_at_position(self.get_my_character().position)

    def get_tile_at_position(self, position: int) -> Tile:
        """Return the tile at a linear position; off-map positions are obstacles."""
        if isinstance(position, bool) or not isinstance(position, int):
            raise InvalidArgument(f"position must be an integer, got {position!r}")
        if position < 0 or position >= self.width * self.height:
            return OBSTACLE_TILE
        return self._tiles.get(position, EMPTY_TILE)

    def get_tile_at_coordinate(self, coordinate: Coordinate) -> Tile:
        """Return the tile at a coordinate; off-map coordinates are obstacles."""
        if not isinstance(coordinate, Coordinate):
            raise InvalidArgument("coordinate must be a Coordinate")
        if coordinate.is_out_of_bounds(self.width, self.height):
            return OBSTACLE_TILE
        return self._tiles.get(coordinate.to_position(self.width, self.height), EMPTY_TILE)

    def is_action_allowed(self, coordinate: Coordinate, action: object) -> bool:
        """Return True if performing action from coordinate is a legal move.

        Moving onto an obstacle, another character or off the map is not
        allowed. Actions without displacement are always allowed. Invalid
        arguments yield False instead of raising.
        """
        try:
            destination = coordinate.translated_by_action(parse_action(action))
            if destination == coordinate:
                return True
            return not self.get_tile_at_coordinate(destination).is_blocking
        except Exception:  # noqa: BLE001
            return False

    def can_i_move(self, action: object) -> bool:
        """Return True if the receiving player's character may perform action."""
        try:
            coordinate = self.get_my_coordinate()
        except CharacterNotFound:
            return False
        return self.is_action_allowed(coordinate, action)

    def get_coloured_coordinates(self, player_id: str) -> list[Coordinate]:
        return self._to_coordinates(self.get_character_by_id(player_id).coloured_positions)

    def get_power_up_coordinates(self) -> list[Coordinate]:
        return self._to_coordinates(self._map.power_up_positions)

    def get_obstacle_coordinates(self) -> list[Coordinate]:
        return self._to_coordinates(self._map.obstacle_positions)

    def _to_coordinates(self, positions: Iterable[int]) -> list[Coordinate]:
        return [self.get_coordinate_at_position(position) for position in positions]
