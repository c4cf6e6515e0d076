"""Heuristic baseline player implementation."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from paintbot.app.legal_actions import allowed_actions
from paintbot.app.spatial_map import SpatialMap
from paintbot.domain.actions import Action
from paintbot.domain.coordinate import Coordinate
from paintbot.domain.tiles import TileKind
from paintbot.protocol.messages import GameStartingEvent

_DEFAULT_EXPLOSION_RANGE = 4


@dataclass
class HeuristicBot:
    """Rule-based bot that chases power-ups and unpainted tiles."""

    name: str = "heuristic"
    seed: int | None = None
    kind: str = "heuristic"
    explosion_range: int = _DEFAULT_EXPLOSION_RANGE
    _rng: random.Random = field(init=False)

    def __post_init__(self) -> None:
        """Initialize the RNG and validate the explosion range."""
        if self.explosion_range < 0:
            raise ValueError("explosion_range cannot be negative")
        self._rng = random.Random(self.seed)

    def on_game_start(self, event: GameStartingEvent) -> None:
        """Pick up the authoritative explosion range for the new game."""
        if event.game_settings.explosion_range is not None:
            self.explosion_range = event.game_settings.explosion_range
        if self.seed is not None:
            self._rng = random.Random(self.seed)

    def get_next_action(self, spatial_map: SpatialMap) -> Action:
        """Explode near opponents, else move toward power-ups or fresh paint."""
        me = spatial_map.get_my_character()
        here = spatial_map.get_coordinate_at_position(me.position)
        actions = allowed_actions(spatial_map)
        if Action.EXPLODE in actions and self._opponent_in_range(spatial_map, here):
            return Action.EXPLODE
        moves = [
            action for action in actions if action not in (Action.STAY, Action.EXPLODE)
        ]
        if not moves:
            return Action.STAY
        if not me.carrying_power_up:
            targets = spatial_map.get_power_up_coordinates()
            if targets:
                return self._closest_move(here, moves, targets)
        fresh = [action for action in moves if self._is_fresh(spatial_map, here, action)]
        return self._rng.choice(fresh or moves)

    def _opponent_in_range(self, spatial_map: SpatialMap, here: Coordinate) -> bool:
        for character in spatial_map.characters:
            if character.id == spatial_map.player_id:
                continue
            other = spatial_map.get_coordinate_at_position(character.position)
            if here.manhattan_distance_to(other) <= self.explosion_range:
                return True
        return False

    def _closest_move(
        self, here: Coordinate, moves: list[Action], targets: list[Coordinate]
    ) -> Action:
        def distance(action: Action) -> int:
            destination = here.translated_by_action(action)
            return min(destination.manhattan_distance_to(target) for target in targets)

        return min(moves, key=distance)

    def _is_fresh(self, spatial_map: SpatialMap, here: Coordinate, action: Action) -> bool:
        tile = spatial_map.get_tile_at_coordinate(here.translated_by_action(action))
        return not (tile.kind == TileKind.COLOURED and tile.player_id == spatial_map.player_id)
