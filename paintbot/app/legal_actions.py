"""Allowed action helpers for the application layer."""

from __future__ import annotations

from paintbot.app.spatial_map import SpatialMap
from paintbot.domain.actions import MOVEMENT_ACTIONS, Action


def allowed_actions(spatial_map: SpatialMap) -> list[Action]:
    """Return the actions the receiving player's character may take this tick."""
    character = spatial_map.get_my_character()
    coordinate = spatial_map.get_coordinate_at_position(character.position)
    actions = [
        action
        for action in MOVEMENT_ACTIONS
        if spatial_map.is_action_allowed(coordinate, action)
    ]
    if character.carrying_power_up:
        actions.append(Action.EXPLODE)
    actions.append(Action.STAY)
    return actions
