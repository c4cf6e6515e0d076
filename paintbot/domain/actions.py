from __future__ import annotations

from enum import Enum

from .errors import InvalidAction


class Action(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    STAY = "STAY"
    EXPLODE = "EXPLODE"


ACTION_DELTAS: dict[Action, tuple[int, int]] = {
    Action.UP: (0, -1),
    Action.DOWN: (0, 1),
    Action.LEFT: (-1, 0),
    Action.RIGHT: (1, 0),
    Action.STAY: (0, 0),
    Action.EXPLODE: (0, 0),
}

MOVEMENT_ACTIONS: tuple[Action, ...] = (
    Action.DOWN,
    Action.UP,
    Action.LEFT,
    Action.RIGHT,
)


def parse_action(value: object) -> Action:
    """Coerce an Action member or its wire string into an Action."""
    if isinstance(value, Action):
        return value
    if not isinstance(value, str):
        raise InvalidAction(f"The action {value!r} is invalid")
    try:
        return Action(value)
    except ValueError as exc:
        raise InvalidAction(f"The action {value!r} is invalid") from exc


def action_delta(action: object) -> tuple[int, int]:
    """Return the unit displacement of an action."""
    return ACTION_DELTAS[parse_action(action)]
