from .actions import ACTION_DELTAS, MOVEMENT_ACTIONS, Action, parse_action
from .coordinate import Coordinate
from .errors import (
    CharacterNotFound,
    ConnectionLost,
    InvalidAction,
    InvalidArgument,
    OutOfBounds,
    PaintbotError,
    PlayerRejected,
    ProtocolError,
    UnknownMessageType,
)
from .tiles import EMPTY_TILE, OBSTACLE_TILE, POWER_UP_TILE, Tile, TileKind

__all__ = [
    "Action",
    "ACTION_DELTAS",
    "MOVEMENT_ACTIONS",
    "parse_action",
    "Coordinate",
    "Tile",
    "TileKind",
    "EMPTY_TILE",
    "POWER_UP_TILE",
    "OBSTACLE_TILE",
    "PaintbotError",
    "InvalidArgument",
    "InvalidAction",
    "OutOfBounds",
    "CharacterNotFound",
    "ProtocolError",
    "UnknownMessageType",
    "PlayerRejected",
    "ConnectionLost",
]
