"""Message variants exchanged with the game server.

Every message is a JSON object whose ``type`` field holds a namespaced
discriminator. Requests are sent by the client; responses, exceptions and
events are pushed by the server.
"""

from __future__ import annotations

import platform
from enum import Enum
from typing import Any, Mapping, Union

from pydantic import Field

from paintbot.domain.actions import Action
from paintbot.protocol.models import (
    GameHistoryEntry,
    GameMap,
    GameSettings,
    PlayerRank,
    TournamentPlayerPoints,
    WireModel,
)

_NAMESPACE = "se.cygni.paintbot.api"


class MessageType(str, Enum):
    # Requests
    CLIENT_INFO = f"{_NAMESPACE}.request.ClientInfo"
    REGISTER_PLAYER = f"{_NAMESPACE}.request.RegisterPlayer"
    START_GAME = f"{_NAMESPACE}.request.StartGame"
    REGISTER_MOVE = f"{_NAMESPACE}.request.RegisterMove"
    HEART_BEAT_REQUEST = f"{_NAMESPACE}.request.HeartBeatRequest"

    # Responses
    HEART_BEAT_RESPONSE = f"{_NAMESPACE}.response.HeartBeatResponse"
    PLAYER_REGISTERED = f"{_NAMESPACE}.response.PlayerRegistered"

    # Exceptions
    INVALID_MESSAGE = f"{_NAMESPACE}.exception.InvalidMessage"
    INVALID_PLAYER_NAME = f"{_NAMESPACE}.exception.InvalidPlayerName"
    NO_ACTIVE_TOURNAMENT = f"{_NAMESPACE}.exception.NoActiveTournament"

    # Events
    ARENA_UPDATE = f"{_NAMESPACE}.event.ArenaUpdateEvent"
    CHARACTER_STUNNED = f"{_NAMESPACE}.event.CharacterStunnedEvent"
    GAME_ABORTED = f"{_NAMESPACE}.event.GameAbortedEvent"
    GAME_CHANGED = f"{_NAMESPACE}.event.GameChangedEvent"
    GAME_CREATED = f"{_NAMESPACE}.event.GameCreatedEvent"
    GAME_ENDED = f"{_NAMESPACE}.event.GameEndedEvent"
    GAME_LINK = f"{_NAMESPACE}.event.GameLinkEvent"
    GAME_RESULT = f"{_NAMESPACE}.event.GameResultEvent"
    GAME_STARTING = f"{_NAMESPACE}.event.GameStartingEvent"
    MAP_UPDATE = f"{_NAMESPACE}.event.MapUpdateEvent"
    TOURNAMENT_ENDED = f"{_NAMESPACE}.event.TournamentEndedEvent"


class InvalidPlayerNameReason(str, Enum):
    TAKEN = "Taken"
    EMPTY = "Empty"
    INVALID_CHARACTER = "InvalidCharacter"


class Message(WireModel):
    type: MessageType


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class ClientInfo(Message):
    type: MessageType = MessageType.CLIENT_INFO
    language: str = "Python"
    language_version: str | None = None
    operating_system: str | None = None
    operating_system_version: str | None = None
    client_version: str | None = None


class RegisterPlayer(Message):
    type: MessageType = MessageType.REGISTER_PLAYER
    player_name: str
    game_settings: GameSettings | None = None


class StartGame(Message):
    type: MessageType = MessageType.START_GAME


class RegisterMove(Message):
    type: MessageType = MessageType.REGISTER_MOVE
    game_id: str
    game_tick: int
    direction: Action


class HeartBeatRequest(Message):
    type: MessageType = MessageType.HEART_BEAT_REQUEST


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class HeartBeatResponse(Message):
    type: MessageType = MessageType.HEART_BEAT_RESPONSE


class PlayerRegistered(Message):
    type: MessageType = MessageType.PLAYER_REGISTERED
    game_id: str | None = None
    player_name: str | None = None
    game_mode: str | None = None


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class InvalidMessage(Message):
    type: MessageType = MessageType.INVALID_MESSAGE
    error_message: str
    received_message: str


class InvalidPlayerName(Message):
    type: MessageType = MessageType.INVALID_PLAYER_NAME
    reason_code: InvalidPlayerNameReason


class NoActiveTournament(Message):
    type: MessageType = MessageType.NO_ACTIVE_TOURNAMENT


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class ArenaUpdateEvent(Message):
    type: MessageType = MessageType.ARENA_UPDATE
    arena_name: str
    game_id: str | None = None
    ranked: bool = False
    rating: dict[str, int] = Field(default_factory=dict)
    online_players: tuple[str, ...] = ()
    game_history: tuple[GameHistoryEntry, ...] = ()


class CharacterStunnedEvent(Message):
    type: MessageType = MessageType.CHARACTER_STUNNED
    game_id: str
    player_id: str
    stun_reason: str
    duration_in_ticks: int
    x: int
    y: int


class GameAbortedEvent(Message):
    type: MessageType = MessageType.GAME_ABORTED
    game_id: str


class GameChangedEvent(Message):
    type: MessageType = MessageType.GAME_CHANGED
    game_id: str


class GameCreatedEvent(Message):
    type: MessageType = MessageType.GAME_CREATED
    game_id: str


class GameEndedEvent(Message):
    type: MessageType = MessageType.GAME_ENDED
    player_winner_id: str | None = None
    player_winner_name: str | None = None
    game_id: str
    game_tick: int
    map: GameMap


class GameLinkEvent(Message):
    type: MessageType = MessageType.GAME_LINK
    game_id: str
    url: str


class GameResultEvent(Message):
    type: MessageType = MessageType.GAME_RESULT
    game_id: str
    game_result: tuple[PlayerRank, ...] = ()


class GameStartingEvent(Message):
    type: MessageType = MessageType.GAME_STARTING
    game_id: str
    noof_players: int
    width: int
    height: int
    game_settings: GameSettings


class MapUpdateEvent(Message):
    type: MessageType = MessageType.MAP_UPDATE
    receiving_player_id: str
    game_id: str
    game_tick: int
    map: GameMap


class TournamentEndedEvent(Message):
    type: MessageType = MessageType.TOURNAMENT_ENDED
    tournament_id: str
    tournament_name: str
    player_winner_id: str | None = None
    game_id: str
    game_result: tuple[TournamentPlayerPoints, ...] = ()


ServerMessage = Union[
    HeartBeatResponse,
    PlayerRegistered,
    InvalidMessage,
    InvalidPlayerName,
    NoActiveTournament,
    ArenaUpdateEvent,
    CharacterStunnedEvent,
    GameAbortedEvent,
    GameChangedEvent,
    GameCreatedEvent,
    GameEndedEvent,
    GameLinkEvent,
    GameResultEvent,
    GameStartingEvent,
    MapUpdateEvent,
    TournamentEndedEvent,
]


# ---------------------------------------------------------------------------
# Request builders
# ---------------------------------------------------------------------------


def client_info_message(overrides: Mapping[str, Any] | None = None) -> ClientInfo:
    """Build a ClientInfo request describing the running interpreter."""
    fields: dict[str, Any] = {
        "language": "Python",
        "language_version": platform.python_version(),
        "operating_system": platform.system() or None,
        "operating_system_version": platform.release() or None,
    }
    if overrides:
        fields.update(overrides)
    return ClientInfo.model_validate(fields)


def register_player_message(
    player_name: str, game_settings: GameSettings | Mapping[str, Any] | None = None
) -> RegisterPlayer:
    """Build a RegisterPlayer request with optional settings overrides."""
    settings = game_settings
    if settings is not None and not isinstance(settings, GameSettings):
        settings = GameSettings.model_validate(dict(settings))
    return RegisterPlayer(player_name=player_name, game_settings=settings)


def register_move_message(action: Action, game_id: str, game_tick: int) -> RegisterMove:
    return RegisterMove(direction=action, game_id=game_id, game_tick=game_tick)
