"""Wire protocol models and codec."""

from paintbot.protocol.codec import MESSAGE_MODELS, decode_message, encode_message
from paintbot.protocol.messages import (
    ArenaUpdateEvent,
    CharacterStunnedEvent,
    ClientInfo,
    GameAbortedEvent,
    GameChangedEvent,
    GameCreatedEvent,
    GameEndedEvent,
    GameLinkEvent,
    GameResultEvent,
    GameStartingEvent,
    HeartBeatRequest,
    HeartBeatResponse,
    InvalidMessage,
    InvalidPlayerName,
    InvalidPlayerNameReason,
    MapUpdateEvent,
    Message,
    MessageType,
    NoActiveTournament,
    PlayerRegistered,
    RegisterMove,
    RegisterPlayer,
    StartGame,
    TournamentEndedEvent,
)
from paintbot.protocol.models import (
    CharacterInfo,
    CollisionInfo,
    ExplosionInfo,
    GameMap,
    GameSettings,
    PlayerRank,
)

__all__ = [
    "MESSAGE_MODELS",
    "decode_message",
    "encode_message",
    "Message",
    "MessageType",
    "InvalidPlayerNameReason",
    "ClientInfo",
    "RegisterPlayer",
    "StartGame",
    "RegisterMove",
    "HeartBeatRequest",
    "HeartBeatResponse",
    "PlayerRegistered",
    "InvalidMessage",
    "InvalidPlayerName",
    "NoActiveTournament",
    "ArenaUpdateEvent",
    "CharacterStunnedEvent",
    "GameAbortedEvent",
    "GameChangedEvent",
    "GameCreatedEvent",
    "GameEndedEvent",
    "GameLinkEvent",
    "GameResultEvent",
    "GameStartingEvent",
    "MapUpdateEvent",
    "TournamentEndedEvent",
    "CharacterInfo",
    "CollisionInfo",
    "ExplosionInfo",
    "GameMap",
    "GameSettings",
    "PlayerRank",
]
