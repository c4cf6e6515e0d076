"""JSON text encoding and decoding of wire messages."""

from __future__ import annotations

import json

from pydantic import ValidationError

from paintbot.domain.errors import ProtocolError, UnknownMessageType
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
    MapUpdateEvent,
    Message,
    NoActiveTournament,
    PlayerRegistered,
    RegisterMove,
    RegisterPlayer,
    StartGame,
    TournamentEndedEvent,
)

_MODELS: tuple[type[Message], ...] = (
    ClientInfo,
    RegisterPlayer,
    StartGame,
    RegisterMove,
    HeartBeatRequest,
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
)

MESSAGE_MODELS: dict[str, type[Message]] = {
    model.model_fields["type"].default.value: model for model in _MODELS
}


def encode_message(message: Message) -> str:
    """Serialise a message to its JSON wire form, omitting unset optionals."""
    return message.model_dump_json(by_alias=True, exclude_none=True)


def decode_message(text: str | bytes) -> Message:
    """Parse a JSON wire record into the message variant named by its type."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ProtocolError(f"Message is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ProtocolError("Message must be a JSON object")
    message_type = data.get("type")
    if not isinstance(message_type, str) or not message_type:
        raise ProtocolError("Message is missing a 'type' discriminator")
    model = MESSAGE_MODELS.get(message_type)
    if model is None:
        raise UnknownMessageType(message_type)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ProtocolError(f"Invalid {model.__name__} payload: {exc}") from exc
