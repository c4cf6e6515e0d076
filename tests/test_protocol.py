"""Tests for the wire protocol models and codec."""

from __future__ import annotations

import json

import pytest

from paintbot.domain.actions import Action
from paintbot.domain.errors import ProtocolError, UnknownMessageType
from paintbot.protocol import (
    MESSAGE_MODELS,
    GameResultEvent,
    GameSettings,
    GameStartingEvent,
    HeartBeatRequest,
    InvalidPlayerName,
    InvalidPlayerNameReason,
    MapUpdateEvent,
    MessageType,
    decode_message,
    encode_message,
)
from paintbot.protocol.messages import (
    client_info_message,
    register_move_message,
    register_player_message,
)


def _map_update_payload() -> dict[str, object]:
    """Return a server-shaped MapUpdateEvent payload."""
    return {
        "type": "se.cygni.paintbot.api.event.MapUpdateEvent",
        "receivingPlayerId": "p1",
        "gameId": "game-1",
        "gameTick": 12,
        "timestamp": 1700000000000,
        "map": {
            "width": 4,
            "height": 2,
            "worldTick": 12,
            "powerUpPositions": [7],
            "obstaclePositions": [0],
            "characterInfos": [
                {
                    "id": "p1",
                    "name": "alpha",
                    "points": 3,
                    "position": 5,
                    "colouredPositions": [4, 5],
                    "stunnedForGameTicks": 0,
                    "carryingPowerUp": True,
                }
            ],
            "collisionInfos": [{"position": 2, "colliders": ["p1"]}],
            "explosionInfos": [{"position": 3, "exploders": ["p1"]}],
        },
    }


def test_every_variant_has_a_unique_discriminator() -> None:
    """The model table covers the whole message vocabulary."""
    assert set(MESSAGE_MODELS) == {member.value for member in MessageType}
    for message_type in MESSAGE_MODELS:
        category = message_type.split(".")[4]
        assert message_type.startswith("se.cygni.paintbot.api.")
        assert category in {"request", "response", "exception", "event"}


def test_encode_heartbeat_request() -> None:
    """Payload-free requests encode to just their discriminator."""
    assert json.loads(encode_message(HeartBeatRequest())) == {
        "type": "se.cygni.paintbot.api.request.HeartBeatRequest"
    }


def test_encode_register_move() -> None:
    """Moves carry the game id, tick and direction."""
    payload = json.loads(encode_message(register_move_message(Action.LEFT, "g", 7)))
    assert payload == {
        "type": "se.cygni.paintbot.api.request.RegisterMove",
        "gameId": "g",
        "gameTick": 7,
        "direction": "LEFT",
    }


def test_encode_register_player_omits_unset_settings() -> None:
    """Only explicitly overridden settings are sent."""
    bare = json.loads(encode_message(register_player_message("alpha")))
    assert bare == {"type": "se.cygni.paintbot.api.request.RegisterPlayer", "playerName": "alpha"}
    message = register_player_message("alpha", {"max_noof_players": 2, "timeInMsPerTick": 250})
    payload = json.loads(encode_message(message))
    assert payload["gameSettings"] == {"maxNoofPlayers": 2, "timeInMsPerTick": 250}


def test_client_info_defaults_and_overrides() -> None:
    """Client info reports Python unless overridden."""
    payload = json.loads(encode_message(client_info_message()))
    assert payload["type"] == "se.cygni.paintbot.api.request.ClientInfo"
    assert payload["language"] == "Python"
    assert "languageVersion" in payload
    overridden = json.loads(encode_message(client_info_message({"client_version": "9.9"})))
    assert overridden["clientVersion"] == "9.9"


def test_decode_map_update() -> None:
    """Map updates decode into typed snapshots."""
    message = decode_message(json.dumps(_map_update_payload()))
    assert isinstance(message, MapUpdateEvent)
    assert message.type is MessageType.MAP_UPDATE
    assert message.game_tick == 12
    character = message.map.character_infos[0]
    assert character.coloured_positions == (4, 5)
    assert character.carrying_power_up is True
    assert message.map.collision_infos[0].colliders == ("p1",)
    assert message.map.explosion_infos[0].position == 3


def test_decode_accepts_bytes() -> None:
    """Binary frames holding UTF-8 JSON decode like text."""
    text = json.dumps({"type": "se.cygni.paintbot.api.response.HeartBeatResponse"})
    assert decode_message(text.encode("utf-8")).type is MessageType.HEART_BEAT_RESPONSE


def test_decode_game_starting_settings() -> None:
    """Game settings arrive as a typed record."""
    message = decode_message(
        json.dumps(
            {
                "type": "se.cygni.paintbot.api.event.GameStartingEvent",
                "gameId": "g",
                "noofPlayers": 2,
                "width": 46,
                "height": 34,
                "gameSettings": {"maxNoofPlayers": 5, "explosionRange": 4, "trainingGame": True},
            }
        )
    )
    assert isinstance(message, GameStartingEvent)
    assert message.game_settings == GameSettings(
        max_noof_players=5, explosion_range=4, training_game=True
    )


def test_decode_game_result() -> None:
    """Game results list ranked players."""
    message = decode_message(
        json.dumps(
            {
                "type": "se.cygni.paintbot.api.event.GameResultEvent",
                "gameId": "g",
                "gameResult": [
                    {"playerName": "a", "playerId": "1", "rank": 1, "points": 9, "alive": True},
                    {"playerName": "b", "playerId": "2", "rank": 2, "points": 4, "alive": False},
                ],
            }
        )
    )
    assert isinstance(message, GameResultEvent)
    assert [rank.player_name for rank in message.game_result] == ["a", "b"]


def test_decode_invalid_player_name() -> None:
    """Name rejections carry one of the known reasons."""
    message = decode_message(
        json.dumps(
            {"type": "se.cygni.paintbot.api.exception.InvalidPlayerName", "reasonCode": "Taken"}
        )
    )
    assert isinstance(message, InvalidPlayerName)
    assert message.reason_code is InvalidPlayerNameReason.TAKEN


def test_decode_unknown_type() -> None:
    """Unknown discriminators are reported distinctly."""
    with pytest.raises(UnknownMessageType) as info:
        decode_message(json.dumps({"type": "se.cygni.paintbot.api.event.Future"}))
    assert info.value.message_type == "se.cygni.paintbot.api.event.Future"


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[1, 2]",
        "{}",
        json.dumps({"type": 5}),
        json.dumps({"type": "se.cygni.paintbot.api.event.GameLinkEvent", "gameId": "g"}),
    ],
)
def test_decode_malformed(text: str) -> None:
    """Malformed records raise ProtocolError."""
    with pytest.raises(ProtocolError):
        decode_message(text)


def test_decode_rejects_positions_outside_map() -> None:
    """Snapshots referencing cells outside the grid are malformed."""
    payload = _map_update_payload()
    payload["map"]["obstaclePositions"] = [8]  # type: ignore[index]
    with pytest.raises(ProtocolError):
        decode_message(json.dumps(payload))
    payload = _map_update_payload()
    payload["map"]["characterInfos"][0]["colouredPositions"] = [-1]  # type: ignore[index]
    with pytest.raises(ProtocolError):
        decode_message(json.dumps(payload))


def test_messages_are_immutable() -> None:
    """Decoded messages cannot be mutated."""
    message = decode_message(json.dumps(_map_update_payload()))
    with pytest.raises(ValueError):
        message.game_tick = 13  # type: ignore[misc]
