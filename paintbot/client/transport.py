"""WebSocket transport that feeds socket events into a ConnectionClient."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

import websockets
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, WebSocketException

from paintbot.client.connection import (
    HEARTBEAT_INTERVAL_SECONDS,
    ConnectionClient,
    GameReadyCallback,
)
from paintbot.domain.errors import ConnectionLost
from paintbot.players.base import Player
from paintbot.protocol.models import GameSettings

logger = logging.getLogger(__name__)

DEFAULT_HOST = "wss://server.paintbot.cygni.se"
DEFAULT_VENUE = "training"


def build_server_url(host: str = DEFAULT_HOST, venue: str | None = DEFAULT_VENUE) -> str:
    """Join a server host and venue into a WebSocket URL."""
    if not host:
        raise ValueError("host is required")
    base = host.rstrip("/")
    if "://" not in base:
        base = f"wss://{base}"
    if not venue:
        return base
    return f"{base}/{venue.strip('/')}"


class WebSocketTransport:
    """Adapt a websockets connection to the client's Transport protocol."""

    def __init__(self, websocket: Any) -> None:
        self._websocket = websocket

    async def send(self, text: str) -> None:
        await self._websocket.send(text)

    async def close(self) -> None:
        await self._websocket.close()


async def pump_events(client: ConnectionClient, websocket: Any) -> None:
    """Deliver open, message, error and close events from a socket, in order."""
    was_clean = True
    try:
        await client.handle_open()
        async for frame in websocket:
            await client.handle_message(frame)
    except ConnectionClosed as exc:
        # A send can hit a socket the peer already closed normally.
        if not isinstance(exc, ConnectionClosedOK):
            was_clean = False
            client.handle_error(exc)
    finally:
        client.handle_close(
            getattr(websocket, "close_code", None),
            getattr(websocket, "close_reason", None) or "",
            was_clean=was_clean,
        )


async def run_client(
    player: Player,
    url: str | None = None,
    game_settings: GameSettings | Mapping[str, Any] | None = None,
    client_info: Mapping[str, Any] | None = None,
    auto_start: bool = True,
    heartbeat_interval: float = HEARTBEAT_INTERVAL_SECONDS,
    verbose: bool = False,
    on_game_ready: GameReadyCallback | None = None,
) -> ConnectionClient:
    """Connect a player to the server and run until the connection closes.

    Raises PlayerRejected if the server refused the player name and
    ConnectionLost if the socket could not be opened or closed uncleanly.
    """
    target = url or build_server_url()
    logger.info("Connecting to %s as %s", target, player.name)
    try:
        websocket = await websockets.connect(target)
    except (OSError, asyncio.TimeoutError, WebSocketException) as exc:
        raise ConnectionLost(None, str(exc)) from exc
    client = ConnectionClient(
        player,
        WebSocketTransport(websocket),
        game_settings=game_settings,
        client_info=client_info,
        auto_start=auto_start,
        heartbeat_interval=heartbeat_interval,
        verbose=verbose,
        on_game_ready=on_game_ready,
    )
    try:
        await pump_events(client, websocket)
    finally:
        await websocket.close()
    client.raise_for_outcome()
    return client
