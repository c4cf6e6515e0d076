"""Connection state machine between a player and the game server.

The client is transport-agnostic: whoever owns the socket feeds it events
through ``handle_open``, ``handle_message``, ``handle_error`` and
``handle_close``, and the client writes back through ``Transport.send``.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Protocol

from websockets.exceptions import ConnectionClosed

from paintbot.app.spatial_map import SpatialMap
from paintbot.domain.actions import parse_action
from paintbot.domain.errors import (
    ConnectionLost,
    PlayerRejected,
    ProtocolError,
    UnknownMessageType,
)
from paintbot.players.base import Player
from paintbot.protocol.codec import decode_message, encode_message
from paintbot.protocol.messages import (
    GameAbortedEvent,
    GameEndedEvent,
    GameLinkEvent,
    GameResultEvent,
    GameStartingEvent,
    HeartBeatRequest,
    InvalidMessage,
    InvalidPlayerName,
    InvalidPlayerNameReason,
    MapUpdateEvent,
    Message,
    MessageType,
    NoActiveTournament,
    PlayerRegistered,
    StartGame,
    TournamentEndedEvent,
    client_info_message,
    register_move_message,
    register_player_message,
)
from paintbot.protocol.models import GameSettings

logger = logging.getLogger(__name__)

HEARTBEAT_INTERVAL_SECONDS = 10.0

# Called with the client once the player is registered and auto_start is off.
GameReadyCallback = Callable[["ConnectionClient"], Any]


class Transport(Protocol):
    """Outbound half of a message transport."""

    async def send(self, text: str) -> None:
        """Send one text frame."""

    async def close(self) -> None:
        """Close the connection."""


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class CloseInfo:
    code: int | None
    reason: str
    was_clean: bool


class ConnectionClient:
    """Drive handshake, heartbeat and move submission for one player."""

    def __init__(
        self,
        player: Player,
        transport: Transport,
        game_settings: GameSettings | Mapping[str, Any] | None = None,
        client_info: Mapping[str, Any] | None = None,
        auto_start: bool = True,
        heartbeat_interval: float = HEARTBEAT_INTERVAL_SECONDS,
        verbose: bool = False,
        on_game_ready: GameReadyCallback | None = None,
    ) -> None:
        if heartbeat_interval < 0:
            raise ValueError("heartbeat_interval cannot be negative")
        self._player = player
        self._transport = transport
        self._game_settings = game_settings
        self._client_info = dict(client_info or {})
        self._auto_start = auto_start
        self._on_game_ready = on_game_ready
        self._heartbeat_interval = heartbeat_interval
        self._verbose = verbose
        self._state = ConnectionState.CONNECTING
        self._heartbeat_task: asyncio.Task[None] | None = None
        self._decision_task: asyncio.Task[None] | None = None
        self._game_ready_task: asyncio.Task[None] | None = None
        self._decisions: asyncio.Queue[MapUpdateEvent] | None = None
        self._rejection: InvalidPlayerNameReason | None = None
        self._close_info: CloseInfo | None = None
        self._handlers: dict[MessageType, Callable[[Any], Awaitable[None]]] = {
            MessageType.HEART_BEAT_RESPONSE: self._on_heart_beat_response,
            MessageType.INVALID_PLAYER_NAME: self._on_invalid_player_name,
            MessageType.PLAYER_REGISTERED: self._on_player_registered,
            MessageType.GAME_STARTING: self._on_game_starting,
            MessageType.GAME_LINK: self._on_game_link,
            MessageType.MAP_UPDATE: self._on_map_update,
            MessageType.GAME_RESULT: self._on_game_result,
            MessageType.GAME_ENDED: self._on_game_ended,
            MessageType.GAME_ABORTED: self._on_game_aborted,
            MessageType.TOURNAMENT_ENDED: self._on_tournament_ended,
            MessageType.INVALID_MESSAGE: self._on_invalid_message,
            MessageType.NO_ACTIVE_TOURNAMENT: self._on_no_active_tournament,
        }

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def player(self) -> Player:
        return self._player

    @property
    def rejection(self) -> InvalidPlayerNameReason | None:
        """Reason the server gave for refusing the player name, if it did."""
        return self._rejection

    @property
    def close_info(self) -> CloseInfo | None:
        return self._close_info

    # ------------------------------------------------------------------
    # Transport events
    # ------------------------------------------------------------------

    async def handle_open(self) -> None:
        """Send the handshake: client info, player registration, heartbeat."""
        if self._state is not ConnectionState.CONNECTING:
            return
        self._state = ConnectionState.OPEN
        logger.info("WebSocket is connected")
        await self._send(client_info_message(self._client_info))
        await self._send(register_player_message(self._player.name, self._game_settings))
        await self._send(HeartBeatRequest())

    async def handle_message(self, text: str | bytes) -> None:
        """Decode one inbound frame and dispatch it by message type."""
        if self._state is ConnectionState.CLOSED:
            return
        try:
            message = decode_message(text)
        except UnknownMessageType as exc:
            logger.debug("Ignoring message of unknown type %s", exc.message_type)
            return
        except ProtocolError as exc:
            logger.warning("Dropping malformed message: %s", exc)
            return
        logger.log(
            logging.INFO if self._verbose else logging.DEBUG,
            "Message received: %s",
            message,
        )
        await self._call_hook("on_message", message)
        handler = self._handlers.get(message.type)
        if handler is not None:
            await handler(message)

    def handle_error(self, error: BaseException | None = None) -> None:
        """Record a transport error; the connection is finished."""
        logger.info("WebSocket is closing: %s", error)
        self._shutdown()

    def handle_close(self, code: int | None, reason: str = "", was_clean: bool = True) -> None:
        """Release the heartbeat and decision tasks. Safe to call repeatedly."""
        if self._close_info is None:
            self._close_info = CloseInfo(code=code, reason=reason, was_clean=was_clean)
            if was_clean:
                logger.info('WebSocket closed with code: %s and reason: "%s"', code, reason)
            else:
                logger.error('WebSocket closed with code: %s and reason: "%s"', code, reason)
        self._shutdown()

    # ------------------------------------------------------------------
    # Client operations
    # ------------------------------------------------------------------

    async def start_game(self) -> None:
        """Ask the server to start a training game."""
        await self._send(StartGame())

    async def disconnect(self) -> None:
        """Close the transport and release background tasks."""
        if self._state is ConnectionState.CLOSED:
            return
        pending = self._shutdown()
        await self._transport.close()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def drain(self) -> None:
        """Wait until every queued map update has been answered."""
        if self._decisions is not None and self._decision_task is not None:
            await self._decisions.join()

    def raise_for_outcome(self) -> None:
        """Raise if the server rejected the player or the connection dropped."""
        if self._rejection is not None:
            raise PlayerRejected(self._player.name, self._rejection.value)
        if self._close_info is not None and not self._close_info.was_clean:
            raise ConnectionLost(self._close_info.code, self._close_info.reason)

    # ------------------------------------------------------------------
    # Message handlers
    # ------------------------------------------------------------------

    async def _on_heart_beat_response(self, message: Message) -> None:
        if self._heartbeat_task is not None:
            self._heartbeat_task.cancel()
        self._heartbeat_task = asyncio.create_task(self._send_heartbeat_later())

    async def _on_invalid_player_name(self, message: InvalidPlayerName) -> None:
        logger.error(
            'Player name "%s" is invalid: %s', self._player.name, message.reason_code.value
        )
        self._rejection = message.reason_code
        await self.disconnect()

    async def _on_player_registered(self, message: PlayerRegistered) -> None:
        logger.info('Player name "%s" was successfully registered', self._player.name)
        if self._auto_start:
            # Ignored by the server outside training mode.
            await self.start_game()
        elif self._on_game_ready is not None:
            # Runs beside the dispatch loop so heartbeats keep flowing while it waits.
            self._game_ready_task = asyncio.create_task(self._run_game_ready())

    async def _on_game_starting(self, message: GameStartingEvent) -> None:
        logger.info(
            "Game %s is starting with %s players on a %sx%s map",
            message.game_id,
            message.noof_players,
            message.width,
            message.height,
        )
        await self._call_hook("on_game_start", message)

    async def _on_game_link(self, message: GameLinkEvent) -> None:
        logger.info("Watch game: %s", message.url)

    async def _on_map_update(self, message: MapUpdateEvent) -> None:
        if self._decisions is None:
            self._decisions = asyncio.Queue()
        if self._decision_task is None:
            self._decision_task = asyncio.create_task(self._run_decisions(self._decisions))
        self._decisions.put_nowait(message)

    async def _on_game_result(self, message: GameResultEvent) -> None:
        lines = ["Game results are in:"]
        for rank in message.game_result:
            status = "" if rank.alive else " (dead)"
            lines.append(f"  {rank.rank}: {rank.player_name} ({rank.points} points){status}")
        logger.info("\n".join(lines))
        await self._call_hook("on_game_end", message)

    async def _on_game_ended(self, message: GameEndedEvent) -> None:
        logger.info("Game %s ended at tick %s", message.game_id, message.game_tick)

    async def _on_game_aborted(self, message: GameAbortedEvent) -> None:
        logger.warning("Game %s was aborted", message.game_id)

    async def _on_tournament_ended(self, message: TournamentEndedEvent) -> None:
        logger.info("Tournament %s ended", message.tournament_name)

    async def _on_invalid_message(self, message: InvalidMessage) -> None:
        logger.warning(
            "Server rejected message %s: %s", message.received_message, message.error_message
        )

    async def _on_no_active_tournament(self, message: NoActiveTournament) -> None:
        logger.error("No active tournament")

    # ------------------------------------------------------------------
    # Background tasks
    # ------------------------------------------------------------------

    async def _send_heartbeat_later(self) -> None:
        await asyncio.sleep(self._heartbeat_interval)
        self._heartbeat_task = None
        try:
            await self._send(HeartBeatRequest())
        except (ConnectionClosed, OSError):
            logger.warning("Failed to send heartbeat", exc_info=True)

    async def _run_game_ready(self) -> None:
        try:
            result = self._on_game_ready(self)
            if inspect.isawaitable(result):
                await result
        except Exception:  # noqa: BLE001
            logger.exception("Game ready callback failed")

    async def _run_decisions(self, queue: asyncio.Queue[MapUpdateEvent]) -> None:
        # One decision at a time, in arrival order.
        while True:
            event = await queue.get()
            try:
                await self._decide(event)
            except Exception:  # noqa: BLE001
                logger.exception(
                    "No move sent for game %s tick %s", event.game_id, event.game_tick
                )
            finally:
                queue.task_done()

    async def _decide(self, event: MapUpdateEvent) -> None:
        spatial_map = SpatialMap.from_event(event)
        result = self._player.get_next_action(spatial_map)
        if inspect.isawaitable(result):
            result = await result
        action = parse_action(result)
        await self._send(register_move_message(action, event.game_id, event.game_tick))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _send(self, message: Message) -> None:
        if self._state is ConnectionState.CLOSED:
            logger.debug("Not sending %s on a closed connection", message.type.value)
            return
        await self._transport.send(encode_message(message))

    async def _call_hook(self, name: str, message: Message) -> None:
        hook = getattr(self._player, name, None)
        if not callable(hook):
            return
        try:
            result = hook(message)
            if inspect.isawaitable(result):
                await result
        except Exception:  # noqa: BLE001
            logger.exception("Player hook %s failed", name)

    def _shutdown(self) -> list[asyncio.Task[None]]:
        """Mark the connection closed and cancel background tasks.

        Returns the cancelled tasks so callers inside a coroutine can await
        them. The calling task itself is never cancelled.
        """
        self._state = ConnectionState.CLOSED
        tasks = [
            task
            for task in (self._heartbeat_task, self._decision_task, self._game_ready_task)
            if task is not None
        ]
        self._heartbeat_task = None
        self._decision_task = None
        self._game_ready_task = None
        if not tasks:
            return []
        current = asyncio.current_task()
        cancelled = []
        for task in tasks:
            if task is current:
                continue
            task.cancel()
            cancelled.append(task)
        return cancelled
