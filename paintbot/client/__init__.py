"""Server connection: state machine and WebSocket transport."""

from paintbot.client.connection import (
    HEARTBEAT_INTERVAL_SECONDS,
    CloseInfo,
    ConnectionClient,
    ConnectionState,
    GameReadyCallback,
    Transport,
)
from paintbot.client.transport import (
    DEFAULT_HOST,
    DEFAULT_VENUE,
    WebSocketTransport,
    build_server_url,
    pump_events,
    run_client,
)

__all__ = [
    "HEARTBEAT_INTERVAL_SECONDS",
    "CloseInfo",
    "ConnectionClient",
    "ConnectionState",
    "GameReadyCallback",
    "Transport",
    "DEFAULT_HOST",
    "DEFAULT_VENUE",
    "WebSocketTransport",
    "build_server_url",
    "pump_events",
    "run_client",
]
