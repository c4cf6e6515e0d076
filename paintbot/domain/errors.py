"""Error types raised across the paintbot client."""

from __future__ import annotations


class PaintbotError(Exception):
    """Base class for paintbot client errors."""


class InvalidArgument(PaintbotError, TypeError):
    """Raised when a geometry or map operation receives an argument of the wrong type."""


class InvalidAction(PaintbotError, TypeError):
    """Raised when a value is not one of the known character actions."""


class OutOfBounds(PaintbotError, ValueError):
    """Raised when a coordinate outside the grid is converted to a position."""


class CharacterNotFound(PaintbotError, LookupError):
    """Raised when a character id is absent from the current snapshot."""


class ProtocolError(PaintbotError, ValueError):
    """Raised when a wire message cannot be decoded."""


class UnknownMessageType(ProtocolError):
    """Raised when a wire message carries an unrecognised discriminator."""

    def __init__(self, message_type: str) -> None:
        super().__init__(f"Unknown message type: {message_type}")
        self.message_type = message_type


class PlayerRejected(PaintbotError):
    """Raised when the server refuses the player's name."""

    def __init__(self, player_name: str, reason: str) -> None:
        super().__init__(f'Player name "{player_name}" is invalid: {reason}')
        self.player_name = player_name
        self.reason = reason


class ConnectionLost(PaintbotError, ConnectionError):
    """Raised when the transport closes uncleanly."""

    def __init__(self, code: int | None, reason: str) -> None:
        super().__init__(f"Connection closed with code {code}: {reason!r}")
        self.code = code
        self.reason = reason
