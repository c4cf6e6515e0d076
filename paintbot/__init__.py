"""Client library for connecting bots to a Paintbot game server."""

__version__ = "0.1.0"
