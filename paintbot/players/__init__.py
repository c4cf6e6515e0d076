"""Player interfaces and registry utilities."""

from paintbot.players.base import Player
from paintbot.players.registry import PlayerFactory, PlayerRegistry, build_default_registry

__all__ = ["Player", "PlayerFactory", "PlayerRegistry", "build_default_registry"]
