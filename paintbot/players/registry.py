"""Build players from ``{type, name, params}`` specs."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from paintbot.players.base import Player

PlayerFactory = Callable[[Mapping[str, Any]], Player]


class PlayerRegistry:
    """Player factories keyed by the ``type`` a spec names."""

    def __init__(self) -> None:
        self._factories: dict[str, PlayerFactory] = {}

    def register(self, player_type: str, factory: PlayerFactory) -> None:
        if not player_type:
            raise ValueError("Player type is required")
        if player_type in self._factories:
            raise ValueError(f"Player type already registered: {player_type}")
        self._factories[player_type] = factory

    def create(self, spec: Mapping[str, Any]) -> Player:
        """Build the player a spec describes.

        Raises ValueError for a spec without a type and KeyError, listing the
        known types, for a type nobody registered.
        """
        player_type = spec.get("type")
        if not isinstance(player_type, str) or not player_type:
            raise ValueError("Player spec must include a non-empty 'type'")
        factory = self._factories.get(player_type)
        if factory is None:
            known = ", ".join(sorted(self._factories)) or "none"
            raise KeyError(f"Unknown player type {player_type!r} (known: {known})")
        return factory(spec)


def build_default_registry() -> PlayerRegistry:
    """Registry holding the ``random`` and ``heuristic`` bots."""
    from paintbot.players.heuristic_bot import HeuristicBot
    from paintbot.players.random_bot import RandomBot

    registry = PlayerRegistry()
    registry.register("random", bot_factory(RandomBot, "random"))
    registry.register("heuristic", bot_factory(HeuristicBot, "heuristic", ("explosion_range",)))
    return registry


def bot_factory(
    bot_cls: Callable[..., Player],
    default_name: str,
    int_params: tuple[str, ...] = (),
) -> PlayerFactory:
    """Factory passing name, seed and the listed integer params to ``bot_cls``."""

    def factory(spec: Mapping[str, Any]) -> Player:
        params = spec.get("params") or {}
        if not isinstance(params, Mapping):
            raise ValueError("Player params must be a mapping")
        name = spec.get("name")
        seed = params.get("seed")
        kwargs: dict[str, Any] = {
            "name": name if isinstance(name, str) and name else default_name,
            # bool is an int subclass; a stray True is not a seed.
            "seed": seed if isinstance(seed, int) and not isinstance(seed, bool) else None,
        }
        for key in int_params:
            if key in params:
                kwargs[key] = int(params[key])
        return bot_cls(**kwargs)

    return factory
