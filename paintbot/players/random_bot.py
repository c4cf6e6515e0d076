"""Random baseline player implementation."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from paintbot.app.legal_actions import allowed_actions
from paintbot.app.spatial_map import SpatialMap
from paintbot.domain.actions import Action
from paintbot.protocol.messages import GameStartingEvent


@dataclass
class RandomBot:
    """Random bot that selects uniformly from allowed actions."""

    name: str = "random"
    seed: int | None = None
    kind: str = "random"
    _rng: random.Random = field(init=False)

    def __post_init__(self) -> None:
        """Initialize the RNG."""
        self._rng = random.Random(self.seed)

    def on_game_start(self, event: GameStartingEvent) -> None:
        """Reseed at the start of each game when a seed is configured."""
        if self.seed is not None:
            self._rng = random.Random(self.seed)

    def get_next_action(self, spatial_map: SpatialMap) -> Action:
        """Select a random allowed action, preferring movement over staying."""
        actions = allowed_actions(spatial_map)
        moves = [action for action in actions if action != Action.STAY]
        if not moves:
            return Action.STAY
        return self._rng.choice(moves)
