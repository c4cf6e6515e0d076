"""Player protocol definitions for runtime use."""

from __future__ import annotations

from typing import TYPE_CHECKING, Awaitable, Protocol, Union

from paintbot.domain.actions import Action

if TYPE_CHECKING:
    from paintbot.app.spatial_map import SpatialMap

ActionResult = Union[Action, Awaitable[Action]]


class Player(Protocol):
    """Decision function driven by the connection client.

    Implementations may also define any of the optional hooks
    ``on_game_start(event)``, ``on_game_end(event)`` and ``on_message(message)``;
    the client calls them only when present.
    """

    name: str

    def get_next_action(self, spatial_map: "SpatialMap") -> ActionResult:
        """Return the action for this tick, or an awaitable resolving to it."""
