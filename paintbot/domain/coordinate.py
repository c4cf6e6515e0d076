"""Integer grid coordinates and linear position conversion."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .actions import action_delta
from .errors import InvalidArgument, OutOfBounds


def _require_int(name: str, value: object) -> int:
    """Return value if it is an integer, otherwise raise InvalidArgument."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class Coordinate:
    """A 2D point on the grid, with y growing downwards."""

    x: int
    y: int

    @classmethod
    def from_position(cls, position: int, width: int) -> "Coordinate":
        """Convert a row-major linear position into a coordinate.

        No bounds check is performed; callers that need a valid cell must
        check with ``is_out_of_bounds``.
        """
        _require_int("position", position)
        _require_int("width", width)
        if width <= 0:
            raise InvalidArgument("width must be positive")
        x = position % width
        y = (position - x) // width
        return cls(x, y)

    def is_out_of_bounds(self, width: int, height: int) -> bool:
        """Return True if the coordinate lies outside a width x height grid."""
        return self.x < 0 or self.y < 0 or self.x >= width or self.y >= height

    def to_position(self, width: int, height: int) -> int:
        """Convert the coordinate into a row-major linear position."""
        if self.is_out_of_bounds(width, height):
            raise OutOfBounds(
                f"Coordinate ({self.x}, {self.y}) is outside a {width}x{height} map"
            )
        return self.x + self.y * width

    def translated_by_delta(self, dx: int, dy: int) -> "Coordinate":
        """Return a new coordinate shifted by (dx, dy)."""
        return Coordinate(self.x + dx, self.y + dy)

    def translated_by_action(self, action: object) -> "Coordinate":
        """Return the coordinate reached by performing an action."""
        dx, dy = action_delta(action)
        return self.translated_by_delta(dx, dy)

    def manhattan_distance_to(self, other: "Coordinate") -> int:
        return abs(other.x - self.x) + abs(other.y - self.y)

    def euclidian_distance_to(self, other: "Coordinate") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def negated(self) -> "Coordinate":
        return Coordinate(-self.x, -self.y)

    def __neg__(self) -> "Coordinate":
        return self.negated()
