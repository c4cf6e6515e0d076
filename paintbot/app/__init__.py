"""Application-layer views built from server snapshots."""

from paintbot.app.legal_actions import allowed_actions
from paintbot.app.spatial_map import SpatialMap, build_tile_table

__all__ = ["SpatialMap", "allowed_actions", "build_tile_table"]
