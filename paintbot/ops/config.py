"""Client configuration models and loading."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from paintbot.client.connection import HEARTBEAT_INTERVAL_SECONDS
from paintbot.client.transport import DEFAULT_HOST, DEFAULT_VENUE, build_server_url
from paintbot.protocol.models import GameSettings


@dataclass(frozen=True)
class PlayerSpec:
    """Specification for creating a single player instance."""

    type: str = "random"
    name: str | None = None
    params: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate player spec fields."""
        if not isinstance(self.type, str) or not self.type:
            raise ValueError("PlayerSpec.type is required")
        if not isinstance(self.params, dict):
            raise ValueError("PlayerSpec.params must be a dict")

    def to_mapping(self) -> dict[str, object]:
        """Serialize the spec into a mapping."""
        payload: dict[str, object] = {"type": self.type}
        if self.name:
            payload["name"] = self.name
        if self.params:
            payload["params"] = dict(self.params)
        return payload

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "PlayerSpec":
        """Create a PlayerSpec from a mapping."""
        type_value = data.get("type", "random")
        if not isinstance(type_value, str) or not type_value:
            raise ValueError("PlayerSpec.type must be a non-empty string")
        name_value = data.get("name")
        name = name_value if isinstance(name_value, str) and name_value else None
        params_value = data.get("params", {}) or {}
        if not isinstance(params_value, Mapping):
            raise ValueError("PlayerSpec.params must be a dict")
        params = dict(params_value)
        if "seed" in data and "seed" not in params:
            params["seed"] = data["seed"]
        return PlayerSpec(type=type_value, name=name, params=params)


@dataclass(frozen=True)
class ClientConfig:
    """Everything needed to connect one player to a server."""

    host: str = DEFAULT_HOST
    venue: str | None = DEFAULT_VENUE
    player: PlayerSpec = field(default_factory=PlayerSpec)
    game_settings: dict[str, object] = field(default_factory=dict)
    client_info: dict[str, object] = field(default_factory=dict)
    auto_start: bool = True
    heartbeat_interval: float = HEARTBEAT_INTERVAL_SECONDS
    verbose: bool = False

    def __post_init__(self) -> None:
        """Validate config fields."""
        if not isinstance(self.host, str) or not self.host:
            raise ValueError("host must be a non-empty string")
        if self.venue is not None and not isinstance(self.venue, str):
            raise ValueError("venue must be a string")
        if not isinstance(self.game_settings, dict):
            raise ValueError("game_settings must be a dict")
        if not isinstance(self.client_info, dict):
            raise ValueError("client_info must be a dict")
        if self.heartbeat_interval <= 0:
            raise ValueError("heartbeat_interval must be positive")
        # Mistyped settings fail here rather than at registration.
        self.settings()

    @property
    def url(self) -> str:
        return build_server_url(self.host, self.venue)

    def settings(self) -> GameSettings | None:
        """Return the settings overrides as a GameSettings record, if any."""
        if not self.game_settings:
            return None
        try:
            return GameSettings.model_validate(self.game_settings)
        except ValueError as exc:
            raise ValueError(f"Invalid game_settings: {exc}") from exc

    def to_mapping(self) -> dict[str, object]:
        """Return a mapping representation of the config."""
        return {
            "host": self.host,
            "venue": self.venue,
            "player": self.player.to_mapping(),
            "game_settings": dict(self.game_settings),
            "client_info": dict(self.client_info),
            "auto_start": self.auto_start,
            "heartbeat_interval": self.heartbeat_interval,
            "verbose": self.verbose,
        }

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "ClientConfig":
        """Create a ClientConfig from a mapping."""
        player_data = data.get("player", {}) or {}
        if not isinstance(player_data, Mapping):
            raise ValueError("player must be a mapping")
        game_settings = data.get("game_settings", {}) or {}
        client_info = data.get("client_info", {}) or {}
        if not isinstance(game_settings, Mapping):
            raise ValueError("game_settings must be a mapping")
        if not isinstance(client_info, Mapping):
            raise ValueError("client_info must be a mapping")
        return ClientConfig(
            host=str(data.get("host", DEFAULT_HOST)),
            venue=data.get("venue", DEFAULT_VENUE),
            player=PlayerSpec.from_mapping(player_data),
            game_settings=dict(game_settings),
            client_info=dict(client_info),
            auto_start=bool(data.get("auto_start", True)),
            heartbeat_interval=float(data.get("heartbeat_interval", HEARTBEAT_INTERVAL_SECONDS)),
            verbose=bool(data.get("verbose", False)),
        )


def load_config(path: Path) -> ClientConfig:
    """Load a client config from JSON or YAML."""
    data = _load_config_data(path)
    if not isinstance(data, Mapping):
        raise ValueError("Config file must contain a mapping")
    return ClientConfig.from_mapping(data)


def _load_config_data(path: Path) -> Mapping[str, Any]:
    """Load config data from disk."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    if path.suffix.lower() in {".json"}:
        return _load_json(path)
    if path.suffix.lower() in {".yaml", ".yml"}:
        return _load_yaml(path)
    raise ValueError("Config file must be .json or .yaml")


def _load_json(path: Path) -> Mapping[str, Any]:
    """Load config data from a JSON file."""
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _load_yaml(path: Path) -> Mapping[str, Any]:
    """Load config data from a YAML file."""
    import yaml

    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if not isinstance(data, Mapping):
        raise ValueError("YAML config must be a mapping")
    return data
