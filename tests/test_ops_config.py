"""Tests for client configuration and CLI helpers."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import pytest

from paintbot.client.transport import build_server_url
from paintbot.ops import cli
from paintbot.ops.config import ClientConfig, PlayerSpec, load_config
from paintbot.protocol.models import GameSettings


def test_build_server_url() -> None:
    """Host and venue are joined into a WebSocket URL."""
    assert build_server_url() == "wss://server.paintbot.cygni.se/training"
    assert build_server_url("ws://localhost:8080/", "/arena/") == "ws://localhost:8080/arena"
    assert build_server_url("localhost:8080", None) == "wss://localhost:8080"
    with pytest.raises(ValueError):
        build_server_url("", "training")


def test_config_defaults() -> None:
    """Default config targets the public training venue with a random bot."""
    config = ClientConfig()
    assert config.url == "wss://server.paintbot.cygni.se/training"
    assert config.player.type == "random"
    assert config.settings() is None
    assert config.heartbeat_interval == 10.0


def test_config_round_trips_through_mapping() -> None:
    """Mappings produced by to_mapping rebuild the same config."""
    config = ClientConfig(
        host="ws://localhost:8080",
        venue="arena",
        player=PlayerSpec(type="heuristic", name="painter", params={"seed": 1}),
        game_settings={"maxNoofPlayers": 2},
        auto_start=False,
    )
    assert ClientConfig.from_mapping(config.to_mapping()) == config
    assert config.settings() == GameSettings(max_noof_players=2)


def test_config_validation() -> None:
    """Invalid fields are rejected."""
    with pytest.raises(ValueError):
        ClientConfig(host="")
    with pytest.raises(ValueError):
        ClientConfig(heartbeat_interval=0)
    with pytest.raises(ValueError):
        ClientConfig(game_settings={"maxNoofPlayers": "many"})
    with pytest.raises(ValueError):
        ClientConfig.from_mapping({"player": "random"})
    with pytest.raises(ValueError):
        PlayerSpec(type="")


def test_player_spec_lifts_top_level_seed() -> None:
    """A seed beside the player type is moved into params."""
    spec = PlayerSpec.from_mapping({"type": "random", "seed": 9})
    assert spec.params == {"seed": 9}


def test_load_config_json_and_yaml(tmp_path: Path) -> None:
    """Configs load from JSON and YAML files."""
    json_path = tmp_path / "client.json"
    json_path.write_text(
        json.dumps({"host": "ws://localhost:8080", "venue": "training", "player": {"type": "heuristic"}}),
        encoding="utf-8",
    )
    assert load_config(json_path).player.type == "heuristic"

    yaml_path = tmp_path / "client.yaml"
    yaml_path.write_text(
        "host: ws://localhost:8080\nvenue: arena\nplayer:\n  type: random\n  name: yammy\n",
        encoding="utf-8",
    )
    config = load_config(yaml_path)
    assert config.url == "ws://localhost:8080/arena"
    assert config.player.name == "yammy"


def test_load_config_errors(tmp_path: Path) -> None:
    """Missing files and unsupported formats are reported."""
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.json")
    toml_path = tmp_path / "client.toml"
    toml_path.write_text("host = 'x'", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(toml_path)
    list_path = tmp_path / "client.json"
    list_path.write_text("[1]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(list_path)


def test_cli_overrides_config_file(tmp_path: Path) -> None:
    """Command line options take precedence over the config file."""
    path = tmp_path / "client.json"
    path.write_text(
        json.dumps({"host": "ws://a", "venue": "training", "player": {"type": "random", "name": "x"}}),
        encoding="utf-8",
    )
    args = cli.build_parser().parse_args(
        [
            "--config",
            str(path),
            "--venue",
            "arena",
            "--player",
            "heuristic",
            "--seed",
            "5",
            "--no-autostart",
        ]
    )
    config = cli.resolve_config(args)
    assert config.url == "ws://a/arena"
    assert config.player == PlayerSpec(type="heuristic", name="x", params={"seed": 5})
    assert config.auto_start is False


def test_cli_defaults_without_config() -> None:
    """Without options the CLI uses the default config."""
    config = cli.resolve_config(cli.build_parser().parse_args([]))
    assert config == ClientConfig()


class RecordingClient:
    """Stands in for ConnectionClient, recording which operation was chosen."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def start_game(self) -> None:
        self.calls.append("start_game")

    async def disconnect(self) -> None:
        self.calls.append("disconnect")


@pytest.mark.parametrize(
    ("answer", "expected"),
    [
        ("y", "start_game"),
        ("", "start_game"),
        (" Yes\n", "start_game"),
        ("n", "disconnect"),
        ("later", "disconnect"),
    ],
)
def test_start_game_prompt_answers(answer: str, expected: str) -> None:
    """An empty or yes answer starts the game, anything else disconnects."""
    prompts: list[str] = []

    def ask(prompt: str) -> str:
        prompts.append(prompt)
        return answer

    client = RecordingClient()
    asyncio.run(cli.start_game_prompt(ask)(client))
    assert prompts == ["Start game? (y/n) "]
    assert client.calls == [expected]


def test_start_game_prompt_disconnects_on_closed_stdin() -> None:
    """End of input counts as declining."""

    def ask(prompt: str) -> str:
        raise EOFError

    client = RecordingClient()
    asyncio.run(cli.start_game_prompt(ask)(client))
    assert client.calls == ["disconnect"]


def test_execute_config_prompts_only_without_autostart(monkeypatch: pytest.MonkeyPatch) -> None:
    """The CLI hands a game-ready prompt to the runner when auto start is off."""
    received: list[dict[str, Any]] = []

    async def fake_run_client(player: Any, url: str, **options: Any) -> None:
        received.append(options)

    monkeypatch.setattr(cli, "run_client", fake_run_client)
    assert cli.execute_config(ClientConfig(auto_start=False)) == 0
    assert cli.execute_config(ClientConfig()) == 0
    assert callable(received[0]["on_game_ready"])
    assert received[0]["auto_start"] is False
    assert received[1]["on_game_ready"] is None
