"""Command line entrypoint for connecting a bot to a server."""

from __future__ import annotations

import argparse
import asyncio
import logging
from dataclasses import replace
from pathlib import Path
from typing import Callable, Sequence

from paintbot.client.connection import ConnectionClient, GameReadyCallback
from paintbot.client.transport import run_client
from paintbot.domain.errors import ConnectionLost, PlayerRejected
from paintbot.ops.config import ClientConfig, PlayerSpec, load_config
from paintbot.players.registry import build_default_registry

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Connect a Paintbot player to a server.")
    parser.add_argument("--config", type=Path, default=None, help="JSON or YAML config file.")
    parser.add_argument("--host", default=None, help="Server to connect to.")
    parser.add_argument("--venue", default=None, help="Which venue to use (e.g. training).")
    parser.add_argument("--player", default=None, help="Registered player type.")
    parser.add_argument("--name", default=None, help="Player name to register.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the player's RNG.")
    parser.add_argument(
        "--no-autostart",
        action="store_true",
        help="Do not ask the server to start a training game after registering.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every received message.")
    return parser


def resolve_config(args: argparse.Namespace) -> ClientConfig:
    """Merge command line overrides over the config file (or defaults)."""
    config = load_config(args.config) if args.config is not None else ClientConfig()
    player = config.player
    if args.player is not None or args.name is not None or args.seed is not None:
        params = dict(player.params)
        if args.seed is not None:
            params["seed"] = args.seed
        player = PlayerSpec(
            type=args.player or player.type,
            name=args.name or player.name,
            params=params,
        )
    return replace(
        config,
        host=args.host or config.host,
        venue=args.venue if args.venue is not None else config.venue,
        player=player,
        auto_start=config.auto_start and not args.no_autostart,
        verbose=config.verbose or args.verbose,
    )


def wants_start(answer: str) -> bool:
    answer = answer.strip().lower()
    return answer == "" or answer.startswith("y")


def start_game_prompt(ask: Callable[[str], str] = input) -> GameReadyCallback:
    """Build a game-ready callback that asks on stdin before starting a game."""

    async def on_game_ready(client: ConnectionClient) -> None:
        try:
            # input() blocks, keep it off the event loop.
            answer = await asyncio.to_thread(ask, "Start game? (y/n) ")
        except EOFError:
            answer = "n"
        if wants_start(answer):
            await client.start_game()
        else:
            logger.info("Not starting a game, disconnecting")
            await client.disconnect()

    return on_game_ready


def execute_config(config: ClientConfig) -> int:
    """Run a player until disconnected and return a process exit status."""
    player = build_default_registry().create(config.player.to_mapping())
    try:
        asyncio.run(
            run_client(
                player,
                config.url,
                game_settings=config.settings(),
                client_info=config.client_info,
                auto_start=config.auto_start,
                heartbeat_interval=config.heartbeat_interval,
                verbose=config.verbose,
                on_game_ready=None if config.auto_start else start_game_prompt(),
            )
        )
    except PlayerRejected as exc:
        logger.error("%s", exc)
        return 1
    except ConnectionLost as exc:
        logger.error("%s", exc)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI entrypoint."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return execute_config(resolve_config(args))
