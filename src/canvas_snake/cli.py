"""Command-line entry point: serve the game or replay moves headlessly."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from canvas_snake.engine import GameEngine

logger = logging.getLogger(__name__)

_MOVE_CODES = {"U": "up", "D": "down", "L": "left", "R": "right"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="canvas-snake",
        description="Browser snake game server and headless simulator.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Serve the game over HTTP.")
    serve_p.add_argument("--host", type=str, default=None)
    serve_p.add_argument(
        "--port", type=int, default=None,
        help="Port to listen on (default: $PORT or 3000).",
    )
    serve_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON game config file.",
    )
    serve_p.add_argument("--static-dir", type=str, default=None)
    serve_p.add_argument("--max-sessions", type=int, default=None)

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play a move sequence without rendering.",
    )
    sim_p.add_argument(
        "moves",
        help="Moves, one per tick: U/D/L/R to turn, '.' to keep going.",
    )
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--grid-cells", type=int, default=None)
    sim_p.add_argument("--config", type=str, default=None)

    return parser


def _load_game_config(path: str | None):
    from canvas_snake.config import GameConfig

    return GameConfig.load(path) if path else GameConfig()


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from canvas_snake.config import ServerConfig
    from canvas_snake.server.app import create_app

    config = ServerConfig.from_env(game=_load_game_config(args.config))
    overrides: dict = {}
    flag_map = {
        "host": "host",
        "port": "port",
        "static_dir": "static_dir",
        "max_sessions": "max_sessions",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val
    if overrides:
        from dataclasses import replace

        config = replace(config, **overrides)

    logger.info("Server listening on http://%s:%d", config.host, config.port)
    uvicorn.run(create_app(config), host=config.host, port=config.port)
    return 0


def play_moves(engine: GameEngine, moves: str) -> None:
    """Apply one move code per tick until the moves run out or the game ends.

    Each tick is stamped with a clock advanced by the current speed
    interval, so deferred food respawns come due as they would live.
    """
    from canvas_snake.controls import parse_direction

    now_ms = engine.state.last_tick_ms
    for code in moves.upper():
        if code in _MOVE_CODES:
            engine.set_direction(parse_direction(_MOVE_CODES[code]))
        elif code != ".":
            raise ValueError(f"Unknown move code {code!r}.")
        now_ms += engine.current_interval()
        engine.step(now_ms=now_ms)
        if engine.game_over:
            break


def _run_simulate(args: argparse.Namespace) -> int:
    from canvas_snake.engine import GameEngine

    config = _load_game_config(args.config).with_overrides(seed=args.seed)
    if args.grid_cells is not None:
        config = config.with_overrides(
            grid_cells=args.grid_cells,
            start_cell=(args.grid_cells // 2, args.grid_cells // 2),
        )

    engine = GameEngine(config)
    try:
        play_moves(engine, args.moves)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    print(json.dumps(engine.get_state(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``canvas-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "serve": _run_serve,
        "simulate": _run_simulate,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
