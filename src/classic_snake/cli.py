"""Command-line tools: headless simulation and leaderboard listing."""

from __future__ import annotations

import argparse
import logging
import sys

from classic_snake.config import GameConfig
from classic_snake.controls import apply_key
from classic_snake.engine import create_initial_state, step
from classic_snake.food import seeded_random_source
from classic_snake.render import render_board
from classic_snake.scores import ScoreHistory

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="classic-snake",
        description="Classic Snake simulation and score tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play a headless game from a key script.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sim_p.add_argument("--grid-size", type=int, default=None)
    sim_p.add_argument("--steps", type=int, default=50)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument(
        "--moves", type=str, default="",
        help="Keys applied one per tick, e.g. 'wwddss'. '.' means no input.",
    )
    sim_p.add_argument(
        "--record", action="store_true",
        help="Append the final score to the score history.",
    )
    sim_p.add_argument(
        "--quiet", action="store_true",
        help="Print only the final board.",
    )

    # --- scores ---
    scores_p = sub.add_parser("scores", help="Show the score leaderboard.")
    scores_p.add_argument("--config", type=str, default=None)
    scores_p.add_argument("--scores-path", type=str, default=None)

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    return GameConfig.load(args.config) if args.config else GameConfig()


def _history(config: GameConfig, path: str | None = None) -> ScoreHistory:
    return ScoreHistory(
        path or config.scores_path,
        key=config.leaderboard_key,
        limit=config.leaderboard_limit,
    )


def _run_simulate(args: argparse.Namespace) -> int:
    config = _load_config(args)
    grid_size = args.grid_size if args.grid_size is not None else config.grid_size
    rng = seeded_random_source(args.seed)

    state = create_initial_state(grid_size, rng)
    for tick in range(args.steps):
        if tick < len(args.moves):
            state = apply_key(state, args.moves[tick], rng)
        state = step(state, rng)
        if not args.quiet:
            print(render_board(state), end="\n\n")  # noqa: T201
        if state.game_over:
            break

    if args.quiet:
        print(render_board(state))  # noqa: T201

    if args.record and state.game_over:
        _history(config).record(state.score)
    return 0


def _run_scores(args: argparse.Namespace) -> int:
    config = _load_config(args)
    rows = _history(config, args.scores_path).leaderboard()
    if not rows:
        print("No scores yet.")  # noqa: T201
        return 0
    for row in rows:
        crown = " (leader)" if row["leader"] else ""
        print(  # noqa: T201
            f"{row['rank']:>2}. [{row['initials']}] {row['player_name']}"
            f"{crown}  Score {row['score']}"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``classic-snake`` CLI."""
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
        "simulate": _run_simulate,
        "scores": _run_scores,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
