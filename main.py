"""Main entry point for the Texas Hold'em trainer.

This module provides command-line options to run the trainer:
- Web mode (default): FastAPI backend for the trainer UI
- Headless mode: AI-only session that logs a summary, for testing
"""

import argparse
import json
import logging
import sys

from backend.logging_config import configure_logging

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 60


def run_web_server(host: str, port: int):
    """Run the web server for the trainer UI."""
    try:
        import uvicorn

        from backend.main import app

        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("TEXAS HOLD'EM TRAINER - WEB SERVER")
        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("API docs available at http://localhost:%d/docs", port)
        logger.info("Press Ctrl+C to stop the server")
        logger.info("=" * SEPARATOR_WIDTH)

        uvicorn.run(app, host=host, port=port)
    except ImportError as e:
        logger.error("Error: Required dependencies not installed: %s", e)
        logger.error("Install with: pip install -e .")
        sys.exit(1)


def run_headless(hands: int, players: int, seed=None, tournament: bool = False, export_stats=None):
    """Play ``hands`` hands between AI players only and log a summary.

    Args:
        hands: Maximum number of hands to play
        players: Number of AI players at the table
        seed: Optional random seed for a reproducible session
        tournament: Use the tournament blind schedule
        export_stats: Optional filename to write the session summary to as JSON
    """
    from holdem.config.game_settings import GameSettings
    from holdem.trainer_game import TrainerGame

    settings = GameSettings.tournament(has_human=False) if tournament else GameSettings(has_human=False)
    # At most ``hands`` hands are played, so keep every history for the export
    game = TrainerGame("headless", players, settings=settings, seed=seed, max_history=None)

    for _ in range(hands):
        game.run_ai_until_human()
        if game.session_over:
            break
        if game.session.hands_played >= hands:
            break
        game.start_new_hand()

    state = game.state
    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("Played %d hands (seed=%s)", game.session.hands_played, seed)
    biggest = game.session.biggest_pot
    logger.info("Biggest pot: %d", biggest)
    for player in sorted(state.players, key=lambda p: p.chips, reverse=True):
        wins = sum(1 for hand in game.histories if player.player_id in hand.winners)
        logger.info(
            "  %-10s %-18s %6d chips  %3d hands won",
            player.name,
            player.personality.name if player.personality else "-",
            player.chips,
            wins,
        )
    if state.game_over:
        logger.info(state.message)
    logger.info("=" * SEPARATOR_WIDTH)

    if export_stats:
        summary = {
            "seed": seed,
            "hands": [hand.to_dict() for hand in game.histories],
            "players": [p.to_dict() for p in state.players],
        }
        with open(export_stats, "w", encoding="utf-8") as f:
            json.dump(summary, f, indent=2)
        logger.info("Session exported to %s", export_stats)
    return game


def main():
    """Parse command-line arguments and run the appropriate mode."""
    from holdem.config.server import DEFAULT_API_HOST, DEFAULT_API_PORT

    parser = argparse.ArgumentParser(
        description="Texas Hold'em Trainer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run web server (default)
  python main.py

  # Play 200 AI-only hands at a 6-handed table
  python main.py --headless --hands 200 --players 6 --seed 42

  # Tournament blinds, exporting every hand history
  python main.py --headless --tournament --hands 500 --export-stats session.json
        """,
    )
    parser.add_argument("--headless", action="store_true", help="Run an AI-only session")
    parser.add_argument(
        "--hands", type=int, default=100, help="Hands to play in headless mode (default: 100)"
    )
    parser.add_argument(
        "--players", type=int, default=6, help="Players at the headless table (default: 6)"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument(
        "--tournament", action="store_true", help="Use the tournament blind schedule"
    )
    parser.add_argument(
        "--export-stats",
        type=str,
        default=None,
        metavar="FILENAME",
        help="Write the headless session to a JSON file",
    )
    parser.add_argument("--host", default=DEFAULT_API_HOST, help="Server bind address")
    parser.add_argument("--port", type=int, default=DEFAULT_API_PORT, help="Server port")
    parser.add_argument("--log-level", default=None, help="Log level (default: HOLDEM_LOG_LEVEL or INFO)")

    args = parser.parse_args()
    configure_logging(level=args.log_level)

    if args.headless:
        logger.info("Starting headless session: %d hands, %d players", args.hands, args.players)
        run_headless(
            args.hands,
            args.players,
            seed=args.seed,
            tournament=args.tournament,
            export_stats=args.export_stats,
        )
    else:
        run_web_server(args.host, args.port)


if __name__ == "__main__":
    main()
