"""Play all-AI American Mah Jong games and report how they ended.

Every seat, the human seat included, is played by the AI. Settings come from
MAHJONG_* environment variables and can be overridden on the command line.

Usage:
    uv run python bin/simulate-game.py
    uv run python bin/simulate-game.py --games 50
    MAHJONG_SEED=<192 hex chars> uv run python bin/simulate-game.py --verify-replay
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections import Counter
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

import structlog

from american_mahjong.logic.action_handlers import replay_actions
from american_mahjong.logic.ai_player import AIPlayer
from american_mahjong.logic.ai_player_controller import AIPlayerController
from american_mahjong.logic.enums import GamePhase
from american_mahjong.logic.queries import all_tile_ids, is_wall_exhausted
from american_mahjong.logic.service import GameService
from american_mahjong.logic.state import NUM_PLAYERS
from american_mahjong.logic.tiles import NUM_TILES
from american_mahjong.server.settings import SimulationSettings
from shared.logging import rotate_log_file, setup_logging

logger = structlog.get_logger()


async def simulate(settings: SimulationSettings, *, verify_replay: bool) -> Counter[str]:
    """Run the configured number of games and count outcomes."""
    controller = AIPlayerController({seat: AIPlayer() for seat in range(NUM_PLAYERS)})
    service = GameService(ai_controller=controller)
    outcomes: Counter[str] = Counter()

    for game_number in range(settings.games):
        seed = settings.seed if game_number == 0 else None
        state = await service.start_game(seed)
        if settings.log_dir is not None:
            rotate_log_file(settings.log_dir, name=f"game-{game_number:04d}-{state.seed[:16]}")

        steps = await service.run_ai_turns(settings.max_steps)
        state = service.state

        if sorted(all_tile_ids(state)) != list(range(NUM_TILES)):
            logger.error("tile set corrupted", game=game_number)
            outcomes["corrupted"] += 1
            continue

        if verify_replay and replay_actions(state.seed, service.action_log) != state:
            logger.error("replay diverged", game=game_number)
            outcomes["replay_diverged"] += 1
            continue

        if state.phase == GamePhase.GAME_OVER:
            outcome = f"mahjong: {state.winning_hand}"
        elif is_wall_exhausted(state):
            outcome = "wall exhausted"
        else:
            outcome = "step limit"
        outcomes[outcome] += 1
        logger.info("game finished", game=game_number, outcome=outcome, steps=steps, winner=state.winner)

    return outcomes


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate all-AI American Mah Jong games")
    parser.add_argument("--games", type=int, help="number of games (overrides MAHJONG_GAMES)")
    parser.add_argument("--max-steps", type=int, help="AI actions per game (overrides MAHJONG_MAX_STEPS)")
    parser.add_argument("--verify-replay", action="store_true", help="replay each game from its action log")
    args = parser.parse_args()

    overrides = {"games": args.games, "max_steps": args.max_steps}
    settings = SimulationSettings(**{k: v for k, v in overrides.items() if v is not None})
    setup_logging(log_dir=settings.log_dir)

    outcomes = asyncio.run(simulate(settings, verify_replay=args.verify_replay))

    print("=" * 60)
    print(f"Games: {settings.games}")
    for outcome, count in outcomes.most_common():
        print(f"  {outcome}: {count}")

    if outcomes["corrupted"] or outcomes["replay_diverged"]:
        sys.exit(1)


if __name__ == "__main__":
    main()
