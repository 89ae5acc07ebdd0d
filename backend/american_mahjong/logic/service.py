"""
GameService: the single-writer driver for one American Mah Jong table.

Owns the live GameState and serializes every transition behind an
asyncio.Lock. Human submissions and AI decisions go through the same
apply_action call, so an AI decision computed for a state that has since
changed is simply re-validated and dropped as a no-op.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from american_mahjong.logic.action_handlers import apply_action
from american_mahjong.logic.actions import StartNewGame
from american_mahjong.logic.ai_player import AIPlayer
from american_mahjong.logic.ai_player_controller import AIPlayerController
from american_mahjong.logic.game import init_game
from american_mahjong.logic.settings import GameSettings, validate_settings
from american_mahjong.logic.state import NUM_PLAYERS, get_player_view
from shared.logging import bind_game_context

if TYPE_CHECKING:
    from american_mahjong.logic.actions import GameAction
    from american_mahjong.logic.state import GameState
    from american_mahjong.logic.types import GameView

logger = structlog.get_logger()

DEFAULT_MAX_AI_STEPS = 1000


def default_ai_controller(settings: GameSettings) -> AIPlayerController:
    """AI players on every seat except the human seat."""
    return AIPlayerController({seat: AIPlayer() for seat in range(NUM_PLAYERS) if seat != settings.human_seat})


class GameService:
    """
    Serialized driver for a single game.

    Every accepted action is appended to the action log; together with the
    seed it reproduces the current state through replay_actions.
    """

    def __init__(
        self,
        settings: GameSettings | None = None,
        ai_controller: AIPlayerController | None = None,
    ) -> None:
        self._settings = settings or GameSettings()
        validate_settings(self._settings)
        self._ai_controller = ai_controller or default_ai_controller(self._settings)
        self._state: GameState | None = None
        self._action_log: list[GameAction] = []
        self._lock = asyncio.Lock()

    @property
    def state(self) -> GameState:
        if self._state is None:
            raise RuntimeError("no game has been started")
        return self._state

    @property
    def action_log(self) -> tuple[GameAction, ...]:
        """Actions accepted since the current game was dealt."""
        return tuple(self._action_log)

    @property
    def ai_controller(self) -> AIPlayerController:
        return self._ai_controller

    def get_player_view(self, seat: int) -> GameView:
        return get_player_view(self.state, seat, ai_seats=self._ai_controller.ai_player_seats)

    async def start_game(self, seed: str | None = None) -> GameState:
        """Deal a new game, discarding any game in progress."""
        async with self._lock:
            self._reset(init_game(self._settings, seed))
            return self._state  # type: ignore[return-value]

    async def handle_action(self, action: GameAction) -> GameState:
        """
        Apply one action to the live game and return the resulting state.

        A StartNewGame action replaces the game and clears the action log.
        Inapplicable actions leave the state and the log untouched.
        """
        async with self._lock:
            return self._apply(action)

    async def run_ai_turns(self, max_steps: int = DEFAULT_MAX_AI_STEPS) -> int:
        """
        Let AI seats act until a human must act, the game ends, or play stalls.

        Returns the number of AI actions applied. Each step takes the lock on
        its own, so a human action may land between two AI steps.
        """
        steps = 0
        while steps < max_steps:
            async with self._lock:
                state = self.state
                action = self._ai_controller.get_action(state)
                if action is None:
                    break
                if self._apply(action) is state:
                    logger.warning("ai action rejected", action=action.type, seat=getattr(action, "seat", None))
                    break
            steps += 1
            # yield so queued submissions are served between AI steps
            await asyncio.sleep(0)
        return steps

    def _reset(self, game_state: GameState) -> None:
        self._state = game_state
        self._action_log = []
        bind_game_context(game_state.seed)
        logger.info("game started", seed_prefix=game_state.seed[:16])

    def _apply(self, action: GameAction) -> GameState:
        if self._state is None:
            if not isinstance(action, StartNewGame):
                raise RuntimeError("no game has been started")
            self._reset(init_game(self._settings, action.seed))
            return self._state  # type: ignore[return-value]

        new_state = apply_action(self._state, action)
        if new_state is self._state:
            return new_state
        if isinstance(action, StartNewGame):
            self._reset(new_state)
            return new_state
        self._state = new_state
        self._action_log.append(action)
        return new_state
