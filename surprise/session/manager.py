"""
Session Manager - Owns the process's single game session.

LIFECYCLE:
1. Manager created from configuration
2. load(): saved blob restored (or a fresh SETUP session if none)
3. Operator directive from configuration applied
4. Every mutation of the session is written back to the store
5. reset(): session cleared and the saved blob deleted

Exactly one session exists per process; there is no concurrent play.
"""

from __future__ import annotations
from typing import Any
import logging

from ..config import SurpriseConfig
from ..engine_core.pacing import PacingTable
from ..engine_core.random_source import create_random_source
from ..persistence.store import JsonFileStore, StateStore
from .game_session import GameSession

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Creates the session and wires it to persistence.

    Usage:
        manager = SessionManager(SurpriseConfig.from_env())
        manager.load()
        manager.session.start_game()
    """

    def __init__(
        self,
        config: SurpriseConfig | None = None,
        store: StateStore | None = None,
        pacing: PacingTable | None = None,
    ):
        self.config = config or SurpriseConfig()
        self.store = store if store is not None else JsonFileStore(self.config.state_path)
        self.session = GameSession(
            rng=create_random_source(self.config.seed),
            pacing=pacing,
            round_plan=self.config.round_plan,
        )
        self.session.subscribe(self._save)

    def load(self) -> GameSession:
        """
        Restore the saved session, then apply the configured directive.

        A missing blob is not an error: the session stays in SETUP.
        """
        blob = self.store.load()
        if blob is not None:
            self.session.restore(blob)
        else:
            logger.info("No saved session; starting in SETUP")

        if self.config.has_directive:
            self.session.set_directive(
                target_prize_id=self.config.target_prize_id,
                auto_win=self.config.auto_win,
            )
        return self.session

    def reset(self):
        """Clear the catalog and the game, and delete the saved blob."""
        self.session.reset_all_data()
        self.store.clear()

    def _save(self, snapshot: dict[str, Any]):
        try:
            self.store.save(snapshot)
        except OSError as e:
            logger.error("Failed to save session: %s", e)
