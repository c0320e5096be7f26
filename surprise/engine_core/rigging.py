"""
Rigging Engine - Covert prize swaps that steer the game's outcome.

The engine is consulted at three points of the flow:
1. Selection: the protected prize is moved into the chosen container
2. Opening: the pacing rule of the round may swap the prize about to
   be revealed with one from another closed container
3. Final swap: with a directive active, the prizes follow the held
   flag so the protected prize stays with the participant

Swap candidates are always closed, not held, not Legendary, not the
protected prize, and not the container being opened. The Legendary
and protected prizes are therefore never moved into or out of an
opened container by pacing.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .state import Category, Container, GameState
from .pacing import PacingTable, default_pacing_table
from .random_source import RandomSource, create_random_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RigSwap:
    """Record of one covert swap between two containers."""
    first_id: int
    second_id: int
    reason: str


class RiggingEngine:
    """
    Decides when two containers' prizes must be exchanged.

    Usage:
        engine = RiggingEngine(rng=random.Random(7))
        engine.on_select(state, container_id)
        engine.on_open(state, container_id)
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        pacing: PacingTable | None = None,
    ):
        self.rng = rng or create_random_source()
        self.pacing = pacing or default_pacing_table()

    def protected_prize_id(self, state: GameState) -> str | None:
        """
        The prize the directive delivers to the participant.

        With a target id, the target prize (if it is in the pool).
        With auto-win, whatever the held container holds, since the
        selection rig put the top-ranked prize there.
        """
        directive = state.directive
        if directive.target_prize_id:
            if state.find_prize(directive.target_prize_id) is None:
                return None
            return directive.target_prize_id
        if directive.auto_win:
            held = state.held_container
            return held.prize.id if held else None
        return None

    def on_select(self, state: GameState, container_id: int) -> RigSwap | None:
        """Bind the protected prize to the container the participant picked."""
        directive = state.directive

        if directive.target_prize_id:
            source = state.find_prize(directive.target_prize_id)
            if source is None:
                logger.warning("Target prize %s is not in play", directive.target_prize_id)
                return None
            return self._swap(state, container_id, source.id, "target")

        if directive.auto_win:
            top_rank = max(c.prize.category.rank for c in state.containers)
            top = [c for c in state.containers if c.prize.category.rank == top_rank]
            source = self.rng.choice(top)
            return self._swap(state, container_id, source.id, "auto_win")

        return None

    def on_open(self, state: GameState, container_id: int, quota: int) -> RigSwap | None:
        """
        Apply the round's pacing rule before a container is opened.

        Args:
            state: Current game state (PLAYING)
            container_id: Container about to be opened
            quota: Containers to open in the current round
        """
        target = state.get_container(container_id)
        if target is None:
            return None

        protected_id = self.protected_prize_id(state)
        if not self._is_movable(target, protected_id):
            return None

        rule = self.pacing.rule_for(state.current_round_index)
        shots_left = quota - state.cases_opened_in_current_round - 1
        decision = rule.decide(target.prize, state.reveals_in_round, shots_left)
        if decision is None:
            return None

        candidates = [
            c for c in self.swap_candidates(state, container_id, protected_id)
            if decision.accepts(c)
        ]
        if not candidates:
            logger.debug(
                "Round %d: %s but no candidate for container %d",
                state.current_round_index, decision.reason, container_id,
            )
            return None

        source = self.rng.choice(candidates)
        return self._swap(state, container_id, source.id, decision.reason)

    def on_final_swap(self, state: GameState, held_id: int, other_id: int) -> RigSwap | None:
        """
        Keep the protected prize with the participant across a swap.

        Called before the hold moves to `other_id`. Without a protected
        prize in the held container the swap is a real exchange.
        """
        protected_id = self.protected_prize_id(state)
        held = state.get_container(held_id)
        if protected_id is None or held is None or held.prize.id != protected_id:
            return None
        return self._swap(state, held_id, other_id, "final swap")

    def swap_candidates(
        self,
        state: GameState,
        opening_id: int,
        protected_id: str | None = None,
    ) -> list[Container]:
        """Containers whose prize may be exchanged with the one being opened."""
        return [
            c for c in state.containers
            if c.id != opening_id
            and not c.is_open
            and not c.is_held
            and self._is_movable(c, protected_id)
        ]

    def _is_movable(self, container: Container, protected_id: str | None) -> bool:
        prize = container.prize
        if prize.category == Category.LEGENDARY:
            return False
        return protected_id is None or prize.id != protected_id

    def _swap(self, state: GameState, first_id: int, second_id: int, reason: str) -> RigSwap | None:
        if first_id == second_id:
            return None
        state.swap_prizes(first_id, second_id)
        logger.debug("Swapped containers %d and %d (%s)", first_id, second_id, reason)
        return RigSwap(first_id=first_id, second_id=second_id, reason=reason)
