"""
Reducer - Applies actions to the game state.

The reducer is the single point of state mutation. It is also the
game's state machine and round scheduler:

    SETUP -> RULES -> PICK_OWN -> PLAYING -> SWAP_ROUND -> FINISHED

Design principles:
- Validates phase before applying; misuse is a no-op, never an exception
- Returns ActionResult with success/failure
- Delegates covert prize swaps to the RiggingEngine
- Results never mention rig swaps; those only reach the debug log
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .state import Container, GamePhase, GameState, RiggingDirective, RoundPlan
from .catalog import PrizeCatalog
from .action import Action, ActionType, ActionResult, ErrorCode
from .rigging import RiggingEngine

logger = logging.getLogger(__name__)


# Phases in which each action is accepted
ALLOWED_PHASES = {
    ActionType.START_GAME: {GamePhase.SETUP, GamePhase.FINISHED},
    ActionType.CONFIRM_RULES: {GamePhase.RULES},
    ActionType.SELECT_MAIN_CASE: {GamePhase.PICK_OWN},
    ActionType.OPEN_CASE: {GamePhase.PLAYING},
    ActionType.ADVANCE_GAME: {GamePhase.PLAYING},
    ActionType.SWAP_CASE: {GamePhase.SWAP_ROUND},
    ActionType.KEEP_CASE: {GamePhase.SWAP_ROUND},
    # The directive is fixed once the participant has picked a case
    ActionType.SET_DIRECTIVE: {
        GamePhase.SETUP,
        GamePhase.RULES,
        GamePhase.PICK_OWN,
        GamePhase.FINISHED,
    },
}


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    The catalog is read at game start; the rigging engine carries
    the random source and the pacing table.
    """
    catalog: PrizeCatalog
    rigging: RiggingEngine = field(default_factory=RiggingEngine)
    round_plan: RoundPlan = field(default_factory=RoundPlan)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state in place.

        Returns ActionResult; on failure the state is unchanged.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            logger.debug("Ignored %s: %s", action.action_type.value, validation_error)
            return ActionResult.failure(validation_error, error_code=ErrorCode.INVALID_PHASE)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCode.NO_HANDLER,
            )

        result = handler(state, action)
        if not result.success:
            logger.debug("Ignored %s: %s", action.action_type.value, result.error)
        return result

    def _validate_action(self, state: GameState, action: Action) -> str | None:
        """Returns error message if the action is not allowed in this phase."""
        allowed = ALLOWED_PHASES.get(action.action_type, set())
        if state.phase not in allowed:
            return f"{action.action_type.value} not allowed during {state.phase.value}"
        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.START_GAME: self._handle_start_game,
            ActionType.CONFIRM_RULES: self._handle_confirm_rules,
            ActionType.SELECT_MAIN_CASE: self._handle_select_main_case,
            ActionType.OPEN_CASE: self._handle_open_case,
            ActionType.ADVANCE_GAME: self._handle_advance_game,
            ActionType.SWAP_CASE: self._handle_swap_case,
            ActionType.KEEP_CASE: self._handle_keep_case,
            ActionType.SET_DIRECTIVE: self._handle_set_directive,
        }
        return handlers.get(action_type)

    def quota(self, state: GameState) -> int:
        """Containers to open in the current round."""
        return self.round_plan[state.current_round_index]

    def remaining_to_open(self, state: GameState) -> int:
        """Containers still to open before the round can advance."""
        if state.phase != GamePhase.PLAYING:
            return 0
        return max(self.quota(state) - state.cases_opened_in_current_round, 0)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _handle_start_game(self, state: GameState, action: Action) -> ActionResult:
        """Deal the catalog into a fresh, shuffled container pool."""
        if not self.catalog.is_complete:
            return ActionResult.failure(
                f"Catalog has {len(self.catalog)} prizes",
                error_code=ErrorCode.CATALOG_INCOMPLETE,
            )

        self.catalog.clear_revealed()
        prizes = list(self.catalog.prizes)
        self.rigging.rng.shuffle(prizes)

        state.containers = [
            Container(id=i + 1, prize=prize)
            for i, prize in enumerate(prizes)
        ]
        state.current_round_index = 0
        state.reset_round_counters()
        state.phase = GamePhase.RULES

        logger.info("Game started with %d containers", len(state.containers))
        return ActionResult.ok(changes=["Containers sealed"])

    def _handle_confirm_rules(self, state: GameState, action: Action) -> ActionResult:
        state.phase = GamePhase.PICK_OWN
        return ActionResult.ok(changes=["Rules confirmed"])

    def _handle_set_directive(self, state: GameState, action: Action) -> ActionResult:
        target_prize_id = action.params.get("target_prize_id") or None
        auto_win = bool(action.params.get("auto_win", False))

        if target_prize_id and self.catalog.get(target_prize_id) is None:
            return ActionResult.failure(
                f"Prize {target_prize_id} not in catalog",
                error_code=ErrorCode.INVALID_PRIZE,
            )

        state.directive = RiggingDirective(target_prize_id=target_prize_id, auto_win=auto_win)
        logger.debug("Directive set: %s", state.directive.mode)
        return ActionResult.ok()

    # =========================================================================
    # Participant choices
    # =========================================================================

    def _handle_select_main_case(self, state: GameState, action: Action) -> ActionResult:
        """The participant picks the case they keep until the end."""
        container = state.get_container(action.container_id)
        if container is None:
            return ActionResult.failure(
                f"Container {action.container_id} not found",
                error_code=ErrorCode.CASE_NOT_FOUND,
            )

        self.rigging.on_select(state, container.id)
        container.is_held = True
        state.phase = GamePhase.PLAYING

        logger.info("Container %d held; round 1 begins", container.id)
        return ActionResult.ok(changes=[f"Container {container.id} is yours"])

    def _handle_open_case(self, state: GameState, action: Action) -> ActionResult:
        """Open a board container and reveal its prize."""
        container = state.get_container(action.container_id)
        if container is None:
            return ActionResult.failure(
                f"Container {action.container_id} not found",
                error_code=ErrorCode.CASE_NOT_FOUND,
            )
        if container.is_open or container.is_held:
            return ActionResult.failure(
                f"Container {container.id} cannot be opened",
                error_code=ErrorCode.CASE_UNAVAILABLE,
            )

        quota = self.quota(state)
        if state.cases_opened_in_current_round >= quota:
            return ActionResult.failure(
                "Round quota already met",
                error_code=ErrorCode.ROUND_QUOTA_MET,
            )

        self.rigging.on_open(state, container.id, quota)

        prize = container.prize
        state.reveals_in_round[prize.category] += 1
        container.is_open = True
        prize.revealed = True
        state.cases_opened_in_current_round += 1

        return ActionResult.ok(
            changes=[f"Container {container.id} opened: {prize.name}"],
            revealed_prize_id=prize.id,
        )

    # =========================================================================
    # Round flow
    # =========================================================================

    def _handle_advance_game(self, state: GameState, action: Action) -> ActionResult:
        """Move to the next round, or to the final decision, once the quota is met."""
        if state.cases_opened_in_current_round < self.quota(state):
            return ActionResult.failure(
                f"{self.remaining_to_open(state)} containers left to open",
                error_code=ErrorCode.ROUND_INCOMPLETE,
            )

        if state.current_round_index < self.round_plan.last_round_index:
            state.current_round_index += 1
            state.reset_round_counters()
            logger.info("Round %d begins", state.current_round_index + 1)
            return ActionResult.ok(changes=[f"Round {state.current_round_index + 1}"])

        state.phase = GamePhase.SWAP_ROUND
        logger.info("All rounds played; final decision")
        return ActionResult.ok(changes=["Keep or swap?"])

    # =========================================================================
    # Final decision
    # =========================================================================

    def _handle_swap_case(self, state: GameState, action: Action) -> ActionResult:
        """Trade the held case for the last closed one, then open it."""
        held = state.held_container
        remaining = state.closed_board_containers
        if held is None or len(remaining) != 1:
            return ActionResult.failure(
                "Swap needs one held and one remaining container",
                error_code=ErrorCode.CASE_UNAVAILABLE,
            )

        other = remaining[0]
        self.rigging.on_final_swap(state, held.id, other.id)
        held.is_held = False
        other.is_held = True

        return self._finish(state, other, f"Swapped container {held.id} for {other.id}")

    def _handle_keep_case(self, state: GameState, action: Action) -> ActionResult:
        held = state.held_container
        if held is None:
            return ActionResult.failure(
                "No held container",
                error_code=ErrorCode.CASE_UNAVAILABLE,
            )
        return self._finish(state, held, f"Kept container {held.id}")

    def _finish(self, state: GameState, held: Container, change: str) -> ActionResult:
        held.is_open = True
        held.prize.revealed = True
        state.phase = GamePhase.FINISHED

        logger.info("Game finished; container %d opened", held.id)
        return ActionResult.ok(
            changes=[change, f"Container {held.id} holds {held.prize.name}"],
            revealed_prize_id=held.prize.id,
        )


def apply_action(catalog: PrizeCatalog, state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action with a default reducer.

    Equivalent to: Reducer(catalog).apply(state, action)
    """
    return Reducer(catalog=catalog).apply(state, action)
