"""
Game Session - The one game this process is running.

A session owns:
- The prize catalog (survives across games until edited or reset)
- The game state (containers, phase, round counters, directive)
- The reducer, which carries the rigging engine and round plan

Every public operation runs to completion and returns an
ActionResult. After each successful mutation the session notifies
its listeners with a fresh snapshot; the presentation layer and the
persistence store both observe the session this way.
"""

from __future__ import annotations
from typing import Any, Callable
import logging

from ..engine_core.state import (
    Category,
    Container,
    GamePhase,
    GameState,
    Prize,
    RiggingDirective,
    RoundPlan,
    TOTAL_CONTAINERS,
)
from ..engine_core.catalog import PrizeCatalog
from ..engine_core.action import Action, ActionResult
from ..engine_core.pacing import PacingTable
from ..engine_core.random_source import RandomSource
from ..engine_core.reducer import Reducer
from ..engine_core.rigging import RiggingEngine
from ..persistence.schema import PrizeRecord, StateBlob

logger = logging.getLogger(__name__)

Listener = Callable[[dict[str, Any]], None]


class GameSession:
    """
    Single-game session.

    Usage:
        session = GameSession(rng=random.Random(3))
        for name, value, category in prizes:
            session.add_prize(name, value, category)

        session.set_directive(auto_win=True)
        session.start_game()
        session.confirm_rules()
        session.select_main_case(7)
        session.open_case(1)
        session.advance_game()   # after the reveal has been shown
        ...
        session.keep_case()
    """

    def __init__(
        self,
        catalog: PrizeCatalog | None = None,
        rng: RandomSource | None = None,
        pacing: PacingTable | None = None,
        round_plan: RoundPlan | None = None,
    ):
        self.catalog = catalog if catalog is not None else PrizeCatalog()
        self.state = GameState()
        self.reducer = Reducer(
            catalog=self.catalog,
            rigging=RiggingEngine(rng=rng, pacing=pacing),
            round_plan=round_plan or RoundPlan(),
        )
        self._listeners: list[Listener] = []

    # =========================================================================
    # Observation
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call `listener(snapshot)` after every successful mutation.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> dict[str, Any]:
        """The full session as plain data (the persistence blob shape)."""
        blob = {"prizes": [p.to_dict() for p in self.catalog]}
        blob.update(self.state.snapshot())
        return blob

    def _notify(self):
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _dispatch(self, action: Action) -> ActionResult:
        result = self.reducer.apply(self.state, action)
        if result.success:
            self._notify()
        return result

    # =========================================================================
    # Read-only views
    # =========================================================================

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def containers(self) -> list[Container]:
        return self.state.containers

    @property
    def held_container(self) -> Container | None:
        return self.state.held_container

    @property
    def board_containers(self) -> list[Container]:
        return self.state.board_containers

    @property
    def round_plan(self) -> RoundPlan:
        return self.reducer.round_plan

    @property
    def remaining_to_open(self) -> int:
        return self.reducer.remaining_to_open(self.state)

    def sorted_prizes(self) -> list[Prize]:
        """Prize ladder for display, lowest value first."""
        return self.catalog.sorted_by_value()

    # =========================================================================
    # Game operations
    # =========================================================================

    def start_game(self) -> ActionResult:
        return self._dispatch(Action.start_game())

    def confirm_rules(self) -> ActionResult:
        return self._dispatch(Action.confirm_rules())

    def select_main_case(self, container_id: int) -> ActionResult:
        return self._dispatch(Action.select_main_case(container_id))

    def open_case(self, container_id: int) -> ActionResult:
        return self._dispatch(Action.open_case(container_id))

    def advance_game(self) -> ActionResult:
        """Call once the reveal of the last opened container has been shown."""
        return self._dispatch(Action.advance_game())

    def swap_case(self) -> ActionResult:
        return self._dispatch(Action.swap_case())

    def keep_case(self) -> ActionResult:
        return self._dispatch(Action.keep_case())

    def set_directive(self, target_prize_id: str | None = None, auto_win: bool = False) -> ActionResult:
        return self._dispatch(Action.set_directive(target_prize_id, auto_win))

    # =========================================================================
    # Catalog
    # =========================================================================

    def add_prize(
        self,
        name: str,
        value: float,
        category: Category = Category.NOVICE,
        image_url: str = "",
    ) -> Prize | None:
        """Add a prize to the catalog. Returns None if it was rejected."""
        prize = self.catalog.add_prize(name, value, category, image_url)
        if prize is not None:
            self._notify()
        return prize

    def remove_prize(self, index: int) -> Prize | None:
        """Remove a prize; a directive targeting it loses its target."""
        prize = self.catalog.remove_prize(index)
        if prize is None:
            return None

        directive = self.state.directive
        if directive.target_prize_id == prize.id:
            self.state.directive = RiggingDirective(auto_win=directive.auto_win)
            logger.debug("Removed prize %s was the target; target cleared", prize.id)
        self._notify()
        return prize

    def reset_all_data(self):
        """Forget the catalog and the game; back to SETUP."""
        self.catalog.clear()
        self.state = GameState()
        logger.info("Session reset")
        self._notify()

    # =========================================================================
    # Restore
    # =========================================================================

    def restore(self, blob: StateBlob):
        """
        Replace the session with a saved blob.

        Containers are relinked to the catalog's prize objects so a
        reveal is seen through both. Inconsistent combinations fall
        back to defaults.
        """
        prizes = [_prize_from_record(r) for r in blob.prizes]
        by_id = {p.id: p for p in prizes}

        containers = [
            Container(
                id=r.id,
                prize=by_id.get(r.prize.id) or _prize_from_record(r.prize),
                is_open=r.is_open,
                is_held=r.is_held,
                is_removed=r.is_removed,
            )
            for r in blob.containers
        ]

        phase = blob.game_state
        if phase != GamePhase.SETUP:
            problem = _board_problem(phase, containers)
            if problem:
                logger.warning("Saved game in %s %s; starting over", phase.value, problem)
                phase = GamePhase.SETUP
                containers = []

        plan = self.round_plan
        round_index = blob.current_round_index
        if round_index > plan.last_round_index:
            logger.warning("Saved round %d is out of range; using last round", round_index)
            round_index = plan.last_round_index
        opened = min(blob.cases_opened_in_current_round, plan[round_index])

        state = GameState(
            phase=phase,
            containers=containers,
            current_round_index=round_index,
            cases_opened_in_current_round=opened,
            directive=RiggingDirective(
                target_prize_id=blob.target_prize_id or None,
                auto_win=blob.is_auto_win,
            ),
        )

        self.catalog.prizes = prizes
        self.state = state
        logger.info("Restored session in %s", phase.value)


HELD_PHASES = (GamePhase.PLAYING, GamePhase.SWAP_ROUND, GamePhase.FINISHED)


def _board_problem(phase: GamePhase, containers: list[Container]) -> str | None:
    """Describe why saved containers cannot be resumed in `phase`, or None."""
    if len(containers) != TOTAL_CONTAINERS:
        return f"has {len(containers)} containers"

    ids = sorted(c.id for c in containers)
    if ids != list(range(1, TOTAL_CONTAINERS + 1)):
        return "has duplicate or out-of-range container ids"

    held = sum(1 for c in containers if c.is_held)
    expected = 1 if phase in HELD_PHASES else 0
    if held != expected:
        return f"has {held} held containers"
    return None


def _prize_from_record(record: PrizeRecord) -> Prize:
    return Prize(
        id=record.id,
        name=record.name,
        value=record.value,
        category=record.category,
        image_url=record.image_url,
        revealed=record.is_revealed,
    )
