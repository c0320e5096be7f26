"""
Action System - Actions and results.

Actions represent every operation the presentation layer can request:
1. Lifecycle (start, confirm rules, reset)
2. Participant choices (select, open, keep, swap)
3. Round flow (advance after a reveal)
4. Operator configuration (rigging directive)

All state changes flow through actions. Misuse never raises: the
reducer answers with a failed ActionResult and leaves state untouched.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    START_GAME = "start_game"
    CONFIRM_RULES = "confirm_rules"
    SELECT_MAIN_CASE = "select_main_case"
    OPEN_CASE = "open_case"
    ADVANCE_GAME = "advance_game"
    SWAP_CASE = "swap_case"
    KEEP_CASE = "keep_case"
    SET_DIRECTIVE = "set_directive"


class ErrorCode:
    """Error codes carried by failed results."""
    INVALID_PHASE = "INVALID_PHASE"
    CASE_NOT_FOUND = "CASE_NOT_FOUND"
    CASE_UNAVAILABLE = "CASE_UNAVAILABLE"
    CATALOG_INCOMPLETE = "CATALOG_INCOMPLETE"
    ROUND_QUOTA_MET = "ROUND_QUOTA_MET"
    ROUND_INCOMPLETE = "ROUND_INCOMPLETE"
    CATALOG_FULL = "CATALOG_FULL"
    INVALID_PRIZE = "INVALID_PRIZE"
    NO_HANDLER = "NO_HANDLER"


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are validated before application and applied
    atomically by the reducer.
    """
    action_type: ActionType
    container_id: int | None = None
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def start_game(cls) -> Action:
        return cls(action_type=ActionType.START_GAME)

    @classmethod
    def confirm_rules(cls) -> Action:
        return cls(action_type=ActionType.CONFIRM_RULES)

    @classmethod
    def select_main_case(cls, container_id: int) -> Action:
        """Factory for the participant's pick of their own case."""
        return cls(action_type=ActionType.SELECT_MAIN_CASE, container_id=container_id)

    @classmethod
    def open_case(cls, container_id: int) -> Action:
        """Factory for opening a case on the board."""
        return cls(action_type=ActionType.OPEN_CASE, container_id=container_id)

    @classmethod
    def advance_game(cls) -> Action:
        return cls(action_type=ActionType.ADVANCE_GAME)

    @classmethod
    def swap_case(cls) -> Action:
        return cls(action_type=ActionType.SWAP_CASE)

    @classmethod
    def keep_case(cls) -> Action:
        return cls(action_type=ActionType.KEEP_CASE)

    @classmethod
    def set_directive(cls, target_prize_id: str | None = None, auto_win: bool = False) -> Action:
        """Factory for the operator's rigging directive."""
        return cls(
            action_type=ActionType.SET_DIRECTIVE,
            params={"target_prize_id": target_prize_id, "auto_win": auto_win},
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action changed anything
    - Errors (if it was a no-op)
    - Human-readable changes and the revealed prize (for the UI)
    """
    success: bool
    error: str | None = None
    error_code: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)
    revealed_prize_id: str | None = None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def ok(
        cls,
        changes: list[str] | None = None,
        revealed_prize_id: str | None = None,
    ) -> ActionResult:
        """Create a success result."""
        return cls(
            success=True,
            state_changes=changes or [],
            revealed_prize_id=revealed_prize_id,
        )
