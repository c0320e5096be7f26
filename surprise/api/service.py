"""
API Service - Business logic layer between the HTTP app and the session.

The service:
1. Translates requests to session operations
2. Formats session state for the front end (hiding closed prizes)
3. Turns ignored operations into ErrorResponse values

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Union

from ..engine_core.action import ActionResult, ErrorCode
from ..engine_core.state import Container, Prize
from ..session import GameSession, SessionManager
from .schemas import (
    ActionResponse,
    AddPrizeRequest,
    CatalogResponse,
    ContainerInfo,
    DirectiveRequest,
    DirectiveResponse,
    ErrorResponse,
    GameStateResponse,
    PrizeInfo,
)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService(manager)
        service.start_game()
        service.select_main_case(7)
    """
    manager: SessionManager = field(default_factory=SessionManager)

    @property
    def session(self) -> GameSession:
        return self.manager.session

    # =========================================================================
    # State
    # =========================================================================

    def get_game(self) -> GameStateResponse:
        session = self.session
        held = session.held_container
        return GameStateResponse(
            game_state=session.phase,
            current_round_index=session.state.current_round_index,
            cases_opened_in_current_round=session.state.cases_opened_in_current_round,
            remaining_to_open=session.remaining_to_open,
            round_plan=list(session.round_plan.quotas),
            held_container_id=held.id if held else None,
            containers=[_container_info(c) for c in session.containers],
            prize_ladder=[_prize_info(p) for p in session.sorted_prizes()],
        )

    def get_catalog(self) -> CatalogResponse:
        catalog = self.session.catalog
        return CatalogResponse(
            prizes=[_prize_info(p) for p in catalog],
            count=len(catalog),
            is_complete=catalog.is_complete,
        )

    def get_directive(self) -> DirectiveResponse:
        directive = self.session.state.directive
        return DirectiveResponse(
            target_prize_id=directive.target_prize_id,
            auto_win=directive.auto_win,
            mode=directive.mode,
        )

    # =========================================================================
    # Operations
    # =========================================================================

    def start_game(self) -> Union[ActionResponse, ErrorResponse]:
        return self._respond(self.session.start_game())

    def confirm_rules(self) -> Union[ActionResponse, ErrorResponse]:
        return self._respond(self.session.confirm_rules())

    def select_main_case(self, container_id: int) -> Union[ActionResponse, ErrorResponse]:
        return self._respond(self.session.select_main_case(container_id))

    def open_case(self, container_id: int) -> Union[ActionResponse, ErrorResponse]:
        return self._respond(self.session.open_case(container_id))

    def advance_game(self) -> Union[ActionResponse, ErrorResponse]:
        return self._respond(self.session.advance_game())

    def swap_case(self) -> Union[ActionResponse, ErrorResponse]:
        return self._respond(self.session.swap_case())

    def keep_case(self) -> Union[ActionResponse, ErrorResponse]:
        return self._respond(self.session.keep_case())

    def set_directive(self, request: DirectiveRequest) -> Union[DirectiveResponse, ErrorResponse]:
        result = self.session.set_directive(
            target_prize_id=request.target_prize_id,
            auto_win=request.auto_win,
        )
        if not result.success:
            return ErrorResponse(error=result.error, error_code=result.error_code)
        return self.get_directive()

    def add_prize(self, request: AddPrizeRequest) -> Union[PrizeInfo, ErrorResponse]:
        prize = self.session.add_prize(
            name=request.name,
            value=request.value,
            category=request.category,
            image_url=request.image_url,
        )
        if prize is None and self.session.catalog.is_full:
            return ErrorResponse(
                error="Catalog already holds 16 prizes",
                error_code=ErrorCode.CATALOG_FULL,
            )
        if prize is None:
            return ErrorResponse(
                error="A prize needs a name and a positive value",
                error_code=ErrorCode.INVALID_PRIZE,
            )
        return _prize_info(prize)

    def remove_prize(self, index: int) -> Union[PrizeInfo, ErrorResponse]:
        prize = self.session.remove_prize(index)
        if prize is None:
            return ErrorResponse(
                error=f"No prize at position {index}",
                error_code=ErrorCode.INVALID_PRIZE,
            )
        return _prize_info(prize)

    def reset(self) -> GameStateResponse:
        self.manager.reset()
        return self.get_game()

    def _respond(self, result: ActionResult) -> Union[ActionResponse, ErrorResponse]:
        if not result.success:
            return ErrorResponse(error=result.error, error_code=result.error_code)

        revealed = None
        if result.revealed_prize_id:
            container = self.session.state.find_prize(result.revealed_prize_id)
            if container is not None:
                revealed = _prize_info(container.prize)

        return ActionResponse(
            success=True,
            changes=result.state_changes,
            revealed_prize=revealed,
            game=self.get_game(),
        )


def _prize_info(prize: Prize) -> PrizeInfo:
    return PrizeInfo.model_validate(prize)


def _container_info(container: Container) -> ContainerInfo:
    return ContainerInfo(
        id=container.id,
        is_open=container.is_open,
        is_held=container.is_held,
        prize=_prize_info(container.prize) if container.is_open else None,
    )
