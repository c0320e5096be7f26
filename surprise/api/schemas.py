"""
Pydantic Schemas for API - Request/response models for the show's front end.

These models define the contract between the presentation layer and the
engine. Closed containers never expose their prize.

Error Codes:
- INVALID_PHASE: Operation not allowed in the current game phase
- CASE_NOT_FOUND: No container with that id
- CASE_UNAVAILABLE: Container already open or held
- CATALOG_INCOMPLETE: Game needs exactly 16 prizes
- ROUND_QUOTA_MET: Round is complete; advance first
- ROUND_INCOMPLETE: Round still has containers to open
- CATALOG_FULL / INVALID_PRIZE: Prize could not be added or targeted
"""

from typing import Optional
from pydantic import BaseModel, Field

from ..engine_core.state import Category, GamePhase


# =============================================================================
# Shared Models
# =============================================================================

class PrizeInfo(BaseModel):
    """Prize information for display."""
    id: str
    name: str
    value: float
    category: Category
    image_url: str = ""
    revealed: bool = False

    model_config = {"from_attributes": True}


class ContainerInfo(BaseModel):
    """A container as the audience sees it."""
    id: int
    is_open: bool = False
    is_held: bool = False
    prize: Optional[PrizeInfo] = Field(None, description="Only set once the container is open")


# =============================================================================
# Requests
# =============================================================================

class AddPrizeRequest(BaseModel):
    """Add a prize to the catalog."""
    name: str = Field(..., min_length=1)
    value: float = Field(..., gt=0)
    category: Category = Category.NOVICE
    image_url: str = ""


class DirectiveRequest(BaseModel):
    """Operator's choice of outcome. Target id wins over auto-win."""
    target_prize_id: Optional[str] = None
    auto_win: bool = False


# =============================================================================
# Responses
# =============================================================================

class GameStateResponse(BaseModel):
    """Complete game state for display."""
    game_state: GamePhase
    current_round_index: int
    cases_opened_in_current_round: int
    remaining_to_open: int
    round_plan: list[int]
    held_container_id: Optional[int] = None
    containers: list[ContainerInfo] = Field(default_factory=list)
    prize_ladder: list[PrizeInfo] = Field(default_factory=list, description="Lowest value first")
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """Result of a game operation."""
    success: bool
    changes: list[str] = Field(default_factory=list)
    revealed_prize: Optional[PrizeInfo] = None
    game: GameStateResponse


class CatalogResponse(BaseModel):
    prizes: list[PrizeInfo]
    count: int
    is_complete: bool


class DirectiveResponse(BaseModel):
    target_prize_id: Optional[str] = None
    auto_win: bool = False
    mode: str = "none"


class ErrorResponse(BaseModel):
    """Error returned for operations that were ignored."""
    error: str
    error_code: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
