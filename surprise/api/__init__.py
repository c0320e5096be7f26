"""
API Module - HTTP interface for the show's front end.

Exposes the session via REST API:
1. Operators author the prize catalog and set the directive
2. The front end drives the game (start, pick, open, advance, decide)
3. Every call returns the game state the audience may see

One session per process. State is saved after every change.
"""

from .schemas import (
    # Requests
    AddPrizeRequest,
    DirectiveRequest,
    # Responses
    ActionResponse,
    CatalogResponse,
    DirectiveResponse,
    ErrorResponse,
    GameStateResponse,
    HealthResponse,
    # Shared
    ContainerInfo,
    PrizeInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "AddPrizeRequest",
    "DirectiveRequest",
    # Responses
    "ActionResponse",
    "CatalogResponse",
    "DirectiveResponse",
    "ErrorResponse",
    "GameStateResponse",
    "HealthResponse",
    # Shared
    "ContainerInfo",
    "PrizeInfo",
    # Service
    "APIService",
    "create_app",
]
