"""
FastAPI Application - REST API for the show's front end.

Endpoints:
    GET    /api/v1/health                   Health check
    GET    /api/v1/game                     Current game state
    POST   /api/v1/game/start               Seal the prizes into containers
    POST   /api/v1/game/rules/confirm       Rules acknowledged
    POST   /api/v1/game/cases/{id}/select   Participant picks their case
    POST   /api/v1/game/cases/{id}/open     Open a board case
    POST   /api/v1/game/advance             Reveal shown; continue
    POST   /api/v1/game/swap                Final decision: swap
    POST   /api/v1/game/keep                Final decision: keep
    POST   /api/v1/game/reset               Clear catalog and game
    GET    /api/v1/prizes                   Prize catalog
    POST   /api/v1/prizes                   Add a prize
    DELETE /api/v1/prizes/{index}           Remove a prize
    GET    /api/v1/directive                Current rigging directive
    PUT    /api/v1/directive                Set the rigging directive

Ignored operations answer 409 with an ErrorResponse.

Run with: uvicorn --factory surprise.api.app:create_app
"""

from typing import Union

from .. import __version__


def create_app(service=None, config=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates one if not provided)
        config: Optional SurpriseConfig (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from ..config import SurpriseConfig
    from ..logging_config import setup_logging
    from ..session import SessionManager
    from .service import APIService
    from .schemas import (
        ActionResponse,
        AddPrizeRequest,
        CatalogResponse,
        DirectiveRequest,
        DirectiveResponse,
        ErrorResponse,
        GameStateResponse,
        HealthResponse,
        PrizeInfo,
    )

    if service is None:
        config = config or SurpriseConfig.from_env()
        setup_logging(config.log_level)
        manager = SessionManager(config)
        manager.load()
        service = APIService(manager=manager)
        allowed_origins = config.allowed_origins
    else:
        allowed_origins = (config or service.manager.config).allowed_origins

    app = FastAPI(
        title="Surprise Game API",
        description="Sixteen sealed cases, five rounds, one final decision.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def respond(result, status_code: int = 409):
        """Pass successful models through; wrap errors in a JSONResponse."""
        if isinstance(result, ErrorResponse):
            return JSONResponse(status_code=status_code, content=result.model_dump())
        return result

    error_responses = {409: {"model": ErrorResponse}}

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["Health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="surprise", version=__version__)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get("/api/v1/game", response_model=GameStateResponse, tags=["Game"])
    async def get_game() -> GameStateResponse:
        """Current game state. Closed containers do not show their prize."""
        return service.get_game()

    @app.post(
        "/api/v1/game/start",
        response_model=ActionResponse,
        responses=error_responses,
        tags=["Game"],
        summary="Seal the 16 catalog prizes into containers",
    )
    async def start_game() -> Union[ActionResponse, JSONResponse]:
        return respond(service.start_game())

    @app.post(
        "/api/v1/game/rules/confirm",
        response_model=ActionResponse,
        responses=error_responses,
        tags=["Game"],
    )
    async def confirm_rules() -> Union[ActionResponse, JSONResponse]:
        return respond(service.confirm_rules())

    @app.post(
        "/api/v1/game/cases/{container_id}/select",
        response_model=ActionResponse,
        responses=error_responses,
        tags=["Game"],
        summary="Participant picks the case they keep",
    )
    async def select_main_case(container_id: int) -> Union[ActionResponse, JSONResponse]:
        return respond(service.select_main_case(container_id))

    @app.post(
        "/api/v1/game/cases/{container_id}/open",
        response_model=ActionResponse,
        responses=error_responses,
        tags=["Game"],
        summary="Open a case on the board",
    )
    async def open_case(container_id: int) -> Union[ActionResponse, JSONResponse]:
        return respond(service.open_case(container_id))

    @app.post(
        "/api/v1/game/advance",
        response_model=ActionResponse,
        responses=error_responses,
        tags=["Game"],
        summary="Continue after a reveal has been shown",
    )
    async def advance_game() -> Union[ActionResponse, JSONResponse]:
        return respond(service.advance_game())

    @app.post("/api/v1/game/swap", response_model=ActionResponse, responses=error_responses, tags=["Game"])
    async def swap_case() -> Union[ActionResponse, JSONResponse]:
        return respond(service.swap_case())

    @app.post("/api/v1/game/keep", response_model=ActionResponse, responses=error_responses, tags=["Game"])
    async def keep_case() -> Union[ActionResponse, JSONResponse]:
        return respond(service.keep_case())

    @app.post("/api/v1/game/reset", response_model=GameStateResponse, tags=["Game"])
    async def reset() -> GameStateResponse:
        """Delete all prizes and the saved game."""
        return service.reset()

    # =========================================================================
    # Catalog Endpoints
    # =========================================================================

    @app.get("/api/v1/prizes", response_model=CatalogResponse, tags=["Catalog"])
    async def get_catalog() -> CatalogResponse:
        return service.get_catalog()

    @app.post(
        "/api/v1/prizes",
        response_model=PrizeInfo,
        status_code=201,
        responses=error_responses,
        tags=["Catalog"],
    )
    async def add_prize(request: AddPrizeRequest) -> Union[PrizeInfo, JSONResponse]:
        return respond(service.add_prize(request))

    @app.delete(
        "/api/v1/prizes/{index}",
        response_model=PrizeInfo,
        responses={404: {"model": ErrorResponse}},
        tags=["Catalog"],
    )
    async def remove_prize(index: int) -> Union[PrizeInfo, JSONResponse]:
        return respond(service.remove_prize(index), status_code=404)

    # =========================================================================
    # Directive Endpoints
    # =========================================================================

    @app.get("/api/v1/directive", response_model=DirectiveResponse, tags=["Operator"])
    async def get_directive() -> DirectiveResponse:
        return service.get_directive()

    @app.put(
        "/api/v1/directive",
        response_model=DirectiveResponse,
        responses=error_responses,
        tags=["Operator"],
        summary="Choose the outcome delivered to the participant",
    )
    async def set_directive(request: DirectiveRequest) -> Union[DirectiveResponse, JSONResponse]:
        return respond(service.set_directive(request))

    return app
