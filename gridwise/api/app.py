"""
FastAPI Application - REST API for a renderer.

Endpoints:
    GET    /api/v1/health                                  Liveness
    GET    /api/v1/catalog                                 Card catalog
    POST   /api/v1/games                                   Start a game session
    GET    /api/v1/games                                   List sessions
    GET    /api/v1/games/{id}                              Game state
    DELETE /api/v1/games/{id}                              End session
    POST   /api/v1/games/{id}/reset                        Deal a new game
    POST   /api/v1/games/{id}/place                        Place a card
    POST   /api/v1/games/{id}/incentive                    Play an incentive
    POST   /api/v1/games/{id}/advance                      Advance the turn
    GET    /api/v1/games/{id}/cards/{card_id}/placement    Valid slots for a card
    GET    /api/v1/games/{id}/cards/{card_id}/projection   Totals preview

Turn flow:
    A successful placement schedules an automatic turn advance after
    GRIDWISE_AUTO_ADVANCE_DELAY seconds (advance_scheduled=true in the
    response). Poll GET /games/{id} to see it land.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Union
import logging
import os

from .. import __version__

# Environment configuration
GRIDWISE_ENV = os.getenv("GRIDWISE_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)

# Rejection code -> HTTP status
STATUS_FOR_ERROR = {
    "SESSION_NOT_FOUND": 404,
    "UNKNOWN_CARD": 404,
    "GAME_ALREADY_WON": 409,
    "GAME_NOT_STARTED": 409,
    "INVALID_SLOT_INDEX": 422,
    "ILLEGAL_PLACEMENT": 422,
    "NO_MATCHING_CONSUMER": 422,
    "CATALOG_INTEGRITY_ERROR": 500,
    "INTERNAL_ERROR": 500,
}


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from ..config import GameConfig
    from ..session import SessionManager
    from .service import APIService
    from .schemas import (
        ActionResponse,
        CatalogResponse,
        CreateGameRequest,
        EndSessionResponse,
        ErrorCode,
        ErrorResponse,
        GameStateResponse,
        HealthResponse,
        PlaceCardRequest,
        PlacementResponse,
        PlayIncentiveRequest,
        ProjectionResponse,
        SessionListResponse,
        SlotKindParam,
    )

    app = FastAPI(
        title="Gridwise Engine API",
        description="""
Grid balancing puzzle engine.

Keep night, day, eve and flex totals at or above zero while replacing
every Fossil generator. Win when none remain.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `UNKNOWN_CARD` | Card id not in the shop |
| `INVALID_SLOT_INDEX` | Slot index outside the grid |
| `ILLEGAL_PLACEMENT` | Same-name replacement, wrong row, or unstable grid |
| `NO_MATCHING_CONSUMER` | Incentive has nothing to upgrade |
| `GAME_ALREADY_WON` | Game is over |
        """,
        version=__version__,
        docs_url=None if GRIDWISE_ENV == "production" else "/api/docs",
        redoc_url=None if GRIDWISE_ENV == "production" else "/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(
        session_manager=SessionManager(config=GameConfig.from_env())
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=STATUS_FOR_ERROR.get(error.error_code.value, 400),
            content=error.model_dump(mode="json"),
        )

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        if isinstance(response, ActionResponse) and not response.success:
            code = response.error_code.value if response.error_code else "INTERNAL_ERROR"
            return JSONResponse(
                status_code=STATUS_FOR_ERROR.get(code, 400),
                content=response.model_dump(mode="json"),
            )
        return response

    # =========================================================================
    # Catalog & health
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["System"])
    async def health_check() -> HealthResponse:
        return HealthResponse(status="healthy", service="gridwise", version=__version__)

    @app.get("/api/v1/catalog", response_model=CatalogResponse, tags=["Catalog"])
    async def get_catalog() -> CatalogResponse:
        """All card definitions and the incentive -> consumer map."""
        return api_service.get_catalog()

    # =========================================================================
    # Game Sessions
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameStateResponse,
        responses={500: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Start a new game session",
    )
    async def create_game(body: CreateGameRequest | None = None):
        seed = body.seed if body else None
        try:
            return api_service.create_game(seed=seed)
        except ValueError as e:
            logger.error("Could not create game: %s", e)
            return make_error_response(ErrorResponse(
                error=str(e), error_code=ErrorCode.CATALOG_INTEGRITY_ERROR,
            ))

    @app.get("/api/v1/games", response_model=SessionListResponse, tags=["Games"])
    async def list_games() -> SessionListResponse:
        sessions = api_service.list_games()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/games/{session_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
    )
    async def get_game(session_id: str):
        return respond(api_service.get_game(session_id))

    @app.delete("/api/v1/games/{session_id}", response_model=EndSessionResponse, tags=["Games"])
    async def end_game(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        success = api_service.end_game(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Moves
    # =========================================================================

    @app.post(
        "/api/v1/games/{session_id}/reset",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Moves"],
    )
    async def reset_game(session_id: str):
        return respond(api_service.reset(session_id))

    @app.post(
        "/api/v1/games/{session_id}/place",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}, 422: {"model": ActionResponse}},
        tags=["Moves"],
        summary="Place a shop card into a grid slot",
    )
    async def place_card(session_id: str, body: PlaceCardRequest):
        return respond(api_service.place_card(session_id, body.card_id, body.slot_kind, body.index))

    @app.post(
        "/api/v1/games/{session_id}/incentive",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}, 422: {"model": ActionResponse}},
        tags=["Moves"],
        summary="Play an incentive onto its matching consumer",
    )
    async def play_incentive(session_id: str, body: PlayIncentiveRequest):
        return respond(api_service.play_incentive(session_id, body.card_id))

    @app.post(
        "/api/v1/games/{session_id}/advance",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ActionResponse}},
        tags=["Moves"],
    )
    async def advance_turn(session_id: str):
        return respond(api_service.advance_turn(session_id))

    # =========================================================================
    # Queries
    # =========================================================================

    @app.get(
        "/api/v1/games/{session_id}/cards/{card_id}/placement",
        response_model=PlacementResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Queries"],
    )
    async def get_placement(session_id: str, card_id: str) -> Union[PlacementResponse, JSONResponse]:
        return respond(api_service.get_placement(session_id, card_id))

    @app.get(
        "/api/v1/games/{session_id}/cards/{card_id}/projection",
        response_model=ProjectionResponse,
        responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
        tags=["Queries"],
    )
    async def get_projection(
        session_id: str,
        card_id: str,
        index: Annotated[int, Query(description="Slot index")],
        slot_kind: Annotated[SlotKindParam, Query()] = SlotKindParam.GENERATOR,
    ) -> Union[ProjectionResponse, JSONResponse]:
        return respond(api_service.get_projection(session_id, card_id, slot_kind, index))

    return app
