"""
API Module - HTTP interface for renderers.

Exposes the engine via REST. A renderer:
1. Creates a game session
2. Reads the state snapshot (grid, shop, totals)
3. Asks where a card can go / previews the totals
4. Submits placements, incentives and turn advances

All state is session-scoped. Nothing is persisted.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    PlaceCardRequest,
    PlayIncentiveRequest,
    # Responses
    GameStateResponse,
    ActionResponse,
    PlacementResponse,
    ProjectionResponse,
    CatalogResponse,
    ErrorResponse,
    # Shared
    CardInfo,
    ShopCardInfo,
    GridInfo,
    TotalsInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "PlaceCardRequest",
    "PlayIncentiveRequest",
    # Responses
    "GameStateResponse",
    "ActionResponse",
    "PlacementResponse",
    "ProjectionResponse",
    "CatalogResponse",
    "ErrorResponse",
    # Shared
    "CardInfo",
    "ShopCardInfo",
    "GridInfo",
    "TotalsInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
