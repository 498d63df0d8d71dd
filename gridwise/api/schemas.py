"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a renderer and the engine.
The renderer never sees engine objects, only these snapshots.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has been ended
- UNKNOWN_CARD: Card id is not in the current shop
- INVALID_SLOT_INDEX: Slot index outside the grid
- ILLEGAL_PLACEMENT: Placement breaks a rule or the balance
- NO_MATCHING_CONSUMER: Incentive has no consumer to upgrade
- GAME_ALREADY_WON: Move attempted after the game was won
- GAME_NOT_STARTED: Move attempted before the first deal
- CATALOG_INTEGRITY_ERROR: Card data is inconsistent
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    WON = "won"
    ENDED = "ended"


class SlotKindParam(str, Enum):
    """Grid rows."""
    GENERATOR = "generator"
    CONSUMER = "consumer"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    UNKNOWN_CARD = "UNKNOWN_CARD"
    INVALID_SLOT_INDEX = "INVALID_SLOT_INDEX"
    ILLEGAL_PLACEMENT = "ILLEGAL_PLACEMENT"
    NO_MATCHING_CONSUMER = "NO_MATCHING_CONSUMER"
    GAME_ALREADY_WON = "GAME_ALREADY_WON"
    GAME_NOT_STARTED = "GAME_NOT_STARTED"
    CATALOG_INTEGRITY_ERROR = "CATALOG_INTEGRITY_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class TotalsInfo(BaseModel):
    """Aggregate stats. Stable when all four are >= 0."""
    night: int = 0
    day: int = 0
    eve: int = 0
    flex: int = 0

    model_config = {"from_attributes": True}


class CardInfo(BaseModel):
    """Card information for display."""
    card_id: str
    name: str
    category: str = Field(description="Generator, Big Generator, Consumer, Incentive")
    night: int
    day: int
    eve: int
    flex: int
    face_down: bool = False


class GridInfo(BaseModel):
    """Both rows of the grid; empty slots are null."""
    generators: list[Optional[CardInfo]]
    consumers: list[Optional[CardInfo]]


class ShopCardInfo(CardInfo):
    """A shop card plus whether it can be placed anywhere right now."""
    selectable: bool = False
    target_slot: Optional[int] = Field(
        None, description="For incentives: the consumer slot it would upgrade"
    )


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to start a new game session."""
    seed: Optional[int] = Field(None, description="Seed for a reproducible consumer shuffle")


class PlaceCardRequest(BaseModel):
    """Place a shop card into a grid slot."""
    card_id: str
    slot_kind: SlotKindParam = SlotKindParam.GENERATOR
    index: int = Field(..., description="Slot index, 0-based")


class PlayIncentiveRequest(BaseModel):
    """Play an incentive onto its matching consumer."""
    card_id: str


# =============================================================================
# Response Models
# =============================================================================

class GameStateResponse(BaseModel):
    """Complete game state snapshot."""
    session_id: str
    status: SessionStatus
    game_id: str
    phase: str
    turn: int
    game_won: bool
    grid: GridInfo
    shop: list[ShopCardInfo] = Field(default_factory=list)
    totals: TotalsInfo
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """Result of a mutation. On rejection the state is unchanged."""
    session_id: str
    success: bool
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    changes: list[str] = Field(default_factory=list)
    advance_scheduled: bool = Field(
        False, description="True if the turn will advance on its own shortly"
    )
    game_state: Optional[GameStateResponse] = None


class PlacementResponse(BaseModel):
    """Where a shop card could go."""
    session_id: str
    card_id: str
    can_place_anywhere: bool
    valid_slots: list[int] = Field(default_factory=list)
    slot_kind: Optional[SlotKindParam] = None


class ProjectionResponse(BaseModel):
    """Totals before and after a hypothetical placement."""
    session_id: str
    card_id: str
    slot_kind: SlotKindParam
    index: int
    legal: bool
    current: TotalsInfo
    projected: TotalsInfo
    delta: TotalsInfo


class CatalogCardInfo(BaseModel):
    """A catalog entry."""
    name: str
    category: str
    night: int
    day: int
    eve: int
    flex: int
    matching_consumer: Optional[str] = None


class CatalogResponse(BaseModel):
    """The card catalog and incentive map."""
    cards: list[CatalogCardInfo]
    incentive_map: dict[str, str]


class SessionListResponse(BaseModel):
    """Response listing sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None
    api_version: str = "v1"
