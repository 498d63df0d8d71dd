"""
Action System - Actions, payloads, and results.

Actions represent the three ways a game in play can change:
1. Place a card into a slot
2. Play an incentive onto its consumer
3. Advance the turn

Every change after the deal flows through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .state import SlotKind


class ActionType(Enum):
    """Types of actions in the system."""
    PLACE_CARD = "place_card"
    PLAY_INCENTIVE = "play_incentive"
    ADVANCE_TURN = "advance_turn"


class RejectionCode(str, Enum):
    """Why an action was rejected. State is always left unchanged."""
    INVALID_SLOT_INDEX = "INVALID_SLOT_INDEX"
    ILLEGAL_PLACEMENT = "ILLEGAL_PLACEMENT"
    NO_MATCHING_CONSUMER = "NO_MATCHING_CONSUMER"
    GAME_ALREADY_WON = "GAME_ALREADY_WON"
    CATALOG_INTEGRITY_ERROR = "CATALOG_INTEGRITY_ERROR"
    UNKNOWN_CARD = "UNKNOWN_CARD"
    GAME_NOT_STARTED = "GAME_NOT_STARTED"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Validation happens in the reducer.
    """
    card_id: str | None = None
    slot_kind: SlotKind | None = None
    slot_index: int | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are validated before application and applied
    atomically by the reducer.
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def place_card(cls, card_id: str, slot_kind: SlotKind | str, index: int) -> Action:
        """Factory for placing a shop card into a slot."""
        return cls(
            action_type=ActionType.PLACE_CARD,
            payload=ActionPayload(card_id=card_id, slot_kind=SlotKind(slot_kind), slot_index=index),
        )

    @classmethod
    def play_incentive(cls, card_id: str) -> Action:
        """Factory for playing an incentive onto its consumer."""
        return cls(
            action_type=ActionType.PLAY_INCENTIVE,
            payload=ActionPayload(card_id=card_id),
        )

    @classmethod
    def advance_turn(cls) -> Action:
        return cls(action_type=ActionType.ADVANCE_TURN)

    def describe(self) -> str:
        p = self.payload
        if self.action_type == ActionType.PLACE_CARD:
            return f"place {p.card_id} at {p.slot_kind.value}[{p.slot_index}]"
        if self.action_type == ActionType.PLAY_INCENTIVE:
            return f"play incentive {p.card_id}"
        return self.action_type.value


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Rejection reason (if failed)
    - Human-readable changes for the UI
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: RejectionCode | None = None

    state_changes: list[str] = field(default_factory=list)

    # Set when a placement succeeded and the turn should advance on its own
    advance_pending: bool = False

    @classmethod
    def failure(cls, error: str, error_code: RejectionCode | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        advance_pending: bool = False,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            advance_pending=advance_pending,
        )
