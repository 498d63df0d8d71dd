"""
Engine Core - Rules, state, and turn progression.

The engine is the runtime that:
1. Holds an immutable GameState
2. Computes balance totals
3. Validates placements against the balance invariant
4. Recomposes the shop from the grid
5. Applies actions via the reducer
6. Advances turns (automatically after a placement)
"""

from .state import GameState, GamePhase, GridState, CardInstance, SlotKind
from .action import Action, ActionType, ActionPayload, ActionResult, RejectionCode
from .balance import compute_totals, is_stable
from .placement import (
    Projection,
    apply_hypothetically,
    can_place,
    can_place_anywhere,
    check_placement,
    project_placement,
    valid_slots,
)
from .shop import recompose_shop
from .reducer import Reducer, apply_action
from .action_generator import legal_actions
from .turn_scheduler import TurnScheduler
from .engine import GameEngine

__all__ = [
    "GameState",
    "GamePhase",
    "GridState",
    "CardInstance",
    "SlotKind",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "RejectionCode",
    "compute_totals",
    "is_stable",
    "Projection",
    "apply_hypothetically",
    "can_place",
    "can_place_anywhere",
    "check_placement",
    "project_placement",
    "valid_slots",
    "recompose_shop",
    "Reducer",
    "apply_action",
    "legal_actions",
    "TurnScheduler",
    "GameEngine",
]
