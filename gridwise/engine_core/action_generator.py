"""
Action Generator - Enumerates every legal move from a game state.

Used by:
1. Renderers to decide what is selectable/highlighted
2. Solvers and tests to walk the game tree
3. Validation (is this action in legal_actions?)

Generates fully-specified Action objects, not just action types.
"""

from __future__ import annotations

from ..catalog.catalog import CardCatalog
from .action import Action
from .placement import incentive_target, valid_slots
from .state import GamePhase, GameState, SlotKind


def legal_actions(catalog: CardCatalog, state: GameState) -> list[Action]:
    """
    All legal actions for the state.

    Placements come first, in shop order; advancing the turn is always
    available while the game is in play.
    """
    if state.phase != GamePhase.PLAYING:
        return []

    actions = []
    for card in state.playable_shop():
        if card.definition.is_generator:
            for index in valid_slots(state.grid, card, catalog):
                actions.append(Action.place_card(card.instance_id, SlotKind.GENERATOR, index))
        elif card.definition.is_incentive:
            if valid_slots(state.grid, card, catalog):
                actions.append(Action.play_incentive(card.instance_id))

    actions.append(Action.advance_turn())
    return actions


def selectable_cards(catalog: CardCatalog, state: GameState) -> dict[str, bool]:
    """Shop card id -> whether it can be placed anywhere right now."""
    selectable = {}
    for card in state.shop:
        selectable[card.instance_id] = (
            state.phase == GamePhase.PLAYING
            and not card.face_down
            and bool(valid_slots(state.grid, card, catalog))
        )
    return selectable


def incentive_targets(catalog: CardCatalog, state: GameState) -> dict[str, int | None]:
    """Incentive shop id -> consumer slot it would upgrade (None if absent)."""
    return {
        card.instance_id: incentive_target(state.grid, card, catalog)
        for card in state.shop
        if card.definition.is_incentive
    }
