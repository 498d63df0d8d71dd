"""
Reducer - Applies actions to game state.

The reducer is the single point of state transition for a game in play.
All placements and turn advances go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying
- Returns ActionResult with success/failure; never raises for a bad move
- The input state is never modified, so a rejection leaves it intact
"""

from __future__ import annotations
from dataclasses import dataclass, replace
import logging

from ..catalog.catalog import CardCatalog
from .action import Action, ActionType, ActionResult, RejectionCode
from .placement import apply_hypothetically, check_placement, incentive_target
from .shop import recompose_shop
from .state import CardInstance, GamePhase, GameState, GridState, SlotKind

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    The catalog provides the incentive map and shop contents.
    """
    catalog: CardCatalog

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or rejection.
        """
        rejection = self._validate_action(state, action)
        if rejection:
            return rejection

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=RejectionCode.ILLEGAL_PLACEMENT,
            )

        result = handler(state, action)
        if not result.success:
            logger.debug("Rejected %s: %s", action.describe(), result.error)
        return result

    def _validate_action(self, state: GameState, action: Action) -> ActionResult | None:
        """Phase checks shared by every action."""
        if state.phase == GamePhase.WON:
            return ActionResult.failure(
                "Game is already won - no further moves",
                error_code=RejectionCode.GAME_ALREADY_WON,
            )
        if state.phase == GamePhase.SETUP:
            return ActionResult.failure(
                "Game not started - reset first",
                error_code=RejectionCode.GAME_NOT_STARTED,
            )
        return None

    def _get_handler(self, action_type: ActionType):
        handlers = {
            ActionType.PLACE_CARD: self._handle_place_card,
            ActionType.PLAY_INCENTIVE: self._handle_play_incentive,
            ActionType.ADVANCE_TURN: self._handle_advance_turn,
        }
        return handlers.get(action_type)

    def _shop_card(self, state: GameState, card_id: str | None) -> CardInstance | ActionResult:
        card = state.shop_card(card_id) if card_id else None
        if card is None:
            return ActionResult.failure(
                f"Card {card_id} is not in the shop",
                error_code=RejectionCode.UNKNOWN_CARD,
            )
        if card.face_down:
            return ActionResult.failure(
                f"{card.name} is not available until its consumer is revealed",
                error_code=RejectionCode.ILLEGAL_PLACEMENT,
            )
        return card

    def _handle_place_card(self, state: GameState, action: Action) -> ActionResult:
        """Handle placing a shop card into an explicit slot."""
        card = self._shop_card(state, action.payload.card_id)
        if isinstance(card, ActionResult):
            return card

        slot_kind = action.payload.slot_kind
        index = action.payload.slot_index
        if slot_kind is None or index is None:
            return ActionResult.failure(
                "Placement needs a slot kind and index",
                error_code=RejectionCode.INVALID_SLOT_INDEX,
            )

        code = check_placement(state.grid, card, slot_kind, index, self.catalog)
        if code == RejectionCode.INVALID_SLOT_INDEX:
            return ActionResult.failure(
                f"Slot index {index} is outside the grid (size {state.grid.size})",
                error_code=code,
            )
        if code:
            return ActionResult.failure(
                f"Invalid placement! {card.name} cannot go in {slot_kind.value} slot {index}",
                error_code=code,
            )

        placed = _placed_instance(state, card, slot_kind, index)
        new_grid = apply_hypothetically(state.grid, placed, slot_kind, index)
        change = f"Placed {card.name} in {slot_kind.value} slot {index}"
        if card.definition.enters_face_down:
            change += " (comes online next turn)"
        return self._commit(state, new_grid, card, change)

    def _handle_play_incentive(self, state: GameState, action: Action) -> ActionResult:
        """Handle playing an incentive onto its matching consumer."""
        card = self._shop_card(state, action.payload.card_id)
        if isinstance(card, ActionResult):
            return card

        if not card.definition.is_incentive:
            return ActionResult.failure(
                f"{card.name} is not an incentive",
                error_code=RejectionCode.ILLEGAL_PLACEMENT,
            )

        index = incentive_target(state.grid, card, self.catalog)
        if index is None:
            target = self.catalog.matching_consumer_for(card.name)
            return ActionResult.failure(
                f"No {target} found on grid for {card.name}",
                error_code=RejectionCode.NO_MATCHING_CONSUMER,
            )

        code = check_placement(state.grid, card, SlotKind.CONSUMER, index, self.catalog)
        if code:
            return ActionResult.failure(
                f"Cannot play {card.name} - would make grid unstable!",
                error_code=code,
            )

        replaced = state.grid.consumers[index]
        placed = _placed_instance(state, card, SlotKind.CONSUMER, index)
        new_grid = apply_hypothetically(state.grid, placed, SlotKind.CONSUMER, index)
        return self._commit(
            state, new_grid, card, f"Upgraded {replaced.name} with {card.name}"
        )

    def _commit(
        self,
        state: GameState,
        new_grid: GridState,
        card: CardInstance,
        change: str,
    ) -> ActionResult:
        """Write a legal placement: drop the card from the shop, recompose, check for a win."""
        shop = tuple(c for c in state.shop if c.instance_id != card.instance_id)
        new_state = state._copy_with(grid=new_grid, shop=shop)
        new_state = new_state._copy_with(shop=recompose_shop(new_grid, self.catalog))

        changes = [change]
        new_state = self._evaluate_win(new_state, changes)

        return ActionResult.success_with_state(
            new_state,
            changes=changes,
            advance_pending=not new_state.game_won,
        )

    def _handle_advance_turn(self, state: GameState, action: Action) -> ActionResult:
        """
        Advance to the next turn.

        1. Reveal the lowest-index face-down consumer, then recompose the shop
        2. Flip every face-down generator (big generators come online)
        3. Re-check the win condition
        """
        turn = state.turn + 1
        changes = [f"Turn {turn} started"]

        grid = state.grid
        shop = state.shop
        for index, consumer in enumerate(grid.consumers):
            if consumer is not None and consumer.face_down:
                grid = grid.with_slot(SlotKind.CONSUMER, index, consumer.flipped(False))
                shop = recompose_shop(grid, self.catalog)
                changes.append(f"Revealed {consumer.name}")
                break

        for index, generator in enumerate(grid.generators):
            if generator is not None and generator.face_down:
                grid = grid.with_slot(SlotKind.GENERATOR, index, generator.flipped(False))
                changes.append(f"{generator.name} is now online")

        new_state = state._copy_with(turn=turn, grid=grid, shop=shop)
        new_state = self._evaluate_win(new_state, changes)
        return ActionResult.success_with_state(new_state, changes=changes)

    def _evaluate_win(self, state: GameState, changes: list[str]) -> GameState:
        if state.grid.has_fossil():
            return state
        logger.info("Game %s won on turn %d", state.game_id, state.turn)
        changes.append("Every Fossil generator has been replaced - grid decarbonised!")
        return state._copy_with(phase=GamePhase.WON)


def apply_action(catalog: CardCatalog, state: GameState, action: Action) -> ActionResult:
    """Convenience function to apply an action."""
    return Reducer(catalog=catalog).apply(state, action)


def _placed_instance(
    state: GameState,
    card: CardInstance,
    slot_kind: SlotKind,
    index: int,
) -> CardInstance:
    """Grid copy of a shop card, with an id naming the turn and slot it went into."""
    return replace(card, instance_id=f"{card.instance_id}-t{state.turn}-{slot_kind.value}{index}")
