"""
Placement Validator - Decides whether a card may go into a slot.

This is the sole gatekeeper of the balance invariant. Every check runs
against a hypothetical copy of the grid built by apply_hypothetically();
the grid passed in is never touched, so these functions are safe to call
speculatively (hover previews, highlighting, move enumeration).

Rules, in order:
1. Slot index must be on the grid
2. Card category must fit the row (generators below, incentives on consumers)
3. A generator may not replace a generator of the same name
4. An incentive may not replace an incentive of the same name
5. An incentive may only land on the consumer it is mapped to
6. The hypothetical grid (big generators face-down) must stay stable
"""

from __future__ import annotations
from dataclasses import dataclass

from ..catalog.cards import StatTotals
from ..catalog.catalog import CardCatalog
from .action import RejectionCode
from .balance import compute_totals
from .state import CardInstance, GridState, SlotKind


@dataclass(frozen=True)
class Projection:
    """Totals before and after a hypothetical placement."""
    current: StatTotals
    projected: StatTotals
    legal: bool

    @property
    def delta(self) -> StatTotals:
        return self.projected - self.current


def apply_hypothetically(
    grid: GridState,
    card: CardInstance,
    slot_kind: SlotKind,
    index: int,
) -> GridState:
    """
    Return the grid that would result from placing card at slot.

    Big generators enter face-down; everything else is immediately visible.
    """
    placed = card.flipped(card.definition.enters_face_down)
    return grid.with_slot(slot_kind, index, placed)


def check_placement(
    grid: GridState,
    card: CardInstance,
    slot_kind: SlotKind,
    index: int,
    catalog: CardCatalog,
) -> RejectionCode | None:
    """
    Validate a placement.

    Returns the rejection code if illegal, None if legal.
    """
    if index < 0 or index >= grid.size:
        return RejectionCode.INVALID_SLOT_INDEX

    definition = card.definition
    existing = grid.get(slot_kind, index)

    if definition.is_generator:
        if slot_kind != SlotKind.GENERATOR:
            return RejectionCode.ILLEGAL_PLACEMENT
        if existing is not None and existing.name == card.name:
            return RejectionCode.ILLEGAL_PLACEMENT
    elif definition.is_incentive:
        if slot_kind != SlotKind.CONSUMER:
            return RejectionCode.ILLEGAL_PLACEMENT
        if existing is not None and existing.name == card.name:
            return RejectionCode.ILLEGAL_PLACEMENT
        target = catalog.matching_consumer_for(card.name)
        if existing is None or target is None or existing.name != target:
            return RejectionCode.ILLEGAL_PLACEMENT
    else:
        # Consumers are only ever dealt at setup
        return RejectionCode.ILLEGAL_PLACEMENT

    hypothetical = apply_hypothetically(grid, card, slot_kind, index)
    if not compute_totals(hypothetical).is_stable:
        return RejectionCode.ILLEGAL_PLACEMENT

    return None


def can_place(
    grid: GridState,
    card: CardInstance,
    slot_kind: SlotKind,
    index: int,
    catalog: CardCatalog,
) -> bool:
    return check_placement(grid, card, slot_kind, index, catalog) is None


def incentive_target(grid: GridState, card: CardInstance, catalog: CardCatalog) -> int | None:
    """Consumer slot an incentive would upgrade, if its consumer is on the grid."""
    target = catalog.matching_consumer_for(card.name)
    if target is None:
        return None
    return grid.find_consumer(target)


def valid_slots(grid: GridState, card: CardInstance, catalog: CardCatalog) -> list[int]:
    """
    All slot indices where the card could legally go.

    Generators list generator-row indices (same-name slots skipped),
    incentives list at most their one matching consumer slot.
    """
    if card.definition.is_generator:
        return [
            index
            for index, existing in enumerate(grid.generators)
            if (existing is None or existing.name != card.name)
            and can_place(grid, card, SlotKind.GENERATOR, index, catalog)
        ]
    if card.definition.is_incentive:
        index = incentive_target(grid, card, catalog)
        if index is not None and can_place(grid, card, SlotKind.CONSUMER, index, catalog):
            return [index]
    return []


def can_place_anywhere(grid: GridState, card: CardInstance, catalog: CardCatalog) -> bool:
    return len(valid_slots(grid, card, catalog)) > 0


def project_placement(
    grid: GridState,
    card: CardInstance,
    slot_kind: SlotKind,
    index: int,
    catalog: CardCatalog,
) -> Projection:
    """Preview the totals a placement would produce, legal or not."""
    current = compute_totals(grid)
    if index < 0 or index >= grid.size:
        return Projection(current=current, projected=current, legal=False)
    hypothetical = apply_hypothetically(grid, card, slot_kind, index)
    return Projection(
        current=current,
        projected=compute_totals(hypothetical),
        legal=can_place(grid, card, slot_kind, index, catalog),
    )
