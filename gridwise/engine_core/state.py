"""
Game State - Immutable snapshot of a game.

Design principles:
- Immutable: every mutation returns a new state
- Structural copies only: speculative placements copy the two slot
  tuples, never the whole object graph
- Safe to hand to a renderer: nothing it holds can be mutated in place
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum

from ..catalog.cards import CardCategory, CardDefinition, StatTotals
from ..config import FOSSIL_NAME


class GamePhase(Enum):
    """High-level game phases."""
    SETUP = "setup"
    PLAYING = "playing"
    WON = "won"


class SlotKind(str, Enum):
    """The two rows of the grid."""
    GENERATOR = "generator"
    CONSUMER = "consumer"


@dataclass(frozen=True)
class CardInstance:
    """
    A card on the grid or in the shop.

    Note: This is a runtime instance, not the definition.
    A face-down card occupies its slot but contributes nothing.
    """
    definition: CardDefinition
    instance_id: str
    face_down: bool = False

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def category(self) -> CardCategory:
        return self.definition.category

    @property
    def stats(self) -> StatTotals:
        return self.definition.stats

    @property
    def contribution(self) -> StatTotals:
        """What this card adds to the grid totals right now."""
        if self.face_down:
            return StatTotals()
        return self.definition.stats

    def flipped(self, face_down: bool) -> CardInstance:
        if self.face_down == face_down:
            return self
        return replace(self, face_down=face_down)


Slot = CardInstance | None


@dataclass(frozen=True)
class GridState:
    """
    The two fixed-length rows of the board.

    A slot holds at most one card. Consumer slots are dealt once and
    never emptied; generator slots can be replaced repeatedly.
    """
    generators: tuple[Slot, ...]
    consumers: tuple[Slot, ...]

    @classmethod
    def empty(cls, size: int) -> GridState:
        return cls(generators=(None,) * size, consumers=(None,) * size)

    @property
    def size(self) -> int:
        return len(self.generators)

    def slots(self, kind: SlotKind) -> tuple[Slot, ...]:
        if kind == SlotKind.GENERATOR:
            return self.generators
        return self.consumers

    def get(self, kind: SlotKind, index: int) -> Slot:
        return self.slots(kind)[index]

    def with_slot(self, kind: SlotKind, index: int, card: Slot) -> GridState:
        """Return new grid with one slot replaced."""
        row = list(self.slots(kind))
        row[index] = card
        if kind == SlotKind.GENERATOR:
            return GridState(generators=tuple(row), consumers=self.consumers)
        return GridState(generators=self.generators, consumers=tuple(row))

    def cards(self) -> list[CardInstance]:
        """All occupied slots, generators first."""
        return [c for c in self.generators + self.consumers if c is not None]

    def find_consumer(self, name: str) -> int | None:
        """Index of the first consumer slot whose occupant has the given name."""
        for index, card in enumerate(self.consumers):
            if card is not None and card.name == name:
                return index
        return None

    def has_fossil(self) -> bool:
        return any(c is not None and c.name == FOSSIL_NAME for c in self.generators)


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str
    phase: GamePhase = GamePhase.SETUP
    turn: int = 0
    grid: GridState = field(default_factory=lambda: GridState.empty(0))
    shop: tuple[CardInstance, ...] = ()

    @property
    def game_won(self) -> bool:
        return self.phase == GamePhase.WON

    def shop_card(self, card_id: str) -> CardInstance | None:
        """Find a shop item by its id."""
        for card in self.shop:
            if card.instance_id == card_id:
                return card
        return None

    def playable_shop(self) -> list[CardInstance]:
        """Shop items that are face-up and can be bought this turn."""
        return [card for card in self.shop if not card.face_down]

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
