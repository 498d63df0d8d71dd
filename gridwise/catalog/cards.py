"""
Card Definitions - Immutable card records and stat arithmetic.

Every card carries four signed stats, one per time of day:
- night, day, eve: demand windows
- flex: capacity to absorb swings

Generators are positive, consumers are pre-signed negative,
incentives can be either.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


STAT_TYPES = ("night", "day", "eve", "flex")


class CardCategory(str, Enum):
    """Card categories."""
    GENERATOR = "Generator"
    BIG_GENERATOR = "Big Generator"
    CONSUMER = "Consumer"
    INCENTIVE = "Incentive"

    @property
    def is_generator(self) -> bool:
        return self in (CardCategory.GENERATOR, CardCategory.BIG_GENERATOR)


@dataclass(frozen=True)
class StatTotals:
    """
    Aggregate stats for a grid (or the contribution of one card).

    A grid is stable when every component is non-negative.
    """
    night: int = 0
    day: int = 0
    eve: int = 0
    flex: int = 0

    @property
    def is_stable(self) -> bool:
        return self.night >= 0 and self.day >= 0 and self.eve >= 0 and self.flex >= 0

    def __add__(self, other: StatTotals) -> StatTotals:
        return StatTotals(
            night=self.night + other.night,
            day=self.day + other.day,
            eve=self.eve + other.eve,
            flex=self.flex + other.flex,
        )

    def __sub__(self, other: StatTotals) -> StatTotals:
        return StatTotals(
            night=self.night - other.night,
            day=self.day - other.day,
            eve=self.eve - other.eve,
            flex=self.flex - other.flex,
        )

    def as_dict(self) -> dict[str, int]:
        return {stat: getattr(self, stat) for stat in STAT_TYPES}


@dataclass(frozen=True)
class CardDefinition:
    """
    A card as printed in the catalog.

    Note: This is the definition, not a runtime instance.
    Instances on the grid or in the shop wrap a definition
    with an id and a face-down flag.
    """
    name: str
    category: CardCategory
    night: int = 0
    day: int = 0
    eve: int = 0
    flex: int = 0

    @property
    def stats(self) -> StatTotals:
        return StatTotals(night=self.night, day=self.day, eve=self.eve, flex=self.flex)

    @property
    def is_generator(self) -> bool:
        return self.category.is_generator

    @property
    def is_incentive(self) -> bool:
        return self.category == CardCategory.INCENTIVE

    @property
    def is_consumer(self) -> bool:
        return self.category == CardCategory.CONSUMER

    @property
    def enters_face_down(self) -> bool:
        """Big generators only start contributing on the turn after placement."""
        return self.category == CardCategory.BIG_GENERATOR
