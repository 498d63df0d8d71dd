"""
Balance Calculator - Aggregate stats for a grid.

Face-down cards (big generators awaiting activation, unrevealed
consumers) occupy slots but are left out of the sums entirely.
"""

from __future__ import annotations

from ..catalog.cards import StatTotals
from .state import GridState


def compute_totals(grid: GridState) -> StatTotals:
    """Sum the face-up contribution of every occupied slot."""
    totals = StatTotals()
    for card in grid.cards():
        totals = totals + card.contribution
    return totals


def is_stable(grid: GridState) -> bool:
    """True when all four totals are non-negative."""
    return compute_totals(grid).is_stable
