"""
Tests for the placement validator.

Tests:
- Slot bounds
- Row/category fit
- Same-name replacement
- Incentive targeting
- Big generators entering face-down
- Query purity
- Projections and valid slots
"""

import pytest

from ..catalog.cards import StatTotals
from ..engine_core.action import RejectionCode
from ..engine_core.balance import compute_totals
from ..engine_core.placement import (
    apply_hypothetically,
    can_place,
    can_place_anywhere,
    check_placement,
    project_placement,
    valid_slots,
)
from ..engine_core.state import CardInstance, GridState, SlotKind

GEN = SlotKind.GENERATOR
CON = SlotKind.CONSUMER


def card(catalog, name, face_down=False):
    return CardInstance(catalog.get_card(name), f"test-{name}", face_down=face_down)


class TestSlotBounds:
    """Index must be on the grid."""

    @pytest.mark.parametrize("index", [-1, 8, 100])
    def test_out_of_range_index(self, catalog, balanced_state, index):
        solar = card(catalog, "Solar")
        grid = balanced_state.grid

        assert check_placement(grid, solar, GEN, index, catalog) == RejectionCode.INVALID_SLOT_INDEX
        assert not can_place(grid, solar, GEN, index, catalog)


class TestGeneratorPlacement:
    """Generators go in the generator row."""

    def test_empty_slot(self, catalog, balanced_state):
        """Solar in an empty slot: totals 6/5/4/1."""
        assert can_place(balanced_state.grid, card(catalog, "Solar"), GEN, 3, catalog)

    def test_replace_different_generator(self, catalog, balanced_state):
        """Solar replacing a Fossil is legal (4/3/2/0)."""
        assert can_place(balanced_state.grid, card(catalog, "Solar"), GEN, 0, catalog)

    def test_same_name_replacement_forbidden(self, catalog, balanced_state):
        """A Fossil cannot replace a Fossil, even though balance would hold."""
        grid = balanced_state.grid
        assert check_placement(grid, card(catalog, "Fossil"), GEN, 0, catalog) == (
            RejectionCode.ILLEGAL_PLACEMENT
        )
        assert not can_place(grid, card(catalog, "Tidal"), GEN, 2, catalog)

    def test_generator_cannot_go_in_consumer_row(self, catalog, balanced_state):
        assert not can_place(balanced_state.grid, card(catalog, "Solar"), CON, 4, catalog)

    def test_addition_rejected_when_flex_at_zero(self, catalog, tight_state):
        """Totals 4/3/5/0: adding Solar would take flex to -1."""
        grid = tight_state.grid
        assert compute_totals(grid).flex == 0
        assert check_placement(grid, card(catalog, "Solar"), GEN, 2, catalog) == (
            RejectionCode.ILLEGAL_PLACEMENT
        )

    def test_replacement_accepted_when_addition_is_not(self, catalog, tight_state):
        """Solar replacing Wind keeps flex at 0 (3/6/3/0)."""
        assert can_place(tight_state.grid, card(catalog, "Solar"), GEN, 0, catalog)

    def test_solar_rejected_on_zero_grid(self, catalog):
        """Balanced at exactly zero: any flex drain is illegal."""
        grid = GridState.empty(8)
        assert not can_place(grid, card(catalog, "Solar"), GEN, 0, catalog)


class TestBigGeneratorPlacement:
    """Big generators enter face-down and don't count until next turn."""

    def test_enters_face_down(self, catalog, balanced_state):
        nuclear = card(catalog, "Nuclear")
        grid = apply_hypothetically(balanced_state.grid, nuclear, GEN, 3)

        assert grid.generators[3].face_down
        assert compute_totals(grid) == compute_totals(balanced_state.grid)

    def test_empty_slot_always_legal_on_stable_grid(self, catalog, balanced_state):
        assert can_place(balanced_state.grid, card(catalog, "Hydro"), GEN, 5, catalog)

    def test_replacing_fossil_loses_its_output_this_turn(self, catalog, balanced_state):
        """Nuclear over a Fossil: the Fossil is gone but Nuclear isn't online (3/-1/1/1)."""
        assert not can_place(balanced_state.grid, card(catalog, "Nuclear"), GEN, 0, catalog)

    def test_regular_generator_enters_face_up(self, catalog, balanced_state):
        grid = apply_hypothetically(balanced_state.grid, card(catalog, "Wind"), GEN, 3)
        assert not grid.generators[3].face_down


class TestIncentivePlacement:
    """Incentives upgrade exactly one consumer in place."""

    def test_on_matching_consumer(self, catalog, balanced_state):
        """LED Lights over Lights: 5/2/4/2."""
        grid = balanced_state.grid
        led = card(catalog, "LED Lights")

        assert can_place(grid, led, CON, 2, catalog)
        upgraded = apply_hypothetically(grid, led, CON, 2)
        assert upgraded.consumers[2].name == "LED Lights"
        assert compute_totals(upgraded) == StatTotals(5, 2, 4, 2)

    def test_on_mismatched_consumer(self, catalog, balanced_state):
        assert check_placement(balanced_state.grid, card(catalog, "LED Lights"), CON, 0, catalog) == (
            RejectionCode.ILLEGAL_PLACEMENT
        )

    def test_on_empty_consumer_slot(self, catalog, balanced_state):
        assert not can_place(balanced_state.grid, card(catalog, "LED Lights"), CON, 6, catalog)

    def test_on_generator_row(self, catalog, balanced_state):
        assert not can_place(balanced_state.grid, card(catalog, "LED Lights"), GEN, 3, catalog)

    def test_incentive_cannot_replace_itself(self, catalog, balanced_state):
        grid = apply_hypothetically(balanced_state.grid, card(catalog, "LED Lights"), CON, 2)
        assert not can_place(grid, card(catalog, "LED Lights"), CON, 2, catalog)

    def test_consumer_cards_are_never_placeable(self, catalog, balanced_state):
        lights = card(catalog, "Lights")
        assert not can_place(balanced_state.grid, lights, CON, 2, catalog)
        assert not can_place_anywhere(balanced_state.grid, lights, catalog)

    def test_incentive_over_face_down_consumer_replaces_zero(self, catalog, balanced_state):
        """Heating is face-down (contributes 0); Heat Pumps lands face-up: 4/1/2/3."""
        grid = apply_hypothetically(balanced_state.grid, card(catalog, "Heat Pumps"), CON, 3)
        assert not grid.consumers[3].face_down
        assert compute_totals(grid) == StatTotals(4, 1, 2, 3)


class TestCanPlaceAnywhere:
    """Tests for can_place_anywhere and valid_slots."""

    def test_generator_valid_slots(self, catalog, tight_state):
        """Solar only fits in place of Wind."""
        # Replace Fossil: 4-2+1, 3-2+4, 5-2+1, 0-1-1 -> flex -2
        assert valid_slots(tight_state.grid, card(catalog, "Solar"), catalog) == [0]
        assert can_place_anywhere(tight_state.grid, card(catalog, "Solar"), catalog)

    def test_same_name_slots_skipped(self, catalog, balanced_state):
        slots = valid_slots(balanced_state.grid, card(catalog, "Fossil"), catalog)
        assert 0 not in slots and 1 not in slots
        assert 3 in slots

    def test_generator_nowhere(self, catalog):
        grid = GridState.empty(4)
        assert valid_slots(grid, card(catalog, "Wind"), catalog) == []
        assert not can_place_anywhere(grid, card(catalog, "Wind"), catalog)

    def test_incentive_with_consumer(self, catalog, balanced_state):
        assert valid_slots(balanced_state.grid, card(catalog, "Passive Cooling"), catalog) == [1]

    def test_incentive_without_consumer(self, catalog, balanced_state):
        """No Industry on the grid, so Smart Industry has no target."""
        assert not can_place_anywhere(balanced_state.grid, card(catalog, "Smart Industry"), catalog)


class TestQueryPurity:
    """Queries never change the grid and always agree with themselves."""

    def test_repeated_queries_identical(self, catalog, balanced_state):
        grid = balanced_state.grid
        snapshot = GridState(generators=grid.generators, consumers=grid.consumers)

        for name in ["Solar", "Wind", "Tidal", "Fossil", "Hydro", "Nuclear", "LED Lights"]:
            c = card(catalog, name)
            first = [can_place(grid, c, kind, i, catalog) for kind in SlotKind for i in range(8)]
            second = [can_place(grid, c, kind, i, catalog) for kind in SlotKind for i in range(8)]
            assert first == second
            assert can_place_anywhere(grid, c, catalog) == can_place_anywhere(grid, c, catalog)

        assert grid == snapshot

    def test_apply_hypothetically_returns_new_grid(self, catalog, balanced_state):
        grid = balanced_state.grid
        new_grid = apply_hypothetically(grid, card(catalog, "Solar"), GEN, 3)

        assert new_grid is not grid
        assert grid.generators[3] is None
        assert new_grid.consumers is grid.consumers


class TestProjection:
    """Tests for project_placement."""

    def test_legal_projection(self, catalog, balanced_state):
        projection = project_placement(balanced_state.grid, card(catalog, "Solar"), GEN, 3, catalog)

        assert projection.legal
        assert projection.current == StatTotals(5, 1, 3, 2)
        assert projection.projected == StatTotals(6, 5, 4, 1)
        assert projection.delta == StatTotals(1, 4, 1, -1)

    def test_illegal_projection_still_reports_totals(self, catalog, tight_state):
        projection = project_placement(tight_state.grid, card(catalog, "Solar"), GEN, 2, catalog)

        assert not projection.legal
        assert projection.projected.flex == -1

    def test_out_of_range_projection(self, catalog, balanced_state):
        projection = project_placement(balanced_state.grid, card(catalog, "Solar"), GEN, 9, catalog)
        assert not projection.legal
        assert projection.projected == projection.current
