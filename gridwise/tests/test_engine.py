"""
Tests for the game engine and turn scheduler.

Tests:
- Dealing a new game
- Mutators and queries on a live game
- The automatic turn advance (timing, replacement, cancel, reset)
- Catalog failures on reset
- A random walk over legal actions
"""

import random
import threading
import time

import pytest

from ..catalog.cards import StatTotals
from ..catalog.catalog import CardCatalog
from ..catalog.validation import CatalogIntegrityError
from ..config import GameConfig
from ..engine_core.action import ActionType, RejectionCode
from ..engine_core.balance import is_stable
from ..engine_core.engine import GameEngine
from ..engine_core.state import GamePhase
from ..engine_core.turn_scheduler import TurnScheduler
from ..games.energy.cards import ENERGY_CARDS, INCENTIVE_MAP


def wait_for(predicate, timeout=2.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


class TestNewGame:
    """Tests for reset() with the standard deal."""

    @pytest.fixture
    def engine(self, catalog, config):
        engine = GameEngine(catalog=catalog, config=config, rng=random.Random(7))
        yield engine
        engine.close()

    def test_starts_unstarted(self, engine):
        assert engine.get_state().phase == GamePhase.SETUP
        result = engine.place_card("shop-0", "generator", 4)
        assert result.error_code == RejectionCode.GAME_NOT_STARTED

    def test_initial_deal(self, engine):
        result = engine.reset()
        state = engine.get_state()

        assert result.success
        assert state.phase == GamePhase.PLAYING
        assert state.turn == 1
        assert [c.name for c in state.grid.generators[:4]] == ["Fossil"] * 4
        assert all(c is None for c in state.grid.generators[4:])

    def test_initial_consumers(self, engine):
        engine.reset()
        consumers = engine.get_state().grid.consumers

        assert all(c is not None for c in consumers)
        assert [c.face_down for c in consumers] == [False] * 4 + [True] * 4
        assert len({c.name for c in consumers}) == 8

    def test_initial_shop(self, engine):
        engine.reset()
        shop = engine.get_state().shop

        assert [c.name for c in shop[:6]] == ["Solar", "Wind", "Tidal", "Fossil", "Hydro", "Nuclear"]
        assert not any(c.definition.is_consumer for c in shop)

    def test_same_seed_same_deal(self, catalog, config):
        first = GameEngine(catalog=catalog, config=config, rng=random.Random(11))
        second = GameEngine(catalog=catalog, config=config, rng=random.Random(11))
        first.reset()
        second.reset()

        assert first.get_state().grid == second.get_state().grid

    def test_reset_discards_game(self, engine):
        engine.reset()
        first_id = engine.get_state().game_id
        generation = engine.generation

        engine.reset()

        assert engine.get_state().game_id != first_id
        assert engine.generation == generation + 1
        assert engine.get_state().turn == 1


class TestEngineMoves:
    """Mutators and queries against a hand-built game."""

    def test_place_and_advance_synchronously(self, engine_for, balanced_state):
        engine = engine_for(balanced_state)

        result = engine.place_card("shop-0", "generator", 3)

        assert result.success
        assert engine.get_state().turn == 2
        assert not engine.scheduler.pending
        # Solar in, Heating revealed
        assert engine.totals() == StatTotals(5, 5, 2, 1)

    def test_rejected_move_changes_nothing(self, engine_for, tight_state):
        engine = engine_for(tight_state)
        before = engine.get_state()

        result = engine.place_card("shop-0", "generator", 2)

        assert result.error_code == RejectionCode.ILLEGAL_PLACEMENT
        assert engine.get_state() is before
        assert not engine.scheduler.pending

    def test_unknown_slot_kind(self, engine_for, balanced_state):
        engine = engine_for(balanced_state)
        result = engine.place_card("shop-0", "sideways", 3)
        assert result.error_code == RejectionCode.ILLEGAL_PLACEMENT

    def test_play_incentive(self, engine_for, balanced_state):
        engine = engine_for(balanced_state)
        result = engine.play_incentive("shop-19")

        assert result.success
        assert engine.get_state().grid.consumers[2].name == "LED Lights"

    def test_queries_do_not_mutate(self, engine_for, balanced_state):
        engine = engine_for(balanced_state)
        state = engine.get_state()

        engine.can_place("shop-0", "generator", 3)
        engine.can_place("shop-19", "consumer", 2)
        engine.can_place_anywhere("shop-4")
        engine.valid_slots("shop-21")
        engine.project("shop-0", "generator", 3)
        engine.legal_actions()

        assert engine.get_state() is state

    def test_queries(self, engine_for, balanced_state):
        engine = engine_for(balanced_state)

        assert engine.can_place("shop-0", "generator", 3)
        assert not engine.can_place("shop-0", "consumer", 3)
        assert not engine.can_place("shop-0", "diagonal", 3)
        assert engine.valid_slots("shop-21") == [1]
        assert not engine.can_place_anywhere("shop-20")
        assert engine.valid_slots("no-such-card") == []

    def test_projection(self, engine_for, balanced_state):
        engine = engine_for(balanced_state)

        projection = engine.project("shop-0", "generator", 3)

        assert projection.legal
        assert projection.projected == StatTotals(6, 5, 4, 1)
        assert engine.project("no-such-card", "generator", 3) is None

    def test_projection_for_hidden_incentive_is_illegal(self, engine_for, balanced_state):
        engine = engine_for(balanced_state)
        assert not engine.project("shop-20", "consumer", 3).legal

    def test_projection_unknown_slot_kind(self, engine_for, balanced_state):
        engine = engine_for(balanced_state)

        projection = engine.project("shop-0", "sideways", 3)

        assert not projection.legal
        assert projection.projected == projection.current == StatTotals(5, 1, 3, 2)

    def test_win_then_terminal(self, engine_for, last_fossil_state):
        engine = engine_for(last_fossil_state)

        result = engine.place_card("shop-2", "generator", 0)

        assert result.success
        assert engine.get_state().game_won
        assert engine.get_state().turn == 1
        assert engine.advance_turn().error_code == RejectionCode.GAME_ALREADY_WON
        assert engine.legal_actions() == []

    def test_reset_after_win(self, engine_for, last_fossil_state):
        engine = engine_for(last_fossil_state)
        engine.place_card("shop-2", "generator", 0)

        engine.reset()

        assert engine.get_state().phase == GamePhase.PLAYING


class TestAutoAdvance:
    """The delayed turn advance after a placement."""

    def test_advance_after_delay(self, engine_for, balanced_state):
        engine = engine_for(balanced_state, delay=0.05)

        result = engine.place_card("shop-0", "generator", 3)

        assert result.success
        assert engine.get_state().turn == 1
        assert engine.scheduler.pending
        assert wait_for(lambda: engine.get_state().turn == 2)
        assert not engine.scheduler.pending

    def test_reset_drops_pending_advance(self, engine_for, balanced_state):
        engine = engine_for(balanced_state, delay=0.05)
        engine.place_card("shop-0", "generator", 3)

        engine.reset()
        time.sleep(0.15)

        assert not engine.scheduler.pending
        assert engine.get_state().turn == 1
        assert engine.get_state().grid.generators[3] is None

    def test_advance_from_before_reset_ignored(self, engine_for, balanced_state):
        engine = engine_for(balanced_state, delay=10)
        engine.place_card("shop-0", "generator", 3)
        token = engine._pending_advance
        engine.reset()

        engine._auto_advance(token)

        assert engine.get_state().turn == 1

    def test_woken_timer_after_manual_advance(self, engine_for, balanced_state):
        """The timer fires while a manual advance holds the engine: one advance only."""
        engine = engine_for(balanced_state, delay=0.05)
        engine.place_card("shop-0", "generator", 3)

        with engine._lock:
            time.sleep(0.2)
            engine.advance_turn()
        time.sleep(0.1)

        assert engine.get_state().turn == 2

    def test_woken_timer_before_second_placement(self, engine_for, balanced_state):
        """The owed advance lands before the next placement even if its timer is blocked."""
        engine = engine_for(balanced_state, delay=0.05)
        engine.place_card("shop-0", "generator", 3)

        with engine._lock:
            time.sleep(0.2)
            result = engine.place_card("shop-1", "generator", 4)

        assert result.success
        assert result.new_state.turn == 2
        assert wait_for(lambda: engine.get_state().turn == 3)
        time.sleep(0.1)
        assert engine.get_state().turn == 3

    def test_second_placement_flushes_pending(self, engine_for, balanced_state):
        engine = engine_for(balanced_state, delay=10)
        engine.place_card("shop-0", "generator", 3)

        result = engine.place_card("shop-1", "generator", 4)

        assert result.success
        assert engine.get_state().turn == 2
        assert engine.scheduler.pending
        assert engine.totals() == StatTotals(7, 6, 5, 0)

    def test_manual_advance_replaces_pending(self, engine_for, balanced_state):
        engine = engine_for(balanced_state, delay=10)
        engine.place_card("shop-0", "generator", 3)

        engine.advance_turn()

        assert engine.get_state().turn == 2
        assert not engine.scheduler.pending

    def test_winning_move_schedules_nothing(self, engine_for, last_fossil_state):
        engine = engine_for(last_fossil_state, delay=10)
        result = engine.place_card("shop-2", "generator", 0)

        assert not result.advance_pending
        assert not engine.scheduler.pending


class TestCatalogFailure:
    """reset() with catalog data the engine cannot use."""

    def test_broken_catalog(self, config):
        incentive_map = {k: v for k, v in INCENTIVE_MAP.items() if k != "LED Lights"}
        engine = GameEngine(catalog=CardCatalog.from_cards(ENERGY_CARDS, incentive_map), config=config)

        result = engine.reset()

        assert result.error_code == RejectionCode.CATALOG_INTEGRITY_ERROR
        assert engine.get_state().phase == GamePhase.SETUP

    def test_failed_reset_keeps_current_game(self, catalog, config, balanced_state):
        deals = []

        def setup(_catalog, _config, _rng):
            if deals:
                raise CatalogIntegrityError(["Catalog went missing"])
            deals.append(balanced_state)
            return balanced_state

        engine = GameEngine(catalog=catalog, config=config, setup=setup)
        engine.reset()
        generation = engine.generation

        result = engine.reset()

        assert not result.success
        assert engine.get_state() is balanced_state
        assert engine.generation == generation


class TestRandomPlay:
    """Every legal action succeeds and placements keep the grid stable."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_random_walk(self, catalog, config, seed):
        engine = GameEngine(catalog=catalog, config=config, rng=random.Random(seed))
        engine.reset()
        rng = random.Random(seed)

        for _ in range(150):
            actions = engine.legal_actions()
            if not actions:
                break
            assert actions[-1].action_type == ActionType.ADVANCE_TURN
            action = rng.choice(actions)

            result = engine.dispatch(action)

            assert result.success, result.error
            if action.action_type != ActionType.ADVANCE_TURN:
                assert is_stable(result.new_state.grid)


class TestTurnScheduler:
    """Tests for the one-shot timer."""

    def test_zero_delay_runs_immediately(self):
        calls = []
        TurnScheduler(delay=0).schedule(lambda: calls.append(1))
        assert calls == [1]

    def test_fires_once(self):
        fired = threading.Event()
        scheduler = TurnScheduler(delay=0.02)

        scheduler.schedule(fired.set)

        assert fired.wait(2.0)
        assert not scheduler.pending

    def test_cancel(self):
        calls = []
        scheduler = TurnScheduler(delay=0.02)
        scheduler.schedule(lambda: calls.append(1))

        scheduler.cancel()
        time.sleep(0.08)

        assert calls == []
        assert not scheduler.pending

    def test_reschedule_replaces(self):
        calls = []
        scheduler = TurnScheduler(delay=0.02)
        scheduler.schedule(lambda: calls.append("first"))
        scheduler.schedule(lambda: calls.append("second"))

        assert wait_for(lambda: calls)
        time.sleep(0.05)

        assert calls == ["second"]
