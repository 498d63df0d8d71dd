"""
Game Engine - Owner of the live game state.

The engine is the only object that holds a mutable reference to the
current GameState. Renderers read snapshots via get_state() and route
every change through the four mutators:

    reset()            deal a new game
    place_card()       put a shop card into a slot
    play_incentive()   upgrade the matching consumer
    advance_turn()     reveal a consumer, bring big generators online

Queries (can_place, can_place_anywhere, valid_slots, project) never
change anything.

Concurrency: operations run to completion under one re-entrant lock.
The automatic advance after a placement is driven by a TurnScheduler.
The engine remembers the token of the one advance still owed; reset(),
a manual advance or the next placement settles or drops it, so a timer
thread that wakes up late finds its token gone and does nothing.
"""

from __future__ import annotations
from typing import Callable
import logging
import random
import threading

from ..catalog.catalog import CardCatalog
from ..catalog.cards import StatTotals
from ..catalog.validation import CatalogIntegrityError
from ..config import GameConfig
from .action import Action, ActionResult, ActionType, RejectionCode
from .action_generator import legal_actions
from .balance import compute_totals
from .placement import Projection, can_place, can_place_anywhere, project_placement, valid_slots
from .reducer import Reducer
from .state import GamePhase, GameState, GridState, SlotKind
from .turn_scheduler import TurnScheduler

logger = logging.getLogger(__name__)

SetupFn = Callable[[CardCatalog, GameConfig, random.Random], GameState]


class GameEngine:
    """
    Single-player game engine.

    Usage:
        engine = GameEngine(config=GameConfig(auto_advance_delay=0))
        engine.reset()

        card = engine.get_state().playable_shop()[0]
        if engine.can_place_anywhere(card.instance_id):
            result = engine.place_card(card.instance_id, "generator", 4)
    """

    def __init__(
        self,
        catalog: CardCatalog | None = None,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
        setup: SetupFn | None = None,
        scheduler: TurnScheduler | None = None,
    ):
        if catalog is None:
            from ..games.energy.cards import create_energy_catalog
            catalog = create_energy_catalog()

        self.catalog = catalog
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.reducer = Reducer(catalog=catalog)
        self.scheduler = scheduler or TurnScheduler(delay=self.config.auto_advance_delay)

        self._setup = setup or _default_setup
        self._lock = threading.RLock()
        self._generation = 0
        self._advance_counter = 0
        self._pending_advance: int | None = None
        self._state = GameState(
            game_id="unstarted",
            phase=GamePhase.SETUP,
            grid=GridState.empty(self.config.grid_size),
        )

    # =========================================================================
    # Snapshot & queries
    # =========================================================================

    def get_state(self) -> GameState:
        """Current state. Immutable, safe to hold on to."""
        return self._state

    @property
    def generation(self) -> int:
        """Number of resets so far; identifies the current game instance."""
        return self._generation

    def totals(self) -> StatTotals:
        return compute_totals(self._state.grid)

    def can_place(self, card_id: str, slot_kind: SlotKind | str, index: int) -> bool:
        state = self._state
        card = state.shop_card(card_id)
        if card is None or card.face_down or state.phase != GamePhase.PLAYING:
            return False
        try:
            kind = SlotKind(slot_kind)
        except ValueError:
            return False
        return can_place(state.grid, card, kind, index, self.catalog)

    def can_place_anywhere(self, card_id: str) -> bool:
        state = self._state
        card = state.shop_card(card_id)
        if card is None or card.face_down or state.phase != GamePhase.PLAYING:
            return False
        return can_place_anywhere(state.grid, card, self.catalog)

    def valid_slots(self, card_id: str) -> list[int]:
        """Indices where a shop card may legally go (generator or consumer row)."""
        state = self._state
        card = state.shop_card(card_id)
        if card is None or card.face_down or state.phase != GamePhase.PLAYING:
            return []
        return valid_slots(state.grid, card, self.catalog)

    def project(self, card_id: str, slot_kind: SlotKind | str, index: int) -> Projection | None:
        """
        Preview totals for a placement; None if the card is not in the shop.

        An unknown slot kind projects no change and is never legal.
        """
        state = self._state
        card = state.shop_card(card_id)
        if card is None:
            return None
        try:
            kind = SlotKind(slot_kind)
        except ValueError:
            current = compute_totals(state.grid)
            return Projection(current, current, legal=False)
        projection = project_placement(state.grid, card, kind, index, self.catalog)
        if card.face_down or state.phase != GamePhase.PLAYING:
            return Projection(projection.current, projection.projected, legal=False)
        return projection

    def legal_actions(self) -> list[Action]:
        return legal_actions(self.catalog, self._state)

    # =========================================================================
    # Mutators
    # =========================================================================

    def reset(self) -> ActionResult:
        """
        Start a new game, discarding the current one.

        A broken catalog leaves the current game untouched.
        """
        with self._lock:
            try:
                new_state = self._setup(self.catalog, self.config, self.rng)
            except CatalogIntegrityError as e:
                logger.error("Reset failed: %s (%s)", e, "; ".join(e.errors))
                return ActionResult.failure(
                    str(e), error_code=RejectionCode.CATALOG_INTEGRITY_ERROR
                )

            self._drop_pending_advance()
            self._generation += 1
            self._state = new_state
            logger.info("New game %s (generation %d)", new_state.game_id, self._generation)
            return ActionResult.success_with_state(new_state, changes=["New game started"])

    def place_card(self, card_id: str, slot_kind: SlotKind | str, index: int) -> ActionResult:
        try:
            kind = SlotKind(slot_kind)
        except ValueError:
            return ActionResult.failure(
                f"Unknown slot kind: {slot_kind}",
                error_code=RejectionCode.ILLEGAL_PLACEMENT,
            )
        return self.dispatch(Action.place_card(card_id, kind, index))

    def play_incentive(self, card_id: str) -> ActionResult:
        return self.dispatch(Action.play_incentive(card_id))

    def advance_turn(self) -> ActionResult:
        return self.dispatch(Action.advance_turn())

    def dispatch(self, action: Action) -> ActionResult:
        """
        Apply an action to the live state.

        A pending automatic advance is applied before any new placement,
        and a manual advance replaces it, so every placement yields
        exactly one turn advance.
        """
        with self._lock:
            if action.action_type == ActionType.ADVANCE_TURN:
                self._drop_pending_advance()
            elif self._pending_advance is not None:
                self._auto_advance(self._pending_advance)

            result = self.reducer.apply(self._state, action)
            if not result.success:
                return result

            self._state = result.new_state
            if result.advance_pending:
                self._advance_counter += 1
                token = self._advance_counter
                self._pending_advance = token
                self.scheduler.schedule(lambda: self._auto_advance(token))
            return result

    def close(self):
        """Cancel any pending timer; the engine can still be queried."""
        with self._lock:
            self._drop_pending_advance()

    def _drop_pending_advance(self):
        self.scheduler.cancel()
        self._pending_advance = None

    def _auto_advance(self, token: int):
        """Apply the advance owed by a placement, unless it was already settled."""
        with self._lock:
            if token != self._pending_advance:
                logger.debug("Dropping superseded turn advance %d", token)
                return
            self.scheduler.cancel()
            self._pending_advance = None
            result = self.reducer.apply(self._state, Action.advance_turn())
            if result.success:
                self._state = result.new_state


def _default_setup(catalog: CardCatalog, config: GameConfig, rng: random.Random) -> GameState:
    from ..games.energy.setup import setup_energy_game
    return setup_energy_game(catalog, config=config, rng=rng)
