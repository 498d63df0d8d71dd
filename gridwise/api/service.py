"""
API Service - Business logic layer between the HTTP API and the engine.

The service:
1. Translates requests to engine calls
2. Manages sessions
3. Formats engine snapshots as response schemas

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Lookups that fail return an ErrorResponse rather than raising.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..catalog.cards import StatTotals
from ..engine_core.action import ActionResult
from ..engine_core.action_generator import incentive_targets, selectable_cards
from ..engine_core.state import CardInstance, GameState, SlotKind
from ..session import Session, SessionManager
from .schemas import (
    ActionResponse,
    CardInfo,
    CatalogCardInfo,
    CatalogResponse,
    ErrorCode,
    ErrorResponse,
    GameStateResponse,
    GridInfo,
    PlacementResponse,
    ProjectionResponse,
    SessionStatus,
    ShopCardInfo,
    SlotKindParam,
    TotalsInfo,
)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        state = service.create_game(seed=7)
        result = service.place_card(state.session_id, "shop-0", "generator", 4)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_game(self, seed: int | None = None) -> GameStateResponse:
        session = self.session_manager.create_session(seed=seed)
        return self._state_response(session)

    def get_game(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)
        return self._state_response(session)

    def end_game(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_games(self) -> list[str]:
        return self.session_manager.list_sessions()

    def get_catalog(self) -> CatalogResponse:
        catalog = self.session_manager.catalog
        if catalog is None:
            from ..games.energy.cards import create_energy_catalog
            catalog = create_energy_catalog()
        return CatalogResponse(
            cards=[
                CatalogCardInfo(
                    name=card.name,
                    category=card.category.value,
                    night=card.night,
                    day=card.day,
                    eve=card.eve,
                    flex=card.flex,
                    matching_consumer=catalog.matching_consumer_for(card.name),
                )
                for card in catalog.cards
            ],
            incentive_map=dict(catalog.incentive_map),
        )

    # =========================================================================
    # Mutations
    # =========================================================================

    def reset(self, session_id: str) -> ActionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)
        return self._action_response(session, session.engine.reset())

    def place_card(
        self,
        session_id: str,
        card_id: str,
        slot_kind: SlotKindParam | str,
        index: int,
    ) -> ActionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)
        kind = slot_kind.value if isinstance(slot_kind, SlotKindParam) else slot_kind
        return self._action_response(session, session.engine.place_card(card_id, kind, index))

    def play_incentive(self, session_id: str, card_id: str) -> ActionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)
        return self._action_response(session, session.engine.play_incentive(card_id))

    def advance_turn(self, session_id: str) -> ActionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)
        return self._action_response(session, session.engine.advance_turn())

    # =========================================================================
    # Queries
    # =========================================================================

    def get_placement(self, session_id: str, card_id: str) -> PlacementResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)

        engine = session.engine
        card = engine.get_state().shop_card(card_id)
        if card is None:
            return _unknown_card(card_id)

        slot_kind = None
        if card.definition.is_generator:
            slot_kind = SlotKindParam.GENERATOR
        elif card.definition.is_incentive:
            slot_kind = SlotKindParam.CONSUMER

        return PlacementResponse(
            session_id=session_id,
            card_id=card_id,
            can_place_anywhere=engine.can_place_anywhere(card_id),
            valid_slots=engine.valid_slots(card_id),
            slot_kind=slot_kind,
        )

    def get_projection(
        self,
        session_id: str,
        card_id: str,
        slot_kind: SlotKindParam | str,
        index: int,
    ) -> ProjectionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)

        kind = SlotKindParam(slot_kind)
        if index < 0 or index >= session.engine.config.grid_size:
            return ErrorResponse(
                error=f"Slot index {index} is outside the grid",
                error_code=ErrorCode.INVALID_SLOT_INDEX,
            )
        projection = session.engine.project(card_id, kind.value, index)
        if projection is None:
            return _unknown_card(card_id)

        return ProjectionResponse(
            session_id=session_id,
            card_id=card_id,
            slot_kind=kind,
            index=index,
            legal=projection.legal,
            current=_totals(projection.current),
            projected=_totals(projection.projected),
            delta=_totals(projection.delta),
        )

    # =========================================================================
    # Formatting
    # =========================================================================

    def _action_response(self, session: Session, result: ActionResult) -> ActionResponse:
        return ActionResponse(
            session_id=session.session_id,
            success=result.success,
            error=result.error,
            error_code=ErrorCode(result.error_code.value) if result.error_code else None,
            changes=result.state_changes,
            advance_scheduled=session.engine.scheduler.pending,
            game_state=self._state_response(session),
        )

    def _state_response(self, session: Session) -> GameStateResponse:
        engine = session.engine
        state: GameState = engine.get_state()
        selectable = selectable_cards(engine.catalog, state)
        targets = incentive_targets(engine.catalog, state)

        return GameStateResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            game_id=state.game_id,
            phase=state.phase.value,
            turn=state.turn,
            game_won=state.game_won,
            grid=GridInfo(
                generators=[_card_info(c) for c in state.grid.slots(SlotKind.GENERATOR)],
                consumers=[_card_info(c) for c in state.grid.slots(SlotKind.CONSUMER)],
            ),
            shop=[
                ShopCardInfo(
                    **_card_info(card).model_dump(),
                    selectable=selectable.get(card.instance_id, False),
                    target_slot=targets.get(card.instance_id),
                )
                for card in state.shop
            ],
            totals=_totals(engine.totals()),
        )


def _card_info(card: CardInstance | None) -> CardInfo | None:
    if card is None:
        return None
    return CardInfo(
        card_id=card.instance_id,
        name=card.name,
        category=card.category.value,
        night=card.definition.night,
        day=card.definition.day,
        eve=card.definition.eve,
        flex=card.definition.flex,
        face_down=card.face_down,
    )


def _totals(totals: StatTotals) -> TotalsInfo:
    return TotalsInfo(**totals.as_dict())


def _session_not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Session {session_id} not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )


def _unknown_card(card_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Card {card_id} is not in the shop",
        error_code=ErrorCode.UNKNOWN_CARD,
    )
