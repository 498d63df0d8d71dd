"""
Energy Grid Setup - Creates initial game state.

This module handles:
- Dealing the starting Fossil generators
- Shuffling consumers (injectable random source for determinism)
- Revealing the first consumers
- Composing the first shop
"""

from __future__ import annotations
import random
import uuid

from ...catalog.cards import CardCategory
from ...catalog.catalog import CardCatalog
from ...catalog.validation import CatalogIntegrityError, validate_catalog
from ...config import FOSSIL_NAME, GameConfig
from ...engine_core.shop import recompose_shop
from ...engine_core.state import CardInstance, GamePhase, GameState, GridState, Slot


def setup_energy_game(
    catalog: CardCatalog,
    config: GameConfig | None = None,
    rng: random.Random | None = None,
    game_id: str | None = None,
) -> GameState:
    """
    Set up a new game.

    Args:
        catalog: Card catalog to deal from
        config: Grid size and starting counts (defaults if not provided)
        rng: Random source for the consumer shuffle
        game_id: Identifier for the new game (random if not provided)

    Returns:
        Initial GameState in the PLAYING phase

    Raises:
        CatalogIntegrityError: if the catalog cannot support a game
    """
    config = config or GameConfig()
    rng = rng or random.Random()

    validate_catalog(catalog).raise_for_errors()

    fossil = catalog.get_card(FOSSIL_NAME)
    if fossil is None or not fossil.is_generator:
        raise CatalogIntegrityError([f"Catalog has no '{FOSSIL_NAME}' generator"])

    generators: list[Slot] = [None] * config.grid_size
    for i in range(config.initial_fossil_count):
        generators[i] = CardInstance(definition=fossil, instance_id=f"fossil-{i}")

    grid = GridState(
        generators=tuple(generators),
        consumers=deal_consumers(catalog, config, rng),
    )

    return GameState(
        game_id=game_id or str(uuid.uuid4()),
        phase=GamePhase.PLAYING,
        turn=1,
        grid=grid,
        shop=recompose_shop(grid, catalog),
    )


def deal_consumers(
    catalog: CardCatalog,
    config: GameConfig,
    rng: random.Random,
) -> tuple[Slot, ...]:
    """Shuffle every consumer and deal one per slot, first ones face-up."""
    consumers = catalog.cards_by_category(CardCategory.CONSUMER)
    if not consumers:
        raise CatalogIntegrityError(["Catalog has no consumer cards"])
    rng.shuffle(consumers)

    slots: list[Slot] = [None] * config.grid_size
    for i, card in enumerate(consumers[:config.grid_size]):
        slots[i] = CardInstance(
            definition=card,
            instance_id=f"consumer-{i}",
            face_down=i >= config.initial_revealed_consumers,
        )
    return tuple(slots)
