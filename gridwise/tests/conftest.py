"""
Pytest fixtures for Gridwise tests.

Most tests run against hand-built grids so the numbers are known.
Reference grid (balanced_state):

    generators: Fossil, Fossil, Tidal, -, -, -, -, -
    consumers:  EVs, AC, Lights, Heating (face-down), -, -, -, -
    totals:     night 5, day 1, eve 3, flex 2
"""

import pytest

from ..catalog import CardCatalog
from ..config import GameConfig
from ..engine_core.engine import GameEngine
from ..engine_core.shop import recompose_shop
from ..engine_core.state import CardInstance, GamePhase, GameState, GridState
from ..games.energy.cards import create_energy_catalog


def make_grid(catalog, generators=(), consumers=(), size=8) -> GridState:
    """
    Build a grid from card names.

    Consumers may be given as "Name" or ("Name", face_down).
    """
    gen_slots = [None] * size
    for i, name in enumerate(generators):
        if name is not None:
            gen_slots[i] = CardInstance(catalog.get_card(name), f"gen-{i}")

    con_slots = [None] * size
    for i, entry in enumerate(consumers):
        if entry is None:
            continue
        name, face_down = entry if isinstance(entry, tuple) else (entry, False)
        con_slots[i] = CardInstance(catalog.get_card(name), f"consumer-{i}", face_down=face_down)

    return GridState(generators=tuple(gen_slots), consumers=tuple(con_slots))


def make_state(catalog, generators=(), consumers=(), size=8, turn=1) -> GameState:
    """Build a game in play around a hand-made grid, shop composed."""
    grid = make_grid(catalog, generators, consumers, size)
    return GameState(
        game_id="test_game",
        phase=GamePhase.PLAYING,
        turn=turn,
        grid=grid,
        shop=recompose_shop(grid, catalog),
    )


def shop_id_for(state: GameState, name: str) -> str:
    for card in state.shop:
        if card.name == name:
            return card.instance_id
    raise KeyError(name)


@pytest.fixture
def catalog() -> CardCatalog:
    return create_energy_catalog()


@pytest.fixture
def config() -> GameConfig:
    """Default grid, synchronous turn advance."""
    return GameConfig(auto_advance_delay=0)


@pytest.fixture
def balanced_state(catalog) -> GameState:
    return make_state(
        catalog,
        generators=["Fossil", "Fossil", "Tidal"],
        consumers=["EVs", "AC", "Lights", ("Heating", True)],
    )


@pytest.fixture
def tight_state(catalog) -> GameState:
    """Wind + Fossil, no consumers: night 4, day 3, eve 5, flex 0."""
    return make_state(catalog, generators=["Wind", "Fossil"])


@pytest.fixture
def last_fossil_state(catalog) -> GameState:
    """One Fossil left: night 7, day 2, eve 7, flex 1."""
    return make_state(
        catalog,
        generators=["Fossil", "Tidal", "Tidal"],
        consumers=["EVs"],
    )


@pytest.fixture
def engine_for(catalog):
    """Factory: an engine whose reset() deals the given state."""
    engines = []

    def _make(state: GameState, delay: float = 0) -> GameEngine:
        engine = GameEngine(
            catalog=catalog,
            config=GameConfig(grid_size=state.grid.size, auto_advance_delay=delay),
            setup=lambda _catalog, _config, _rng: state,
        )
        engine.reset()
        engines.append(engine)
        return engine

    yield _make

    for engine in engines:
        engine.close()
