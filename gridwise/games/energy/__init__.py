"""
Energy Grid - The built-in card set.

Keep an electricity grid balanced through the night, the day, the
evening peak, and a flex reserve while retiring Fossil generation.
Key mechanics:
- Renewable generators trade flex for raw output
- Big generators (Hydro, Nuclear) come online a turn after placement
- Consumers are revealed one per turn
- Incentives retrofit one specific consumer in place

This module contains:
- Card definitions and the incentive map
- Game setup (Fossils, shuffled consumers, first shop)
"""

from .cards import ENERGY_CARDS, INCENTIVE_MAP, create_energy_catalog
from .setup import setup_energy_game, deal_consumers

__all__ = [
    "ENERGY_CARDS",
    "INCENTIVE_MAP",
    "create_energy_catalog",
    "setup_energy_game",
    "deal_consumers",
]
