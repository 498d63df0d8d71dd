"""
Energy Grid Cards - Card definitions and incentive compatibility.

Card structure:
- Name and category
- Four stats: night, day, eve, flex (consumers pre-signed negative)

Catalog order is significant: shop ids are derived from it.
"""

from ...catalog.cards import CardCategory, CardDefinition
from ...catalog.catalog import CardCatalog


GEN = CardCategory.GENERATOR
BIG = CardCategory.BIG_GENERATOR
CON = CardCategory.CONSUMER
INC = CardCategory.INCENTIVE


# ============================================================================
# Generators
# ============================================================================

SOLAR = CardDefinition("Solar", GEN, night=1, day=4, eve=1, flex=-1)
WIND = CardDefinition("Wind", GEN, night=2, day=1, eve=3, flex=-1)
TIDAL = CardDefinition("Tidal", GEN, night=3, day=0, eve=3, flex=0)
FOSSIL = CardDefinition("Fossil", GEN, night=2, day=2, eve=2, flex=1)
HYDRO = CardDefinition("Hydro", BIG, night=2, day=2, eve=2, flex=2)
NUCLEAR = CardDefinition("Nuclear", BIG, night=3, day=3, eve=3, flex=0)


# ============================================================================
# Consumers
# ============================================================================

AC = CardDefinition("AC", CON, night=0, day=-2, eve=-1, flex=0)
INDUSTRY = CardDefinition("Industry", CON, night=0, day=-3, eve=-2, flex=-2)
EVS = CardDefinition("EVs", CON, night=-1, day=0, eve=-1, flex=0)
APPLIANCES = CardDefinition("Appliances", CON, night=0, day=-1, eve=-3, flex=0)
LIGHTS = CardDefinition("Lights", CON, night=-1, day=-1, eve=-2, flex=0)
HEATING = CardDefinition("Heating", CON, night=-1, day=0, eve=-2, flex=0)
INFRASTRUCTURE = CardDefinition("Infrastructure", CON, night=-1, day=-1, eve=-2, flex=0)
DATA_CENTRE = CardDefinition("Data Centre", CON, night=-1, day=-2, eve=-2, flex=0)


# ============================================================================
# Incentives
# ============================================================================

ADAPTIVE_SERVERS = CardDefinition("Adaptive Servers", INC, night=-2, day=-2, eve=-1, flex=1)
SMART_GRID = CardDefinition("Smart Grid", INC, night=-1, day=0, eve=0, flex=1)
SMART_APPLIANCES = CardDefinition("Smart Appliances", INC, night=-1, day=-1, eve=-1, flex=0)
SMART_INDUSTRY = CardDefinition("Smart Industry", INC, night=-2, day=-2, eve=-1, flex=-2)
SMART_EVS = CardDefinition("Smart EVs", INC, night=-2, day=0, eve=0, flex=1)
LED_LIGHTS = CardDefinition("LED Lights", INC, night=-1, day=0, eve=-1, flex=0)
HEAT_PUMPS = CardDefinition("Heat Pumps", INC, night=-1, day=0, eve=-1, flex=1)
PASSIVE_COOLING = CardDefinition("Passive Cooling", INC, night=0, day=-1, eve=-1, flex=0)


ENERGY_CARDS = [
    SOLAR, WIND, TIDAL, FOSSIL, HYDRO, NUCLEAR,
    AC, INDUSTRY, EVS, APPLIANCES, LIGHTS, HEATING, INFRASTRUCTURE, DATA_CENTRE,
    ADAPTIVE_SERVERS, SMART_GRID, SMART_APPLIANCES, SMART_INDUSTRY,
    SMART_EVS, LED_LIGHTS, HEAT_PUMPS, PASSIVE_COOLING,
]

INCENTIVE_MAP = {
    "Adaptive Servers": "Data Centre",
    "Smart Grid": "Infrastructure",
    "Smart Appliances": "Appliances",
    "Smart Industry": "Industry",
    "Smart EVs": "EVs",
    "LED Lights": "Lights",
    "Heat Pumps": "Heating",
    "Passive Cooling": "AC",
}


def create_energy_catalog() -> CardCatalog:
    """Create the built-in card catalog."""
    return CardCatalog.from_cards(ENERGY_CARDS, INCENTIVE_MAP)
