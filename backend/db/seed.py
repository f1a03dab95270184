"""
Demo catalog loaded at startup when SEED_DEMO_DATA is enabled.

Everything goes through the regular create operations, so ids and
embedded snapshots come out exactly as they would from the API.
"""
import logging

from .store import CatalogStore

logger = logging.getLogger(__name__)


UOMS = [
    {"name": "BBL", "description": "Barrel", "type": "volume", "base_uom": 158.987},
    {"name": "M3", "description": "Cubic metre", "type": "volume", "base_uom": 1000},
    {"name": "MT", "description": "Metric tonne", "type": "mass", "base_uom": 1000},
    {"name": "MMBTU", "description": "Million British thermal units", "type": "energy", "base_uom": 1},
]

COUNTER_PARTIES = [
    {"name": "Northwind Trading", "type": "supplier", "contact_info": "ops@northwind.example", "credit_status": "approved"},
    {"name": "Harbor Fuels", "type": "customer", "contact_info": "Dock 4, Harbor Rd.", "credit_status": "pending"},
    {"name": "Atlas Brokerage", "type": "broker", "contact_info": "desk@atlas.example"},
]

# counterparty_id refers to COUNTER_PARTIES by position (1-based)
LOCATIONS = [
    {"name": "Gulf Terminal", "location_type": "terminal", "address": "1 Terminal Way, Port Arthur", "counterparty_id": 1},
    {"name": "Inland Tank Farm", "location_type": "storage", "address": "Route 9", "counterparty_id": 2},
    {"name": "Coastal Refinery", "location_type": "refinery", "address": "Refinery Rd."},
]

COMMODITIES = [
    {"name": "Gasoline", "description": "Finished motor gasoline", "uom_id": 1, "density": 0.745, "energy_uom": "MMBTU"},
    {"name": "Ethanol", "description": "Fuel grade ethanol", "uom_id": 1, "density": 0.789, "energy_uom": "MMBTU"},
    {"name": "Diesel", "description": "Ultra low sulphur diesel", "uom_id": 2, "density": 0.832, "energy_uom": "MMBTU"},
    {"name": "Biodiesel", "description": "FAME biodiesel", "uom_id": 2, "density": 0.88, "energy_uom": "MMBTU"},
    {"name": "E10", "description": "Gasoline with 10% ethanol", "uom_id": 1, "density": 0.749},
    {"name": "B20", "description": "Diesel with 20% biodiesel", "uom_id": 2, "density": 0.841},
]

BLENDS = [
    {
        "blend": {"name": "E10 Standard", "commodity_id": 5, "description": "Regular E10 recipe"},
        "components": [
            {"component_commodity_id": 1, "percentage": 90},
            {"component_commodity_id": 2, "percentage": 10},
        ],
    },
    {
        "blend": {"name": "B20 Winter", "commodity_id": 6, "description": "Cold weather B20"},
        "components": [
            {"component_commodity_id": 3, "percentage": 80},
            {"component_commodity_id": 4, "percentage": 20},
        ],
    },
]

CAPACITY = [
    {"commodity_id": 1, "location_id": 1, "capacity_type": "storage", "quantity": 250000,
     "start_date": "2024-01-01", "end_date": "2024-12-31"},
    {"commodity_id": 3, "location_id": 2, "capacity_type": "throughput", "quantity": 40000,
     "start_date": "2024-01-01", "end_date": "2024-06-30"},
    {"commodity_id": 2, "location_id": 3, "capacity_type": "storage", "quantity": 15000,
     "start_date": "2024-03-01"},
]


def seed_demo_data(store: CatalogStore) -> None:
    for data in UOMS:
        store.create_uom(data)
    for data in COUNTER_PARTIES:
        store.create_counter_party(data)
    for data in LOCATIONS:
        store.create_location(data)
    for data in COMMODITIES:
        store.create_commodity(data)
    for entry in BLENDS:
        store.create_blend_with_components(entry["blend"], entry["components"])
    for data in CAPACITY:
        store.create_capacity(data)

    logger.info("Seeded demo catalog: %s", store.stats().model_dump())
