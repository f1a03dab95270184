import pytest
from fastapi.testclient import TestClient

from db.database import get_store
from db.store import CatalogStore
from main import app


@pytest.fixture
def store():
    return CatalogStore()


@pytest.fixture
def catalog(store):
    """A small catalog: two UOMs, three commodities and one location."""
    barrel = store.create_uom({"name": "BBL", "type": "volume", "base_uom": 158.987})
    tonne = store.create_uom({"name": "MT", "type": "mass", "base_uom": 1000})
    gasoline = store.create_commodity({"name": "Gasoline", "uom_id": barrel.id, "density": 0.745})
    ethanol = store.create_commodity({"name": "Ethanol", "uom_id": barrel.id, "density": 0.789})
    diesel = store.create_commodity({"name": "Diesel", "uom_id": tonne.id})
    terminal = store.create_location({"name": "Gulf Terminal", "location_type": "terminal"})
    return {
        "barrel": barrel,
        "tonne": tonne,
        "gasoline": gasoline,
        "ethanol": ethanol,
        "diesel": diesel,
        "terminal": terminal,
    }


@pytest.fixture
def client(store):
    async def _get_store():
        yield store

    app.dependency_overrides[get_store] = _get_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
