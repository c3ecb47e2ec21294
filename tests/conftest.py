import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient

from stock_tracker.config import settings
from stock_tracker.schemas.product import Product
from stock_tracker.store import ProductStore, get_store
from stock_tracker.utils.inventory_client import get_inventory_client

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_product():
    """
    FACTORY: builds a Product from the same camelCase payload the inventory API sends.
    `edited` is a list of minute offsets from BASE_TIME, one per edit record.
    """
    counter = {"n": 0}

    def _make(name=None, barcode=None, type="Boissons", price=10.0, stocks=None,
              edited=None, min_quantity=None, **extra):
        counter["n"] += 1
        n = counter["n"]
        payload = {
            "id": extra.pop("id", f"p{n}"),
            "name": name if name is not None else f"Product {n}",
            "barcode": barcode if barcode is not None else f"6110000{n:05d}",
            "type": type,
            "price": price,
            "minQuantity": min_quantity,
            "stocks": stocks if stocks is not None else [{"quantity": 10}],
            "editedBy": [{"at": (BASE_TIME + timedelta(minutes=m)).isoformat()} for m in (edited or [])],
        }
        payload.update(extra)
        return Product.model_validate(payload)

    return _make


@pytest.fixture
def store():
    return ProductStore()


@pytest.fixture
def report_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "REPORT_STORAGE_DIR", str(tmp_path / "reports"))
    return tmp_path / "reports"


@pytest.fixture
def client(store):
    from stock_tracker.main import app

    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def override_inventory_client():
    """Installs a fake inventory client for the duration of a test."""
    from stock_tracker.main import app

    def _install(fake):
        app.dependency_overrides[get_inventory_client] = lambda: fake
        return fake

    return _install
