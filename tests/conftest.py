from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sandwich_api.core.database import create_tables, drop_tables, get_db
from sandwich_api.core.exceptions import NotFoundError
from sandwich_api.main import app
from sandwich_api.models.catalog import CATEGORY_TABLES, IngredientCategory, IngredientOption, Option
from sandwich_api.models.sandwich import SandwichOrder
from sandwich_api.services.catalog import CatalogStore
from sandwich_api.services.sandwiches import OrderStore


# Ids are unique across categories so they also fit the single options table.
CATALOG = {
    IngredientCategory.BREADS: {1: "White", 2: "Wheat", 3: "Sourdough"},
    IngredientCategory.CHEESES: {10: "Swiss", 11: "Cheddar", 12: "Provolone"},
    IngredientCategory.DRESSINGS: {20: "Mayo", 21: "Mustard"},
    IngredientCategory.MEATS: {30: "Turkey", 31: "Ham", 32: "Roast Beef"},
    IngredientCategory.TOPPINGS: {40: "Lettuce", 41: "Tomato", 42: "Onion"},
}

WHITE, WHEAT, SOURDOUGH = 1, 2, 3
SWISS, CHEDDAR, PROVOLONE = 10, 11, 12
MAYO, MUSTARD = 20, 21
TURKEY, HAM, ROAST_BEEF = 30, 31, 32
LETTUCE, TOMATO, ONION = 40, 41, 42


class FakeCatalog(CatalogStore):
    def __init__(self, data: Optional[Dict[IngredientCategory, Dict[int, str]]] = None):
        self.data = {c: dict(names) for c, names in (data or CATALOG).items()}

    def resolve(self, category, option_id):
        return self.data.get(category, {}).get(option_id)

    def list_all(self, category) -> List[IngredientOption]:
        return [
            IngredientOption(id=i, name=n, category=category)
            for i, n in sorted(self.data.get(category, {}).items())
        ]


class MemoryOrderStore(OrderStore):
    def __init__(self):
        self.rows: Dict[int, SandwichOrder] = {}
        self.next_id = 1

    def insert(self, order):
        order_id = self.next_id
        self.next_id += 1
        self.rows[order_id] = order.model_copy(update={"id": order_id})
        return order_id

    def find_by_id(self, order_id):
        row = self.rows.get(order_id)
        return row.model_copy() if row else None

    def find_all(self):
        return [r.model_copy() for r in self.rows.values()]

    def find_by_owner(self, user_id):
        return [r.model_copy() for r in self.rows.values() if r.owner_user_id == user_id]

    def update(self, order):
        if order.id not in self.rows:
            raise NotFoundError("Sandwich", order.id)
        self.rows[order.id] = order.model_copy()

    def delete(self, order_id):
        if self.rows.pop(order_id, None) is None:
            raise NotFoundError("Sandwich", order_id)

    def backfill_prices(self):
        missing = [r for r in self.rows.values() if r.price is None]
        for row in missing:
            row.price = 0
        return len(missing)


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield engine
    drop_tables(bind=engine)


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    for category, names in CATALOG.items():
        table = CATEGORY_TABLES[category]
        for option_id, name in names.items():
            session.add(Option(id=option_id, category=category.value, name=name))
            session.add(table(id=option_id, name=name))
    session.commit()
    yield session
    session.close()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
