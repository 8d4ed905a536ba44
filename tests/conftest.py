import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shared.core.auth import validate_current_token
from shared.core.database import Base, get_warehouse_db
from stock_fakes import STOREKEEPER
from warehouse_service.app.main import app
from warehouse_service.app.models.catalog.brands import Brand
from warehouse_service.app.models.catalog.categories import Category
from warehouse_service.app.models.catalog.colors import Color
from warehouse_service.app.models.catalog.products import Product


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalog(db):
    """Two adult products, one children's product and two colors."""
    db.add_all([
        Brand(id=1, name="Northwind"),
        Category(id=1, name="Women"),
        Category(id=3, name="Children"),
        Color(id=2, name="Black"),
        Color(id=5, name="Red"),
    ])
    db.flush()
    db.add_all([
        Product(id=1, name="Basic tee", article="T100",
                brand_id=1, category_id=1),
        Product(id=2, name="Hoodie", article="H200",
                brand_id=1, category_id=1),
        Product(id=3, name="Kids jacket", article="K300",
                brand_id=1, category_id=3),
    ])
    db.commit()
    return db


@pytest.fixture
def current_user():
    return STOREKEEPER


@pytest.fixture
def client(db, current_user):
    def override_get_db():
        yield db

    app.dependency_overrides[get_warehouse_db] = override_get_db
    app.dependency_overrides[validate_current_token] = lambda: current_user
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
