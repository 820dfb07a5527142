"""
Pytest configuration and fixtures for the restaurant API tests.
"""

import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RUN_MIGRATIONS", "false")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="restaurant-uploads-"))
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from restaurant.domain.models import Base, Ingredient, Inventory, Menu, Recipe, RecipeIngredient, Table, User
from restaurant.infrastructure.db import get_db
from restaurant.infrastructure.security import hash_password
from restaurant.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)

PASSWORD = "secret123"


@pytest.fixture(scope="function")
def db_session():
    """Fresh in-memory database per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    # No context manager: the lifespan (migrations) is not needed against SQLite
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_user(db_session, email: str, role: str) -> User:
    user = User(name=f"{role.title()} User", email=email, password=hash_password(PASSWORD), role=role)
    db_session.add(user)
    db_session.commit()
    return user


def _login(client, email: str) -> dict:
    resp = client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['data']['token']}"}


@pytest.fixture
def customer(db_session):
    return _make_user(db_session, "customer@example.com", "customer")


@pytest.fixture
def staff(db_session):
    return _make_user(db_session, "staff@example.com", "staff")


@pytest.fixture
def admin(db_session):
    return _make_user(db_session, "admin@example.com", "admin")


@pytest.fixture
def customer_headers(client, customer):
    return _login(client, customer.email)


@pytest.fixture
def staff_headers(client, staff):
    return _login(client, staff.email)


@pytest.fixture
def admin_headers(client, admin):
    return _login(client, admin.email)


@pytest.fixture
def table(db_session):
    t = Table(number="T1", capacity=4, location="indoor", status="available")
    db_session.add(t)
    db_session.commit()
    return t


@pytest.fixture
def menu(db_session):
    m = Menu(name="Nasi Goreng", description="Fried rice", price=25000, category="main", rating=0)
    db_session.add(m)
    db_session.commit()
    return m


@pytest.fixture
def make_recipe(db_session):
    """Build a recipe for a menu from ``{ingredient_name: (qty_per_portion, stock or None)}``."""

    def _make(menu, lines):
        recipe = Recipe(menu_id=menu.id, name=f"{menu.name} recipe", description="")
        for position, (name, (qty, stock)) in enumerate(lines.items()):
            ingredient = Ingredient(name=name, description="")
            db_session.add(ingredient)
            db_session.flush()
            recipe.ingredients.append(RecipeIngredient(ingredient=ingredient, quantity=qty, position=position))
            if stock is not None:
                db_session.add(Inventory(ingredient_id=ingredient.id, quantity=stock))
        db_session.add(recipe)
        db_session.commit()
        return recipe

    return _make
