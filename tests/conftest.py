"""
Shared test fixtures.

Every test gets its own in-memory store, so no state leaks
between tests. Service tests use a raw session and commit
explicitly; API tests go through MealCardApi.
"""

from decimal import Decimal

import pytest

from meal_card.api import MealCardApi
from meal_card.config import Settings
from meal_card.models.enums import Role
from meal_card.schemas.card import StudentProvision
from meal_card.services.card_service import CardService
from meal_card.store import Store


class TestSettings(Settings):
    __test__ = False

    DATABASE_URL = "sqlite://"
    SEED_DATA = False
    TOP_ITEMS_LIMIT = 5


@pytest.fixture
def settings():
    return TestSettings()


@pytest.fixture
def store():
    """A fresh, empty in-memory store."""
    store = Store("sqlite://")
    store.create_schema()
    yield store
    store.close()


@pytest.fixture
def db_session(store):
    """Provide a session for direct service testing."""
    session = store.session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def api(store, settings):
    """The data-access interface over an empty store."""
    return MealCardApi(store, settings)


@pytest.fixture
def seeded_api():
    """The data-access interface over a store loaded with demo data."""
    settings = TestSettings()
    settings.SEED_DATA = True
    api = MealCardApi.create(settings)
    yield api
    api.close()


@pytest.fixture
def make_staff(db_session):
    """Factory: create a staff user."""
    def _make(role=Role.CASHIER, email=None):
        email = email or f"{role.value.lower()}@campus.edu"
        user = CardService(db_session).create_user(
            f"{role.value.title()} User", email, role
        )
        db_session.commit()
        return user
    return _make


@pytest.fixture
def make_student(db_session):
    """Factory: provision a student with an ACTIVE card and opening balance."""
    def _make(card_number="C2001", balance="100.00", name="Asha", email=None):
        card = CardService(db_session).provision_student(StudentProvision(
            name=name,
            email=email or f"{card_number.lower()}@campus.edu",
            card_number=card_number,
            enrollment_no=f"ENR-{card_number}",
            department="Computer Science",
            year=2,
            opening_balance=Decimal(balance),
        ))
        db_session.commit()
        return card
    return _make
