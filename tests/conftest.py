import os
import tempfile

# Settings are read at import time, so the test database and secrets go in first
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "sehaty-test-secret-key-0123456789abcdef")
os.environ.setdefault("UPLOADS_LOCAL_DIR", tempfile.mkdtemp(prefix="sehaty-uploads-"))
os.environ["OCR_PROVIDER"] = "none"
os.environ["METRICS_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient

from sehaty import crud, models  # noqa: F401
from sehaty.core.security import create_access_token
from sehaty.db.base import Base
from sehaty.db.session import SessionLocal, engine
from sehaty.main import app
from sehaty.models.user import UserRole
from sehaty.models.medicine import Medicine, ActiveIngredient
from sehaty.models.pharmacy import Pharmacy, PharmacyMedicine


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def user(db):
    return crud.user.create(db, email="patient@example.com", full_name="Test Patient")


@pytest.fixture
def other_user(db):
    return crud.user.create(db, email="someone@example.com", full_name="Someone Else")


@pytest.fixture
def admin(db):
    return crud.user.create(db, email="admin@example.com", full_name="Admin", role=UserRole.ADMIN)


def _headers(u):
    return {"Authorization": f"Bearer {create_access_token(u.id)}"}


@pytest.fixture
def auth_headers(user):
    return _headers(user)


@pytest.fixture
def other_headers(other_user):
    return _headers(other_user)


@pytest.fixture
def admin_headers(admin):
    return _headers(admin)


@pytest.fixture
def pharmacy(db, admin):
    p = Pharmacy(name="Central Pharmacy", owner_id=admin.id)
    db.add(p)
    db.commit()
    return p


@pytest.fixture
def make_medicine(db):
    def _make(name, ingredient=None, **kwargs):
        medicine = Medicine(name=name, **kwargs)
        if ingredient is not None:
            medicine.active_ingredient_id = ingredient.id
        db.add(medicine)
        db.commit()
        return medicine
    return _make


@pytest.fixture
def make_ingredient(db):
    def _make(name):
        ingredient = ActiveIngredient(name=name)
        db.add(ingredient)
        db.commit()
        return ingredient
    return _make


@pytest.fixture
def stock(db, pharmacy):
    """List a medicine at the test pharmacy"""
    def _stock(medicine, quantity=10, price=12.5, **kwargs):
        listing = PharmacyMedicine(
            pharmacy_id=pharmacy.id, medicine_id=medicine.id, price=price, stock=quantity, **kwargs
        )
        db.add(listing)
        db.commit()
        return listing
    return _stock
