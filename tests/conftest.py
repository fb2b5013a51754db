import os

#testy nigdy nie lacza sie z postgresem z .env
os.environ["DATABASE_URL"] = "sqlite://"

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.routers.carts import get_user_client
from app.data.database import Base, get_db, init_db
from app.data.models.cart import CartModel
from app.domain.schemas import UserProfile
from app.main import create_app
from app.services.user_client import LookupOutcome, UserClient, UserLookup


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def profile_for(user_id: int) -> UserProfile:
    return UserProfile(
        user_id=user_id,
        first_name=f"First{user_id}",
        last_name=f"Last{user_id}",
        email=f"user{user_id}@example.com",
    )


@pytest.fixture()
def user_client():
    """User-service ktory zna kazdego uzytkownika."""
    client = MagicMock(spec=UserClient)
    client.fetch_user.side_effect = lambda user_id: UserLookup(
        LookupOutcome.FOUND, profile_for(user_id)
    )
    return client


@pytest.fixture()
def make_cart(db):
    def _make(user_id: int) -> CartModel:
        cart = CartModel(user_id=user_id)
        db.add(cart)
        db.commit()
        db.refresh(cart)
        return cart

    return _make


@pytest.fixture()
def client(session_factory, user_client):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_user_client] = lambda: user_client
    return TestClient(app)
