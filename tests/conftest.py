import os

# Keep the module-level engine away from any real database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.database import Base, build_engine
from app.core.dependencies import get_db
from app.main import app
from app.services.user_service import register_user


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def owner(db):
    user, _ = register_user(db, "auth-owner", "owner@tokobaru.co.id", "Siti", business_name="Toko Baru")
    return user


@pytest.fixture
def other_owner(db):
    user, _ = register_user(db, "auth-other", "other@tokobaru.co.id", "Budi")
    return user


@pytest.fixture
def category_ids(db, owner):
    """Name -> id of the owner's seeded categories."""
    return {category.name: category.id for category in owner.categories}
