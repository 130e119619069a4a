import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import roadmap.models  # noqa: F401
from roadmap.core.database import get_db
from roadmap.main import app
from roadmap.models.base import Base
from roadmap.services.catalog import CatalogCourse
from roadmap.services.terms import CreditPolicy, Season, generate_terms


@pytest.fixture
def make_course():
    def _make(code, credits=3, prereqs=(), coreqs=(), alts=(), elective=False, course_id=None):
        return CatalogCourse(
            id=course_id or code,
            code=code,
            name=f"Course {code}",
            credits=credits,
            is_elective=elective,
            prerequisites=frozenset(prereqs),
            corequisites=frozenset(coreqs),
            alternatives=frozenset(alts),
        )

    return _make


@pytest.fixture
def terms():
    return generate_terms(Season.FALL, 2026, 8, policy=CreditPolicy())


@pytest.fixture
def full_load_terms():
    # target == maximum, so every term is filled to the ceiling
    return generate_terms(Season.FALL, 2026, 8, policy=CreditPolicy(target=18, minimum=12, maximum=18))


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    app.dependency_overrides[get_db] = lambda: db_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
