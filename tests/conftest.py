import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from salesboard.db.session import build_engine, get_db, init_db
from salesboard.ingest.service import seed_reference_data


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture
def session(session_factory):
    with session_factory() as session:
        seed_reference_data(session)
        yield session


@pytest.fixture
def client(session, session_factory):
    from salesboard.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
