import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

# FORCE model registration
import app.models  # noqa

from app.db.base import Base
from app.db.session import build_engine, get_db
from app.main import create_app
from app.services.audit_service import AuditContext
from app.tests.factories import auth


@pytest.fixture(scope="function")
def engine():
    eng = build_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(bind=eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture(scope="function")
def db(engine):
    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(engine):
    app = create_app(init_storage=False)
    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, future=True
    )

    async def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def ctx():
    return AuditContext(actor_participant_id="tester", request_id="req-test")


@pytest.fixture
def owner_headers():
    return auth("owner-1", "PROJECT_OWNER")


@pytest.fixture
def admin_headers():
    return auth("admin-1", "ADMIN")


@pytest.fixture
def investor_headers():
    return auth("investor-1", "INVESTOR")
