import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")
os.environ.setdefault("DB_AUTO_CREATE", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.audit.sink import AuditSink
from app.db import get_db
from app.main import create_app
from app.redis_client import get_redis
from app.models import Base
from app.models.enums import Role
from app.models.org import Org
from app.models.user import User
from factories import make_org, make_user

@pytest.fixture()
def db_session() -> Session:
    # fresh in-memory db per test; StaticPool keeps the single connection alive
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session: Session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()

@pytest.fixture()
def audit() -> AuditSink:
    return AuditSink()

@pytest.fixture()
def fake_redis() -> fakeredis.FakeRedis:
    # own server per test so limiter counters never carry over
    return fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)

@pytest.fixture()
def client(db_session: Session, audit: AuditSink, fake_redis: fakeredis.FakeRedis) -> TestClient:
    app = create_app(audit_sink=audit)

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_redis] = lambda: fake_redis
    return TestClient(app)

@pytest.fixture()
def root_org(db_session: Session) -> Org:
    return make_org(db_session, "Root")

@pytest.fixture()
def other_org(db_session: Session) -> Org:
    return make_org(db_session, "Other")

@pytest.fixture()
def owner(db_session: Session, root_org: Org) -> User:
    return make_user(db_session, root_org, Role.owner)

@pytest.fixture()
def admin(db_session: Session, root_org: Org) -> User:
    return make_user(db_session, root_org, Role.admin)

@pytest.fixture()
def viewer(db_session: Session, root_org: Org) -> User:
    return make_user(db_session, root_org, Role.viewer)

@pytest.fixture()
def other_owner(db_session: Session, other_org: Org) -> User:
    return make_user(db_session, other_org, Role.owner)
