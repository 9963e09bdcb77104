# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from infra.db.base import init_db
from infra.services import build_services


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    init_db(engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def services(session):
    return build_services(session)


@pytest.fixture(autouse=True)
def _clear_evm_env(monkeypatch):
    # process-wide defaults must not leak into tests
    monkeypatch.delenv("PM_EVM_ETC_METHOD", raising=False)
    monkeypatch.delenv("PM_EVM_EXCLUDE_HOLIDAYS", raising=False)
