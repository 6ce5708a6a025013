"""
Shared fixtures: a deterministic clock, an in-memory session database and
a ready console.
"""
from datetime import datetime, timedelta

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from estate_crm.config import Settings
from estate_crm.console import CRMConsole
from estate_crm.database import init_db
from estate_crm.repositories.session_repo import SessionRepository
from estate_crm.repositories.store import EntityStore
from estate_crm.schemas.employee import EmployeeCreate


class FakeClock:
    """Clock that moves forward one second per reading."""

    def __init__(self, start: datetime = datetime(2025, 3, 1, 9, 0, 0), step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + self.step
        return now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config():
    return Settings(SEED_DEMO_DATA=False, SESSION_DATABASE_URL="sqlite://")


@pytest.fixture
def store(clock, config):
    return EntityStore(clock=clock, config=config)


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    init_db(engine)
    return engine


@pytest.fixture
def session_repo(db_engine):
    return SessionRepository(db_engine)


@pytest.fixture
def console(store, session_repo, config):
    return CRMConsole(store=store, session_repo=session_repo, config=config).init()


def make_employee_data(**overrides) -> EmployeeCreate:
    data = {
        "name": "John Doe",
        "phone": "555-0101",
        "email": "john@crm.com",
        "address": "123 Main St",
        "designation": "Caller",
        "password": "password",
    }
    data.update(overrides)
    return EmployeeCreate(**data)


@pytest.fixture
def employee_data():
    return make_employee_data
