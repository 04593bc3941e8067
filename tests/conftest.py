"""Pytest configuration and shared fixtures for all tests."""

import os

# Minimal environment so Settings can be built in tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOGISTICS_WS_URL", "ws://localhost:8546")
os.environ.setdefault("TOKEN_WS_URL", "ws://localhost:8547")

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from explorer.config.database import create_session_maker
from explorer.models import Base
from explorer.services.chain.contracts import LogisticsContracts
from explorer.services.chain.prober import CapabilityProber
from explorer.services.classifier.classifier import TransactionClassifier
from explorer.services.decoding.event_table import build_event_table
from explorer.services.decoding.log_decoder import LogDecoder
from explorer.services.sync.flavors import (
    LOGISTICS,
    TOKEN,
    build_handlers,
    build_pipeline,
)

from tests.factories import FakeChain


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite engine with SAVEPOINT support."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # pysqlite's own transaction handling breaks SAVEPOINT, let SQLAlchemy emit BEGIN
    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    """Session factory bound to the test engine."""
    return create_session_maker(engine)


@pytest_asyncio.fixture
async def session(session_maker):
    """Session with an open transaction, rolled back after the test."""
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def chain():
    """Scripted in-memory chain."""
    return FakeChain()


@pytest.fixture
def prober(chain):
    return CapabilityProber(chain)


@pytest.fixture
def contracts(chain):
    return LogisticsContracts(chain)


@pytest.fixture
def logistics_pipeline(chain, session_maker):
    """Logistics pipeline over the fake chain and the test database."""
    return build_pipeline("logistics", chain, session_maker)


@pytest.fixture
def token_pipeline(chain, session_maker):
    """Token pipeline over the fake chain and the test database."""
    return build_pipeline("token", chain, session_maker)


def _classifier(spec, chain) -> TransactionClassifier:
    return TransactionClassifier(
        prober=CapabilityProber(chain),
        decoder=LogDecoder(build_event_table(*spec.abis)),
        handlers=build_handlers(spec, chain),
    )


@pytest.fixture
def logistics_classifier(chain):
    """Classifier of the logistics network, no database involved."""
    return _classifier(LOGISTICS, chain)


@pytest.fixture
def token_classifier(chain):
    """Classifier of the token network, no database involved."""
    return _classifier(TOKEN, chain)
