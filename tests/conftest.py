"""Shared fixtures.

The store runs on a throwaway SQLite file through aiosqlite. A `test_commit_ts()`
SQL function is registered on every connection so CreatedAt advances one
second per insert, which keeps newest-first ordering deterministic.
"""

import itertools
import os
from datetime import datetime, timedelta

# Must be set before cafe_menu.config builds its module-level settings
os.environ.setdefault("TRACING_ENABLED", "false")
os.environ.setdefault("CREATE_TABLES", "false")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, func

from cafe_menu.config import Settings
from cafe_menu.database import build_engine, build_session_factory, create_tables
from cafe_menu.main import create_app
from cafe_menu.services.menu_store import MenuStore, get_menu_store

_CLOCK_START = datetime(2026, 1, 1, 8, 0, 0)


def _register_commit_clock(engine) -> None:
    ticks = itertools.count(1)

    def commit_ts() -> str:
        return (_CLOCK_START + timedelta(seconds=next(ticks))).isoformat(sep=" ")

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, _connection_record):
        dbapi_connection.create_function("test_commit_ts", 0, commit_ts)


def _build_client(store: MenuStore) -> AsyncClient:
    app = create_app(Settings(tracing_enabled=False, create_tables=False))
    app.dependency_overrides[get_menu_store] = lambda: store
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'menu.db'}")
    _register_commit_clock(engine)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def store(engine) -> MenuStore:
    return MenuStore(build_session_factory(engine), commit_timestamp=func.test_commit_ts)


@pytest_asyncio.fixture
async def broken_store(tmp_path):
    # No tables created: every statement fails with "no such table"
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    yield MenuStore(build_session_factory(engine))
    await engine.dispose()


@pytest_asyncio.fixture
async def client(store):
    async with _build_client(store) as ac:
        yield ac


@pytest_asyncio.fixture
async def broken_client(broken_store):
    async with _build_client(broken_store) as ac:
        yield ac


@pytest.fixture
def latte() -> dict:
    return {
        "name": "Latte",
        "description": "Hot milk coffee",
        "price": 450,
        "available": True,
    }
