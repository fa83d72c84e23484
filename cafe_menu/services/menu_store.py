"""
Transactional access to the Menu table.

Every write runs as one transaction holding one parameterized statement;
the commit happens when the `session.begin()` block exits. Any driver or
SQLAlchemy failure is re-raised as StorageError and nothing is retried.
"""

import logging
from collections.abc import Callable, Mapping
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Request
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql.expression import ColumnElement

from cafe_menu.errors import StorageError
from cafe_menu.metrics import MENU_STORE_OPERATIONS
from cafe_menu.models.menu_item import menu_table
from cafe_menu.schemas.menu_item import MenuItemWrite

logger = logging.getLogger(__name__)


def _mutable_columns(payload: MenuItemWrite) -> dict[str, Any]:
    return {
        "Name": payload.name,
        "Description": payload.description,
        "Price": payload.price,
        "Available": payload.available,
    }


class MenuStore:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        commit_timestamp: Callable[[], ColumnElement] = func.now,
    ) -> None:
        self._session_factory = session_factory
        # Store-side clock used for CreatedAt, evaluated inside the insert transaction
        self._commit_timestamp = commit_timestamp

    @asynccontextmanager
    async def _guard(self, operation: str, summary: str):
        try:
            yield
        except (SQLAlchemyError, OSError) as exc:
            MENU_STORE_OPERATIONS.labels(operation, "error").inc()
            raise StorageError(summary, details=str(exc)) from exc
        MENU_STORE_OPERATIONS.labels(operation, "ok").inc()

    async def _run_in_transaction(self, statement) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                await session.execute(statement)

    async def _fetch(self, statement) -> list[Mapping[str, Any]]:
        async with self._session_factory() as session:
            result = await session.execute(statement)
            return list(result.mappings().all())

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def insert(self, menu_id: str, payload: MenuItemWrite) -> None:
        statement = insert(menu_table).values(
            MenuId=menu_id,
            CreatedAt=self._commit_timestamp(),
            **_mutable_columns(payload),
        )
        async with self._guard("insert", "Failed to create menu item"):
            await self._run_in_transaction(statement)

    async def update(self, menu_id: str, payload: MenuItemWrite) -> None:
        """Replace the mutable columns. Matching zero rows is not an error."""
        statement = (
            update(menu_table)
            .where(menu_table.c.MenuId == menu_id)
            .values(**_mutable_columns(payload))
        )
        async with self._guard("update", "Failed to update menu item"):
            await self._run_in_transaction(statement)

    async def delete(self, menu_id: str) -> None:
        """Hard delete. Deleting an unknown id succeeds."""
        statement = delete(menu_table).where(menu_table.c.MenuId == menu_id)
        async with self._guard("delete", "Failed to delete menu item"):
            await self._run_in_transaction(statement)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get(
        self, menu_id: str, summary: str = "Failed to fetch menu item"
    ) -> Mapping[str, Any] | None:
        statement = select(menu_table).where(menu_table.c.MenuId == menu_id)
        async with self._guard("get", summary):
            rows = await self._fetch(statement)
        return rows[0] if rows else None

    async def list_all(self) -> list[Mapping[str, Any]]:
        statement = select(menu_table).order_by(menu_table.c.CreatedAt.desc())
        async with self._guard("list", "Failed to fetch menu items"):
            return await self._fetch(statement)


def get_menu_store(request: Request) -> MenuStore:
    return request.app.state.menu_store
