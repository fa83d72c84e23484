import logging
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from cafe_menu.errors import NotFoundError, StorageError
from cafe_menu.schemas.menu_item import MenuItemResponse, MenuItemWrite
from cafe_menu.services.menu_store import MenuStore

logger = logging.getLogger(__name__)

# Store column name -> external field name
_FIELD_NAMES = {
    "MenuId": "id",
    "Name": "name",
    "Description": "description",
    "Price": "price",
    "Available": "available",
    "CreatedAt": "createdAt",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def mint_menu_id() -> str:
    return str(uuid.uuid4())


def _build_response(row: Mapping[str, Any]) -> MenuItemResponse:
    return MenuItemResponse.model_validate(
        {_FIELD_NAMES[column]: value for column, value in row.items() if column in _FIELD_NAMES}
    )


def _constructed_response(menu_id: str, payload: MenuItemWrite) -> MenuItemResponse:
    return MenuItemResponse(
        id=menu_id,
        name=payload.name,
        description=payload.description,
        price=payload.price,
        available=payload.available,
        created_at=datetime.now(timezone.utc),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def list_menu_items(store: MenuStore) -> list[MenuItemResponse]:
    rows = await store.list_all()
    return [_build_response(row) for row in rows]


async def create_menu_item(
    store: MenuStore,
    payload: MenuItemWrite,
    request_id: str,
) -> MenuItemResponse:
    menu_id = mint_menu_id()
    await store.insert(menu_id, payload)

    logger.info(
        "Menu item persisted",
        extra={"menu_id": menu_id, "request_id": request_id},
    )

    # Read back so createdAt is the store-assigned value, not our clock.
    # The insert has committed, so a failed read must not turn into an error.
    try:
        row = await store.get(menu_id, summary="Failed to read back menu item")
    except StorageError as exc:
        logger.warning(
            "Read-back after create failed, returning approximate createdAt",
            extra={"menu_id": menu_id, "request_id": request_id, "details": exc.details},
        )
        return _constructed_response(menu_id, payload)

    if row is not None:
        return _build_response(row)

    logger.warning(
        "Created menu item vanished before read-back, returning approximate createdAt",
        extra={"menu_id": menu_id, "request_id": request_id},
    )
    return _constructed_response(menu_id, payload)


async def update_menu_item(
    store: MenuStore,
    menu_id: str,
    payload: MenuItemWrite,
    request_id: str,
) -> MenuItemResponse:
    await store.update(menu_id, payload)

    row = await store.get(menu_id, summary="Failed to update menu item")
    if row is None:
        logger.info(
            "Update matched no menu item",
            extra={"menu_id": menu_id, "request_id": request_id},
        )
        raise NotFoundError("Menu item not found")

    logger.info(
        "Menu item updated",
        extra={"menu_id": menu_id, "request_id": request_id},
    )
    return _build_response(row)


async def delete_menu_item(store: MenuStore, menu_id: str, request_id: str) -> None:
    await store.delete(menu_id)
    logger.info(
        "Menu item deleted",
        extra={"menu_id": menu_id, "request_id": request_id},
    )
