import logging

from fastapi import APIRouter, Depends, Request, status

from cafe_menu.schemas.menu_item import DeleteResponse, MenuItemResponse, MenuItemWrite
from cafe_menu.services import menu_service
from cafe_menu.services.menu_store import MenuStore, get_menu_store

router = APIRouter()
logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


@router.post("", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
async def create_menu_item(
    body: MenuItemWrite,
    request: Request,
    store: MenuStore = Depends(get_menu_store),
) -> MenuItemResponse:
    request_id = _request_id(request)
    logger.info(
        "Received create_menu_item request",
        extra={"request_id": request_id, "item_name": body.name},
    )
    return await menu_service.create_menu_item(store, body, request_id)


@router.get("", response_model=list[MenuItemResponse])
async def list_menu_items(
    request: Request,
    store: MenuStore = Depends(get_menu_store),
) -> list[MenuItemResponse]:
    logger.info(
        "Received list_menu_items request",
        extra={"request_id": _request_id(request)},
    )
    return await menu_service.list_menu_items(store)


@router.put("/{menu_id}", response_model=MenuItemResponse)
async def update_menu_item(
    menu_id: str,
    body: MenuItemWrite,
    request: Request,
    store: MenuStore = Depends(get_menu_store),
) -> MenuItemResponse:
    request_id = _request_id(request)
    logger.info(
        "Received update_menu_item request",
        extra={"request_id": request_id, "menu_id": menu_id},
    )
    return await menu_service.update_menu_item(store, menu_id, body, request_id)


@router.delete("/{menu_id}", response_model=DeleteResponse)
async def delete_menu_item(
    menu_id: str,
    request: Request,
    store: MenuStore = Depends(get_menu_store),
) -> DeleteResponse:
    request_id = _request_id(request)
    logger.info(
        "Received delete_menu_item request",
        extra={"request_id": request_id, "menu_id": menu_id},
    )
    await menu_service.delete_menu_item(store, menu_id, request_id)
    return DeleteResponse(success=True)
