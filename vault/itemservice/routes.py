# No postponed annotations in this module: body_model is a closure variable FastAPI must resolve per router.
from typing import Type

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel

from vault.authservice.contracts import AuthenticatedUser
from vault.authservice.deps import get_current_user
from vault.core.contracts import UWFResponse
from vault.recordstore.contracts import ItemKind
from .contracts import CreateCardRequest, CreateCredentialRequest, CreateNoteRequest
from .service import OwnedItemService


def make_item_router(kind: ItemKind, prefix: str, body_model: Type[BaseModel]) -> APIRouter:
    """Build the five owner-scoped CRUD routes for one item kind. Every route requires a bearer token."""
    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")])

    def get_service(request: Request) -> OwnedItemService:
        return request.app.state.item_services[kind]

    @router.post("", response_model=UWFResponse, status_code=status.HTTP_201_CREATED)
    async def create_item(
        req: body_model,
        user: AuthenticatedUser = Depends(get_current_user),
        svc: OwnedItemService = Depends(get_service),
    ):
        return UWFResponse(ok=True, result=await svc.create(req, user.id))

    @router.get("", response_model=UWFResponse)
    async def list_items(
        user: AuthenticatedUser = Depends(get_current_user),
        svc: OwnedItemService = Depends(get_service),
    ):
        return UWFResponse(ok=True, result=await svc.find_all(user.id))

    @router.get("/{item_id}", response_model=UWFResponse)
    async def get_item(
        item_id: int,
        user: AuthenticatedUser = Depends(get_current_user),
        svc: OwnedItemService = Depends(get_service),
    ):
        return UWFResponse(ok=True, result=await svc.find_one(item_id, user.id))

    @router.put("/{item_id}", response_model=UWFResponse)
    async def update_item(
        item_id: int,
        req: body_model,
        user: AuthenticatedUser = Depends(get_current_user),
        svc: OwnedItemService = Depends(get_service),
    ):
        return UWFResponse(ok=True, result=await svc.update(item_id, req, user.id))

    @router.delete("/{item_id}", response_model=UWFResponse)
    async def delete_item(
        item_id: int,
        user: AuthenticatedUser = Depends(get_current_user),
        svc: OwnedItemService = Depends(get_service),
    ):
        await svc.remove(item_id, user.id)
        return UWFResponse(ok=True, result={"deleted": True})

    return router


notes_router = make_item_router(ItemKind.NOTE, "/notes", CreateNoteRequest)
cards_router = make_item_router(ItemKind.CARD, "/cards", CreateCardRequest)
credentials_router = make_item_router(ItemKind.CREDENTIAL, "/credentials", CreateCredentialRequest)
