from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import BaseModel

from vault.cipherservice.codec import SecretFieldCodec
from vault.core.errors import ConflictError, ForbiddenError, NotFoundError
from vault.recordstore.contracts import ItemKind, ItemRecord
from vault.recordstore.ports import VaultStorePort

log = logging.getLogger("itemservice")


class OwnedItemService:
    """
    CRUD over one item kind, restricted to the owning user.

    Every by-id access goes through ``_gate``: fetch by id first, then compare
    the owner, so "absent" (NotFoundError) and "someone else's"
    (ForbiddenError) stay distinguishable. Sensitive fields are protected
    before the store sees them and revealed on the way out.
    """

    kind: ItemKind
    label: str

    def __init__(self, store: VaultStorePort, codec: SecretFieldCodec):
        self.store = store
        self.codec = codec

    async def create(self, payload: BaseModel, user_id: int) -> ItemRecord:
        # fast path; the store re-checks the title atomically
        await self._ensure_title_free(payload.title, user_id)
        protected = self.codec.protect(payload)
        record = await self.store.create(self.kind, user_id, protected.model_dump())
        return self.codec.reveal(record)

    async def find_all(self, user_id: int) -> List[ItemRecord]:
        records = await self.store.list_by_owner(self.kind, user_id)
        return [self.codec.reveal(r) for r in records]

    async def find_one(self, item_id: int, user_id: int) -> ItemRecord:
        return self.codec.reveal(await self._gate(item_id, user_id))

    async def update(self, item_id: int, payload: BaseModel, user_id: int) -> ItemRecord:
        await self._gate(item_id, user_id)
        await self._ensure_title_free(payload.title, user_id, ignore_id=item_id)
        protected = self.codec.protect(payload)
        record = await self.store.update(self.kind, item_id, protected.model_dump())
        return self.codec.reveal(record)

    async def remove(self, item_id: int, user_id: int) -> None:
        await self._gate(item_id, user_id)
        await self.store.delete(self.kind, item_id)

    # --------- Helpers ----------
    async def _gate(self, item_id: int, user_id: int) -> ItemRecord:
        record = await self.store.find_by_id(self.kind, item_id)
        if record is None:
            raise NotFoundError(f"{self.label} not found")
        if record.user_id != user_id:
            log.info("item.gate forbidden kind=%s id=%s user=%s", self.kind.value, item_id, user_id)
            raise ForbiddenError()
        return record

    async def _ensure_title_free(self, title: str, user_id: int, ignore_id: Optional[int] = None) -> None:
        existing = await self.store.find_by_owner_and_title(self.kind, user_id, title)
        if existing is not None and existing.id != ignore_id:
            raise ConflictError(f"{self.label} with this title already exists!")


class NotesService(OwnedItemService):
    kind = ItemKind.NOTE
    label = "Note"


class CardsService(OwnedItemService):
    kind = ItemKind.CARD
    label = "Card"


class CredentialsService(OwnedItemService):
    kind = ItemKind.CREDENTIAL
    label = "Credential"
