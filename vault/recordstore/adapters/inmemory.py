from __future__ import annotations

import itertools
import logging
import threading
from typing import Any, Dict, List, Optional

from vault.core.errors import ConflictError, NotFoundError
from ..contracts import RECORD_TYPES, ItemKind, ItemRecord, UserRecord
from ..ports import VaultStorePort

log = logging.getLogger("recordstore")

_IMMUTABLE_FIELDS = ("id", "user_id")


class InMemoryVaultStore(VaultStorePort):
    """
    Process-local store keyed by numeric id, one table per item kind.
    Every operation runs under a single RLock and never awaits while holding it.
    Not shared across processes; adequate for tests + first iteration.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: Dict[int, UserRecord] = {}
        self._items: Dict[ItemKind, Dict[int, ItemRecord]] = {kind: {} for kind in ItemKind}
        self._user_ids = itertools.count(1)
        self._item_ids = {kind: itertools.count(1) for kind in ItemKind}

    # ---------- Users ----------
    async def create_user(self, *, email: str, password_hash: str) -> UserRecord:
        with self._lock:
            if any(u.email == email for u in self._users.values()):
                raise ConflictError("Email already registered")
            user = UserRecord(id=next(self._user_ids), email=email, password_hash=password_hash)
            self._users[user.id] = user
            log.info("user.create id=%s", user.id)
            return user

    async def get_user_by_id(self, user_id: int) -> Optional[UserRecord]:
        with self._lock:
            return self._users.get(user_id)

    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user
            return None

    async def erase_user(self, user_id: int) -> None:
        with self._lock:
            if user_id not in self._users:
                raise NotFoundError("User not found")
            # Build the whole post-erase state first, then swap it in.
            users = {uid: u for uid, u in self._users.items() if uid != user_id}
            items = {
                kind: {iid: rec for iid, rec in table.items() if rec.user_id != user_id}
                for kind, table in self._items.items()
            }
            self._users, self._items = users, items
            log.info("user.erase id=%s", user_id)

    async def count_users(self) -> int:
        with self._lock:
            return len(self._users)

    # ---------- Items ----------
    async def create(self, kind: ItemKind, user_id: int, data: Dict[str, Any]) -> ItemRecord:
        with self._lock:
            fields = {k: v for k, v in data.items() if k not in _IMMUTABLE_FIELDS}
            self._claim_title(kind, user_id, fields.get("title"))
            record = RECORD_TYPES[kind](id=next(self._item_ids[kind]), user_id=user_id, **fields)
            self._items[kind][record.id] = record
            log.info("item.create kind=%s id=%s user=%s", kind.value, record.id, user_id)
            return record

    async def find_by_id(self, kind: ItemKind, item_id: int) -> Optional[ItemRecord]:
        with self._lock:
            return self._items[kind].get(item_id)

    async def find_by_owner_and_title(self, kind: ItemKind, user_id: int, title: str) -> Optional[ItemRecord]:
        with self._lock:
            for record in self._items[kind].values():
                if record.user_id == user_id and record.title == title:
                    return record
            return None

    async def list_by_owner(self, kind: ItemKind, user_id: int) -> List[ItemRecord]:
        with self._lock:
            return [r for r in self._items[kind].values() if r.user_id == user_id]

    async def update(self, kind: ItemKind, item_id: int, data: Dict[str, Any]) -> ItemRecord:
        with self._lock:
            current = self._items[kind].get(item_id)
            if current is None:
                raise NotFoundError(f"{kind.value} {item_id} not found")
            merged = current.model_dump()
            merged.update({k: v for k, v in data.items() if k not in _IMMUTABLE_FIELDS})
            self._claim_title(kind, current.user_id, merged.get("title"), ignore_id=item_id)
            record = RECORD_TYPES[kind](**merged)
            self._items[kind][item_id] = record
            log.info("item.update kind=%s id=%s", kind.value, item_id)
            return record

    async def delete(self, kind: ItemKind, item_id: int) -> None:
        with self._lock:
            if self._items[kind].pop(item_id, None) is None:
                raise NotFoundError(f"{kind.value} {item_id} not found")
            log.info("item.delete kind=%s id=%s", kind.value, item_id)

    async def delete_all_for_owner(self, kind: ItemKind, user_id: int) -> int:
        with self._lock:
            doomed = [iid for iid, rec in self._items[kind].items() if rec.user_id == user_id]
            for iid in doomed:
                del self._items[kind][iid]
            return len(doomed)

    async def count(self, kind: ItemKind) -> int:
        with self._lock:
            return len(self._items[kind])

    def _claim_title(self, kind: ItemKind, user_id: int, title: Optional[str], ignore_id: Optional[int] = None) -> None:
        # caller holds the lock
        for record in self._items[kind].values():
            if record.user_id == user_id and record.title == title and record.id != ignore_id:
                raise ConflictError(f"{kind.value.capitalize()} with this title already exists!")
