from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .contracts import ItemKind, ItemRecord, UserRecord


class VaultStorePort(ABC):
    """
    Contract for persistence of users and their owned items.
    Item fields arrive already protected; the store never sees plaintext secrets.
    """

    # ---------- Users ----------
    @abstractmethod
    async def create_user(self, *, email: str, password_hash: str) -> UserRecord:
        """Persist a user. Raises ConflictError when the email is taken."""

    @abstractmethod
    async def get_user_by_id(self, user_id: int) -> Optional[UserRecord]: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[UserRecord]: ...

    @abstractmethod
    async def erase_user(self, user_id: int) -> None:
        """
        Delete the user and every owned note, card and credential as one unit.
        Either everything is gone afterwards or nothing changed.
        """

    @abstractmethod
    async def count_users(self) -> int: ...

    # ---------- Items ----------
    @abstractmethod
    async def create(self, kind: ItemKind, user_id: int, data: Dict[str, Any]) -> ItemRecord:
        """Insert an item. Raises ConflictError when the owner already has one with this title."""

    @abstractmethod
    async def find_by_id(self, kind: ItemKind, item_id: int) -> Optional[ItemRecord]: ...

    @abstractmethod
    async def find_by_owner_and_title(self, kind: ItemKind, user_id: int, title: str) -> Optional[ItemRecord]: ...

    @abstractmethod
    async def list_by_owner(self, kind: ItemKind, user_id: int) -> List[ItemRecord]: ...

    @abstractmethod
    async def update(self, kind: ItemKind, item_id: int, data: Dict[str, Any]) -> ItemRecord:
        """
        Replace the mutable fields of an item. Raises NotFoundError when absent
        and ConflictError when another item of the owner already has the new title.
        """

    @abstractmethod
    async def delete(self, kind: ItemKind, item_id: int) -> None:
        """Raises NotFoundError when absent."""

    @abstractmethod
    async def delete_all_for_owner(self, kind: ItemKind, user_id: int) -> int:
        """Returns the number of deleted items."""

    @abstractmethod
    async def count(self, kind: ItemKind) -> int: ...
