from __future__ import annotations
from enum import Enum
from typing import Dict, Literal, Type, Union
from pydantic import BaseModel

CardType = Literal["credit", "debit", "both"]


class ItemKind(str, Enum):
    NOTE = "note"
    CARD = "card"
    CREDENTIAL = "credential"


class UserRecord(BaseModel):
    """Stored user row. ``password_hash`` never leaves the auth component."""
    id: int
    email: str
    password_hash: str


class NoteRecord(BaseModel):
    id: int
    user_id: int
    title: str
    content: str


class CardRecord(BaseModel):
    id: int
    user_id: int
    title: str
    name: str
    number: str
    cvv: str
    expiration_date: str
    password: str
    is_virtual: bool
    type: CardType


class CredentialRecord(BaseModel):
    id: int
    user_id: int
    title: str
    url: str
    username: str
    password: str


ItemRecord = Union[NoteRecord, CardRecord, CredentialRecord]

RECORD_TYPES: Dict[ItemKind, Type[BaseModel]] = {
    ItemKind.NOTE: NoteRecord,
    ItemKind.CARD: CardRecord,
    ItemKind.CREDENTIAL: CredentialRecord,
}
