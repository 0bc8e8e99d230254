from .contracts import (
    CardRecord,
    CredentialRecord,
    ItemKind,
    ItemRecord,
    NoteRecord,
    RECORD_TYPES,
    UserRecord,
)
from .ports import VaultStorePort
from .adapters.inmemory import InMemoryVaultStore

__all__ = [
    "CardRecord",
    "CredentialRecord",
    "ItemKind",
    "ItemRecord",
    "NoteRecord",
    "RECORD_TYPES",
    "UserRecord",
    "VaultStorePort",
    "InMemoryVaultStore",
]
