from __future__ import annotations
from typing import Iterable, Tuple, TypeVar

from pydantic import BaseModel

from .cipher import SymmetricCipher

CARD_SECRET_FIELDS: Tuple[str, ...] = ("cvv", "password")
CREDENTIAL_SECRET_FIELDS: Tuple[str, ...] = ("password",)
NOTE_SECRET_FIELDS: Tuple[str, ...] = ()

M = TypeVar("M", bound=BaseModel)


class SecretFieldCodec:
    """
    Applies the cipher to a fixed set of fields on a pydantic model.
    Both directions return a copy; the input model is left untouched.
    """

    def __init__(self, cipher: SymmetricCipher, fields: Iterable[str]):
        self.cipher = cipher
        self.fields = tuple(fields)

    def protect(self, record: M) -> M:
        """Encrypt the sensitive fields. Use before handing a record to the store."""
        if not self.fields:
            return record.model_copy()
        return record.model_copy(update={f: self.cipher.encrypt(getattr(record, f)) for f in self.fields})

    def reveal(self, record: M) -> M:
        """Decrypt the sensitive fields. Raises DecryptionError for unreadable values."""
        if not self.fields:
            return record.model_copy()
        return record.model_copy(update={f: self.cipher.decrypt(getattr(record, f)) for f in self.fields})
