from .cipher import SymmetricCipher, derive_key
from .codec import (
    SecretFieldCodec,
    CARD_SECRET_FIELDS,
    CREDENTIAL_SECRET_FIELDS,
    NOTE_SECRET_FIELDS,
)
from .config import CipherSettings

__all__ = [
    "SymmetricCipher",
    "derive_key",
    "SecretFieldCodec",
    "CARD_SECRET_FIELDS",
    "CREDENTIAL_SECRET_FIELDS",
    "NOTE_SECRET_FIELDS",
    "CipherSettings",
]
