from __future__ import annotations
from pydantic import AnyHttpUrl, BaseModel, TypeAdapter, constr, field_validator

from vault.recordstore.contracts import CardType

NonEmpty = constr(strip_whitespace=True, min_length=1)

_URL = TypeAdapter(AnyHttpUrl)


class CreateNoteRequest(BaseModel):
    title: NonEmpty
    content: NonEmpty


class CreateCardRequest(BaseModel):
    title: NonEmpty
    name: NonEmpty
    number: NonEmpty
    cvv: NonEmpty
    expiration_date: NonEmpty
    password: NonEmpty
    is_virtual: bool
    type: CardType


class CreateCredentialRequest(BaseModel):
    title: NonEmpty
    url: str
    username: NonEmpty
    password: NonEmpty

    @field_validator("url")
    @classmethod
    def http_url(cls, v: str) -> str:
        # validate but keep the caller's spelling
        try:
            _URL.validate_python(v)
        except ValueError:
            raise ValueError("value is not a valid http(s) URL") from None
        return v
