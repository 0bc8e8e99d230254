from .service import OwnedItemService, NotesService, CardsService, CredentialsService
from .contracts import CreateNoteRequest, CreateCardRequest, CreateCredentialRequest
from .routes import notes_router, cards_router, credentials_router

__all__ = [
    "OwnedItemService",
    "NotesService",
    "CardsService",
    "CredentialsService",
    "CreateNoteRequest",
    "CreateCardRequest",
    "CreateCredentialRequest",
    "notes_router",
    "cards_router",
    "credentials_router",
]
