import pytest

from vault.authservice import (
    AccountService, HS256TokenSigner, IdentityResolver, PasswordHasher, TokenService,
)
from vault.authservice.contracts import SignInRequest, SignUpRequest
from vault.authservice.deps import extract_bearer_token
from vault.core.errors import ConflictError, NotFoundError, UnauthorizedError
from vault.recordstore import InMemoryVaultStore, ItemKind

SECRET = "test-jwt-secret-0123456789abcdefghijklmnop"
EMAIL = "a@b.com"
PASSWORD = "Aa1234567!"


def make_auth():
    store = InMemoryVaultStore()
    tokens = TokenService(
        signer=HS256TokenSigner(SECRET), issuer="lucasnerism", audience="users", ttl_seconds=3600,
    )
    svc = AccountService(store=store, hasher=PasswordHasher(rounds=4), tokens=tokens)
    resolver = IdentityResolver(tokens=tokens, store=store)
    return store, svc, resolver


# ---------- AccountService ----------
@pytest.mark.asyncio
async def test_sign_up_returns_summary_without_hash():
    store, svc, _ = make_auth()
    summary = await svc.sign_up(SignUpRequest(email=EMAIL, password=PASSWORD))
    assert summary.email == EMAIL
    assert set(summary.model_dump()) == {"id", "email"}

    stored = await store.get_user_by_id(summary.id)
    assert stored.password_hash != PASSWORD
    assert stored.password_hash.startswith("$2b$")


@pytest.mark.asyncio
async def test_sign_up_duplicate_email_conflicts_and_keeps_count():
    store, svc, _ = make_auth()
    await svc.sign_up(SignUpRequest(email=EMAIL, password=PASSWORD))
    with pytest.raises(ConflictError):
        await svc.sign_up(SignUpRequest(email=EMAIL, password="Bb7654321?"))
    assert await store.count_users() == 1


@pytest.mark.asyncio
async def test_sign_in_issues_token_resolving_to_user():
    _, svc, resolver = make_auth()
    summary = await svc.sign_up(SignUpRequest(email=EMAIL, password=PASSWORD))
    issued = await svc.sign_in(SignInRequest(email=EMAIL, password=PASSWORD))
    user = await resolver.resolve(f"Bearer {issued.token}")
    assert user.id == summary.id
    assert user.email == EMAIL


@pytest.mark.asyncio
async def test_sign_in_failures_are_indistinguishable():
    _, svc, _ = make_auth()
    await svc.sign_up(SignUpRequest(email=EMAIL, password=PASSWORD))

    with pytest.raises(UnauthorizedError) as wrong_password:
        await svc.sign_in(SignInRequest(email=EMAIL, password="Wrong12345!"))
    with pytest.raises(UnauthorizedError) as unknown_email:
        await svc.sign_in(SignInRequest(email="nobody@b.com", password=PASSWORD))

    assert type(wrong_password.value) is type(unknown_email.value)
    assert wrong_password.value.to_payload() == unknown_email.value.to_payload()
    assert wrong_password.value.message == "Email or password invalid"


class RecordingHasher(PasswordHasher):
    def __init__(self, rounds: int = 4):
        super().__init__(rounds)
        self.verified = []

    def verify(self, password: str, encoded: str) -> bool:
        self.verified.append(encoded)
        return super().verify(password, encoded)


@pytest.mark.asyncio
async def test_sign_in_unknown_email_still_runs_a_bcrypt_check():
    store, _, _ = make_auth()
    hasher = RecordingHasher()
    tokens = TokenService(
        signer=HS256TokenSigner(SECRET), issuer="lucasnerism", audience="users", ttl_seconds=3600,
    )
    svc = AccountService(store=store, hasher=hasher, tokens=tokens)

    with pytest.raises(UnauthorizedError):
        await svc.sign_in(SignInRequest(email="nobody@b.com", password=PASSWORD))
    assert len(hasher.verified) == 1
    assert hasher.verified[0].startswith("$2b$04$")


@pytest.mark.asyncio
async def test_sign_up_keeps_email_spelling():
    store, svc, _ = make_auth()
    mixed = await svc.sign_up(SignUpRequest(email="a@B.com", password=PASSWORD))
    lower = await svc.sign_up(SignUpRequest(email="a@b.com", password=PASSWORD))
    assert mixed.email == "a@B.com"
    assert mixed.id != lower.id
    assert await store.count_users() == 2


@pytest.mark.asyncio
async def test_erase_with_correct_password_removes_everything():
    store, svc, _ = make_auth()
    user = await svc.sign_up(SignUpRequest(email=EMAIL, password=PASSWORD))
    await store.create(ItemKind.NOTE, user.id, {"title": "n", "content": "c"})
    await store.create(ItemKind.CREDENTIAL, user.id, {"title": "c", "url": "https://x.io", "username": "u", "password": "p"})

    await svc.erase_account(user.id, PASSWORD)

    assert await store.count_users() == 0
    for kind in ItemKind:
        assert await store.count(kind) == 0


@pytest.mark.asyncio
async def test_erase_with_wrong_password_changes_nothing():
    store, svc, _ = make_auth()
    user = await svc.sign_up(SignUpRequest(email=EMAIL, password=PASSWORD))
    await store.create(ItemKind.NOTE, user.id, {"title": "n", "content": "c"})

    with pytest.raises(UnauthorizedError):
        await svc.erase_account(user.id, "Wrong12345!")

    assert await store.count_users() == 1
    assert await store.count(ItemKind.NOTE) == 1


@pytest.mark.asyncio
async def test_erase_unknown_user_is_not_found():
    _, svc, _ = make_auth()
    with pytest.raises(NotFoundError):
        await svc.erase_account(123, PASSWORD)


# ---------- IdentityResolver ----------
@pytest.mark.parametrize("header,expected", [
    ("Bearer abc.def.ghi", "abc.def.ghi"),
    ("bearer abc", "abc"),
    ("Bearer   abc  ", "abc"),
    (None, None),
    ("", None),
    ("Bearer", None),
    ("Bearer ", None),
    ("Basic dXNlcjpwYXNz", None),
    ("Bearer a b", None),
    ("abc.def.ghi", None),
])
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


@pytest.mark.asyncio
@pytest.mark.parametrize("header", [None, "", "Bearer ", "Token x", "Bearer not-a-jwt"])
async def test_resolver_rejects_missing_or_bad_credentials(header):
    _, _, resolver = make_auth()
    with pytest.raises(UnauthorizedError):
        await resolver.resolve(header)


@pytest.mark.asyncio
async def test_resolver_rejects_token_of_erased_user():
    _, svc, resolver = make_auth()
    user = await svc.sign_up(SignUpRequest(email=EMAIL, password=PASSWORD))
    issued = await svc.sign_in(SignInRequest(email=EMAIL, password=PASSWORD))
    await svc.erase_account(user.id, PASSWORD)

    with pytest.raises(UnauthorizedError):
        await resolver.resolve(f"Bearer {issued.token}")
