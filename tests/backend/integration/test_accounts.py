"""
Service-level tests for account registration, login and credential changes.
"""
import asyncio

import pytest

from app.core.errors import EmailTaken, InvalidCredentials, UsernameTaken, WeakPassword
from app.core.security import decode_access_token, verify_password
from app.models.user import User
from app.services import accounts


pytestmark = pytest.mark.asyncio

PASSWORD = "Wonder#land1"


async def test_register_hashes_password_and_lowercases_email(db):
    user = await accounts.register("alice", "Alice Liddell", "Alice@Example.COM", PASSWORD)
    stored = await User.get(id=user.id)
    assert stored.email == "alice@example.com"
    assert stored.password_hash != PASSWORD
    assert verify_password(PASSWORD, stored.password_hash)
    assert stored.bio == ""
    assert stored.avatar is None


async def test_register_duplicate_username(db):
    await accounts.register("alice", "Alice", "alice@example.com", PASSWORD)
    with pytest.raises(UsernameTaken):
        await accounts.register("alice", "Other Alice", "other@example.com", PASSWORD)


async def test_register_duplicate_email_case_insensitive(db):
    await accounts.register("alice", "Alice", "alice@example.com", PASSWORD)
    with pytest.raises(EmailTaken):
        await accounts.register("alice2", "Alice Two", "ALICE@example.com", PASSWORD)


async def test_register_weak_password(db):
    with pytest.raises(WeakPassword):
        await accounts.register("alice", "Alice", "alice@example.com", "alllowercase1")
    assert await User.all().count() == 0


async def test_concurrent_registration_same_username(db):
    results = await asyncio.gather(
        accounts.register("racer", "Racer One", "one@example.com", PASSWORD),
        accounts.register("racer", "Racer Two", "two@example.com", PASSWORD),
        return_exceptions=True,
    )
    successes = [r for r in results if isinstance(r, User)]
    failures = [r for r in results if isinstance(r, UsernameTaken)]
    assert len(successes) == 1
    assert len(failures) == 1
    assert await User.filter(username="racer").count() == 1


async def test_authenticate_issues_token(db):
    user = await accounts.register("alice", "Alice", "alice@example.com", PASSWORD)
    logged_in, token = await accounts.authenticate("ALICE@example.com", PASSWORD)
    assert logged_in.id == user.id
    assert decode_access_token(token) == str(user.id)


async def test_authenticate_rejects_bad_credentials(db):
    await accounts.register("alice", "Alice", "alice@example.com", PASSWORD)
    with pytest.raises(InvalidCredentials):
        await accounts.authenticate("alice@example.com", "Wrong#pass1")
    with pytest.raises(InvalidCredentials):
        await accounts.authenticate("nobody@example.com", PASSWORD)


async def test_change_password_wrong_current_keeps_hash(db):
    user = await accounts.register("alice", "Alice", "alice@example.com", PASSWORD)
    before = (await User.get(id=user.id)).password_hash

    with pytest.raises(InvalidCredentials):
        await accounts.change_password(user.id, "Not#thePass1", "Brand#New12")
    assert (await User.get(id=user.id)).password_hash == before


async def test_change_password_weak_new_password(db):
    user = await accounts.register("alice", "Alice", "alice@example.com", PASSWORD)
    before = (await User.get(id=user.id)).password_hash

    with pytest.raises(WeakPassword) as exc_info:
        await accounts.change_password(user.id, PASSWORD, "weakpassword")
    assert exc_info.value.field == "newPassword"
    assert (await User.get(id=user.id)).password_hash == before


async def test_change_password_success(db):
    user = await accounts.register("alice", "Alice", "alice@example.com", PASSWORD)
    await accounts.change_password(user.id, PASSWORD, "Brand#New12")

    with pytest.raises(InvalidCredentials):
        await accounts.authenticate("alice@example.com", PASSWORD)
    logged_in, _ = await accounts.authenticate("alice@example.com", "Brand#New12")
    assert logged_in.id == user.id


async def test_update_profile_partial(db):
    user = await accounts.register("alice", "Alice", "alice@example.com", PASSWORD)
    updated = await accounts.update_profile(user.id, bio="Curiouser and curiouser")
    assert updated.bio == "Curiouser and curiouser"
    assert updated.full_name == "Alice"
    assert updated.username == "alice"


async def test_update_profile_username_taken(db):
    await accounts.register("alice", "Alice", "alice@example.com", PASSWORD)
    bob = await accounts.register("bob", "Bob", "bob@example.com", PASSWORD)
    with pytest.raises(UsernameTaken):
        await accounts.update_profile(bob.id, username="alice")
    assert (await User.get(id=bob.id)).username == "bob"


async def test_update_email(db):
    await accounts.register("alice", "Alice", "alice@example.com", PASSWORD)
    bob = await accounts.register("bob", "Bob", "bob@example.com", PASSWORD)

    with pytest.raises(EmailTaken):
        await accounts.update_email(bob.id, "Alice@example.com")

    updated = await accounts.update_email(bob.id, "Robert@Example.com")
    assert updated.email == "robert@example.com"


async def test_public_view_has_no_password(db):
    user = await accounts.register("alice", "Alice", "alice@example.com", PASSWORD)
    view = (await accounts.public_view(user)).model_dump()
    assert "password" not in view
    assert "password_hash" not in view
    assert view["followers"] == []
    assert view["following"] == []
    assert view["username"] == "alice"
