"""Tests for IdentityService, the user entity and the admin bootstrap script."""

import uuid

import pytest

from knowledge_hub.core.errors import AuthenticationError, NotFoundError, ValidationError
from knowledge_hub.core.security import create_access_token, get_password_hash, verify_password, verify_token
from knowledge_hub.domains.documents.entities import Document
from knowledge_hub.domains.identity.entities import User, UserRole
from knowledge_hub.domains.identity.services import IdentityService
from knowledge_hub.scripts.create_admin import parse_args


@pytest.fixture
def identity(user_repository):
    return IdentityService(user_repository)


def test_password_hashing():
    hashed = get_password_hash("s3cret-pass")

    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong", hashed)


def test_long_passwords_hash_on_first_72_bytes():
    hashed = get_password_hash("x" * 100)
    assert verify_password("x" * 72, hashed)


def test_token_roundtrip_and_tampering():
    token = create_access_token({"sub": "abc"})

    assert verify_token(token)["sub"] == "abc"
    assert verify_token(token + "x") is None
    assert verify_token("not-a-token") is None


def test_can_modify_owner_or_admin(alice, bob, admin):
    doc = Document.create_document("Notes", "Body", alice.to_ref())

    assert alice.can_modify(doc)
    assert not bob.can_modify(doc)
    assert admin.can_modify(doc)


@pytest.mark.asyncio
async def test_register_issues_token_for_new_user(identity):
    user, token = await identity.register_user("Carol", "carol@example.com", "carol-pass")

    assert user.role == UserRole.MEMBER
    assert user.password_hash != "carol-pass"
    payload = verify_token(token)
    assert payload["sub"] == str(user.id)
    assert payload["role"] == "member"


@pytest.mark.asyncio
async def test_register_duplicate_email(identity, alice):
    with pytest.raises(ValidationError, match="User already exists"):
        await identity.register_user("Alice again", "alice@example.com", "whatever")


@pytest.mark.asyncio
async def test_login(identity, alice):
    user, token = await identity.login_user("alice@example.com", "alice-password")
    assert user.id == alice.id
    assert await identity.get_current_user_from_token(token) == alice

    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        await identity.login_user("alice@example.com", "wrong-password")
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        await identity.login_user("nobody@example.com", "alice-password")


@pytest.mark.asyncio
async def test_token_for_unknown_user_resolves_to_none(identity):
    ghost = User.create_user("Ghost", "ghost@example.com", "boo-boo")

    assert await identity.get_current_user_from_token(IdentityService.issue_token(ghost)) is None
    assert await identity.get_current_user_from_token(create_access_token({"sub": "not-a-uuid"})) is None
    assert await identity.get_current_user_from_token(create_access_token({"role": "admin"})) is None


@pytest.mark.asyncio
async def test_change_role(identity, alice):
    promoted = await identity.change_role(alice.id, UserRole.ADMIN)
    assert promoted.is_admin

    with pytest.raises(NotFoundError):
        await identity.change_role(uuid.uuid4(), UserRole.ADMIN)


@pytest.mark.asyncio
async def test_ensure_admin_creates_or_promotes(identity, user_repository, alice):
    created = await identity.ensure_admin("Root", "root@example.com", "root-password")
    assert created.is_admin
    assert created.authenticate("root-password")

    promoted = await identity.ensure_admin("Alice", "alice@example.com", "ignored")
    assert promoted.id == alice.id
    assert promoted.is_admin
    assert len(user_repository.users) == 2


def test_create_admin_arguments():
    args = parse_args(["--email", "root@example.com", "--password", "pw123456"])

    assert args.email == "root@example.com"
    assert args.name == "Administrator"
    assert args.password == "pw123456"
