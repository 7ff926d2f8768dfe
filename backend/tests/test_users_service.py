"""Create/update/read/delete use cases."""
import uuid
from unittest.mock import AsyncMock

import pytest

from user_service.core.exceptions import ConflictError, StorageError, UserNotFoundError, ValidationError
from user_service.core.security import PasswordHasher
from user_service.repositories.users import UserRepository
from user_service.schemas.user import UserCreate, UserRead, UserUpdate
from user_service.services.users import CreateUser, DeleteUser, GetUser, ListUsers, UpdateUser


async def test_create_returns_projection_without_password(repository, hasher, alice):
    created = await CreateUser(repository, hasher).execute(alice)

    assert isinstance(created, UserRead)
    assert created.name == "Alice Doe"
    assert created.email == "alice@example.com"
    assert created.role == "common"
    assert created.is_active is True
    assert isinstance(created.id, uuid.UUID)
    assert created.created_at == created.updated_at
    assert "password" not in created.model_dump()


async def test_create_stores_hash_not_plaintext(repository, hasher, alice):
    created = await CreateUser(repository, hasher).execute(alice)

    stored = await repository.get_by_id(created.id)
    assert stored.password == "hashed:secretpw"
    assert hasher.verify("secretpw", stored.password)


async def test_created_user_can_be_fetched(repository, hasher, alice):
    created = await CreateUser(repository, hasher).execute(alice)

    fetched = await GetUser(repository).execute(created.id)

    assert fetched.id == created.id
    assert (fetched.name, fetched.email, fetched.role, fetched.is_active) == (
        "Alice Doe",
        "alice@example.com",
        "common",
        True,
    )
    assert fetched.created_at == fetched.updated_at


async def test_duplicate_email_is_a_conflict_and_not_persisted(repository, hasher, alice):
    use_case = CreateUser(repository, hasher)
    await use_case.execute(alice)

    with pytest.raises(ConflictError, match="email already in use"):
        await use_case.execute(alice.model_copy(update={"name": "Another Alice"}))

    assert len(await ListUsers(repository).execute()) == 1


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"name": "Al"}, "name"),
        ({"email": "not-an-email"}, "email"),
        ({"password": "short"}, "password"),
        ({"role": "superuser"}, "role"),
        ({"name": "", "email": ""}, "name"),
    ],
)
async def test_invalid_create_input_never_reaches_the_store(alice, hasher, overrides, field):
    repository = AsyncMock(spec=UserRepository)

    with pytest.raises(ValidationError) as excinfo:
        await CreateUser(repository, hasher).execute(alice.model_copy(update=overrides))

    assert excinfo.value.field == field
    repository.get_by_email.assert_not_awaited()
    repository.create.assert_not_awaited()


async def test_uniqueness_lookup_failure_is_not_swallowed(alice, hasher):
    repository = AsyncMock(spec=UserRepository)
    repository.get_by_email.side_effect = StorageError("get_by_email", alice.email)

    with pytest.raises(StorageError):
        await CreateUser(repository, hasher).execute(alice)

    repository.create.assert_not_awaited()


async def test_create_with_argon2_hasher(repository, alice):
    hasher = PasswordHasher()
    created = await CreateUser(repository, hasher).execute(alice)

    stored = await repository.get_by_id(created.id)
    assert stored.password != "secretpw"
    assert stored.password.startswith("$argon2")
    assert hasher.verify("secretpw", stored.password)
    assert not hasher.verify("wrongpass", stored.password)


async def test_update_name_only_touches_name_and_updated_at(repository, hasher, alice):
    created = await CreateUser(repository, hasher).execute(alice)
    before = await repository.get_by_id(created.id)

    await UpdateUser(repository).execute(created.id, UserUpdate(name="Bob"))

    after = await repository.get_by_id(created.id)
    assert after.name == "Bob"
    assert after.updated_at > before.updated_at
    assert after.email == before.email
    assert after.role == before.role
    assert after.is_active == before.is_active
    assert after.password == before.password
    assert after.created_at == before.created_at


async def test_update_applies_every_supplied_field(repository, hasher, alice):
    created = await CreateUser(repository, hasher).execute(alice)

    await UpdateUser(repository).execute(
        created.id,
        UserUpdate(name="Alice Smith", email="alice.smith@example.com", role="admin", is_active=False),
    )

    after = await GetUser(repository).execute(created.id)
    assert after.name == "Alice Smith"
    assert after.email == "alice.smith@example.com"
    assert after.role == "admin"
    assert after.is_active is False


async def test_update_without_fields_performs_no_store_access():
    repository = AsyncMock(spec=UserRepository)

    with pytest.raises(ValidationError, match="no fields to update"):
        await UpdateUser(repository).execute(uuid.uuid4(), UserUpdate())

    repository.get_by_id.assert_not_awaited()
    repository.update.assert_not_awaited()


async def test_explicit_empty_value_is_validated_not_ignored(repository, hasher, alice):
    created = await CreateUser(repository, hasher).execute(alice)

    with pytest.raises(ValidationError) as excinfo:
        await UpdateUser(repository).execute(created.id, UserUpdate(name=""))

    assert excinfo.value.field == "name"
    assert (await repository.get_by_id(created.id)).name == "Alice Doe"


@pytest.mark.parametrize(
    "payload, field",
    [({"email": "broken@"}, "email"), ({"role": "owner"}, "role"), ({"is_active": None}, "is_active")],
)
async def test_invalid_update_field_leaves_row_untouched(repository, hasher, alice, payload, field):
    created = await CreateUser(repository, hasher).execute(alice)

    with pytest.raises(ValidationError) as excinfo:
        await UpdateUser(repository).execute(created.id, UserUpdate(**payload))

    assert excinfo.value.field == field
    stored = await GetUser(repository).execute(created.id)
    assert stored.email == "alice@example.com"
    assert stored.role == "common"
    assert stored.is_active is True


async def test_missing_id_is_not_found_for_get_update_and_delete(repository):
    missing = uuid.uuid4()

    with pytest.raises(UserNotFoundError):
        await GetUser(repository).execute(missing)
    with pytest.raises(UserNotFoundError):
        await UpdateUser(repository).execute(missing, UserUpdate(name="Bob"))
    with pytest.raises(UserNotFoundError):
        await DeleteUser(repository).execute(missing)


async def test_delete_then_list(repository, hasher, alice):
    created = await CreateUser(repository, hasher).execute(alice)

    await DeleteUser(repository).execute(created.id)

    assert await ListUsers(repository).execute() == []


def test_update_schema_tracks_presence():
    assert UserUpdate().has_changes() is False
    assert UserUpdate(is_active=False).present_fields() == ["is_active"]
    assert UserUpdate.model_validate({"name": None}).present_fields() == ["name"]
    assert not UserCreate.model_fields.keys() - {"name", "email", "password", "role"}
