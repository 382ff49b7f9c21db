"""Unit tests for CredentialStore."""

from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from school_identity import (
    CredentialStore,
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidNameError,
    InvalidUpdateError,
    PasswordHashingService,
    User,
    UserNotFoundError,
    WeakPasswordError,
)

TEST_NAME = "John Doe"
TEST_EMAIL = "john@x.com"
TEST_PASSWORD = "secret123"
OLD_HASH = "$2b$04$old-hash-value"
NEW_HASH = "$2b$04$new-hash-value"


def _existing_user() -> User:
    return User.create(name=TEST_NAME, email=TEST_EMAIL, password_hash=OLD_HASH)


class TestCredentialStoreCreate:
    """Tests for create."""

    def setup_method(self):
        """Set up test fixtures."""
        self.user_repo = AsyncMock()
        self.password_service = Mock(spec=PasswordHashingService)
        self.password_service.hash.return_value = NEW_HASH
        self.store = CredentialStore(
            user_repository=self.user_repo,
            password_service=self.password_service,
        )

    @pytest.mark.asyncio
    async def test_create_hashes_and_saves(self):
        self.user_repo.find_by_email.return_value = None

        user = await self.store.create(TEST_NAME, TEST_EMAIL, TEST_PASSWORD)

        assert user.name == TEST_NAME
        assert user.email == TEST_EMAIL
        assert user.password_hash == NEW_HASH
        self.password_service.validate_strength.assert_called_once_with(TEST_PASSWORD)
        self.password_service.hash.assert_called_once_with(TEST_PASSWORD)
        self.user_repo.save.assert_awaited_once_with(user)

    @pytest.mark.asyncio
    async def test_create_duplicate_email_raises(self):
        self.user_repo.find_by_email.return_value = _existing_user()

        with pytest.raises(EmailAlreadyExistsError):
            await self.store.create(TEST_NAME, TEST_EMAIL.upper(), TEST_PASSWORD)

        self.password_service.hash.assert_not_called()
        self.user_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_invalid_email_raises(self):
        with pytest.raises(InvalidEmailError):
            await self.store.create(TEST_NAME, "not-an-email", TEST_PASSWORD)

        self.user_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_empty_name_raises(self):
        self.user_repo.find_by_email.return_value = None

        with pytest.raises(InvalidNameError):
            await self.store.create("", TEST_EMAIL, TEST_PASSWORD)

        self.user_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_weak_password_raises(self):
        self.user_repo.find_by_email.return_value = None
        self.password_service.validate_strength.side_effect = WeakPasswordError(
            "Password must be at least 8 characters",
        )

        with pytest.raises(WeakPasswordError):
            await self.store.create(TEST_NAME, TEST_EMAIL, "short")

        self.password_service.hash.assert_not_called()
        self.user_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_propagates_storage_duplicate(self):
        """A race past the pre-check surfaces as the same duplicate error."""
        self.user_repo.find_by_email.return_value = None
        self.user_repo.save.side_effect = EmailAlreadyExistsError(TEST_EMAIL)

        with pytest.raises(EmailAlreadyExistsError):
            await self.store.create(TEST_NAME, TEST_EMAIL, TEST_PASSWORD)


class TestCredentialStoreLookup:
    """Tests for lookups and password verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.user_repo = AsyncMock()
        self.password_service = Mock(spec=PasswordHashingService)
        self.store = CredentialStore(
            user_repository=self.user_repo,
            password_service=self.password_service,
        )

    @pytest.mark.asyncio
    async def test_find_by_email_invalid_returns_none(self):
        self.user_repo.find_by_email.side_effect = InvalidEmailError("bad")

        assert await self.store.find_by_email("garbage") is None

    @pytest.mark.asyncio
    async def test_verify_password_delegates(self):
        user = _existing_user()
        self.password_service.verify.return_value = True

        assert await self.store.verify_password(TEST_PASSWORD, user) is True
        self.password_service.verify.assert_called_once_with(TEST_PASSWORD, OLD_HASH)

    @pytest.mark.asyncio
    async def test_list_all_returns_profiles(self):
        user = _existing_user()
        self.user_repo.list_all.return_value = [user]

        profiles = await self.store.list_all()

        assert profiles == [user.profile()]
        assert all(not hasattr(p, "password_hash") for p in profiles)


class TestCredentialStoreUpdate:
    """Tests for update with an explicit changed-field set."""

    def setup_method(self):
        """Set up test fixtures."""
        self.user_repo = AsyncMock()
        self.password_service = Mock(spec=PasswordHashingService)
        self.password_service.hash.return_value = NEW_HASH
        self.store = CredentialStore(
            user_repository=self.user_repo,
            password_service=self.password_service,
        )
        self.user = _existing_user()
        self.user_repo.find_by_id.return_value = self.user

    @pytest.mark.asyncio
    async def test_name_only_keeps_hash(self):
        updated = await self.store.update(self.user.id, {"name"}, name="Jane Doe")

        assert updated.name == "Jane Doe"
        assert updated.password_hash == OLD_HASH
        self.password_service.hash.assert_not_called()
        self.user_repo.save.assert_awaited_once_with(self.user)

    @pytest.mark.asyncio
    async def test_password_value_ignored_unless_listed(self):
        updated = await self.store.update(
            self.user.id,
            {"name"},
            name="Jane Doe",
            password="another-password",
        )

        assert updated.password_hash == OLD_HASH
        self.password_service.hash.assert_not_called()

    @pytest.mark.asyncio
    async def test_password_rehashes(self):
        updated = await self.store.update(
            self.user.id,
            ["password"],
            password="new-secret-123",
        )

        assert updated.password_hash == NEW_HASH
        self.password_service.hash.assert_called_once_with("new-secret-123")

    @pytest.mark.asyncio
    async def test_email_change(self):
        self.user_repo.find_by_email.return_value = None

        updated = await self.store.update(self.user.id, {"email"}, email="Jane@X.com")

        assert updated.email == "jane@x.com"

    @pytest.mark.asyncio
    async def test_email_taken_by_other_user_raises(self):
        other = User.create(name="Jane", email="jane@x.com", password_hash=OLD_HASH)
        self.user_repo.find_by_email.return_value = other

        with pytest.raises(EmailAlreadyExistsError):
            await self.store.update(self.user.id, {"email"}, email="jane@x.com")

        self.user_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_field_raises(self):
        with pytest.raises(InvalidUpdateError, match="Unknown fields: role"):
            await self.store.update(self.user.id, {"name", "role"}, name="Jane")

    @pytest.mark.asyncio
    async def test_listed_field_without_value_raises(self):
        with pytest.raises(InvalidUpdateError, match="No value given for: password"):
            await self.store.update(self.user.id, {"password"})

    @pytest.mark.asyncio
    async def test_missing_user_raises(self):
        self.user_repo.find_by_id.return_value = None

        with pytest.raises(UserNotFoundError):
            await self.store.update(uuid4(), {"name"}, name="Jane")

    @pytest.mark.asyncio
    async def test_empty_change_set_saves_nothing(self):
        updated = await self.store.update(self.user.id, set())

        assert updated is self.user
        self.user_repo.save.assert_not_called()
