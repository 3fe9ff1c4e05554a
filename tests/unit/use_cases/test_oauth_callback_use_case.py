import pytest
from uuid import uuid4

from config import ApplicationConfig
from src.api.utils.jwt import decode_jwt
from src.app.use_cases.oauth import (
    HandleOAuthCallbackUseCase,
    OAuthProfile,
    OAuthTokenBundle,
)
from src.domain.entities import OAuthAccount, UserRole
from src.domain.errors import ForbiddenError, InvalidCredentialsError, NotFoundError


@pytest.fixture
def profile():
    return OAuthProfile(id="google-123", email="New.Student@Test.com", name="New Student")


@pytest.fixture
def tokens():
    return OAuthTokenBundle(access_token="ya29.access", refresh_token="1//refresh", expires_in=3600)


def _link(user_id, provider_account_id="google-123"):
    return OAuthAccount(
        id=uuid4(),
        user_id=user_id,
        provider="google",
        provider_account_id=provider_account_id,
        access_token="old-access",
    )


@pytest.mark.asyncio
async def test_callback_creates_new_user(mock_uow, profile, tokens):
    result = await HandleOAuthCallbackUseCase(mock_uow).execute(profile, tokens)

    assert result.is_new_user is True
    assert result.user.email == "new.student@test.com"
    assert result.user.password_hash is None
    assert result.user.role == UserRole.student

    link = mock_uow.oauth_accounts.create.call_args.args[0]
    assert link.user_id == result.user.id
    assert link.provider == "google"
    assert link.provider_account_id == "google-123"
    assert link.access_token == "ya29.access"
    assert link.expires_at is not None

    mock_uow.commit.assert_called_once()
    assert decode_jwt(result.access_token).user_id == result.user.id
    assert await mock_uow.sessions.get(result.refresh_token) == str(result.user.id)


@pytest.mark.asyncio
async def test_callback_existing_link_refreshes_provider_tokens(mock_uow, make_user, profile, tokens):
    user = make_user(email="new.student@test.com")
    link = _link(user.id)
    mock_uow.oauth_accounts.find_by_provider.return_value = link
    mock_uow.users.get_by_id.return_value = user

    result = await HandleOAuthCallbackUseCase(mock_uow).execute(profile, tokens)

    assert result.is_new_user is False
    assert result.user.id == user.id
    mock_uow.oauth_accounts.find_by_provider.assert_called_once_with("google", "google-123")
    mock_uow.oauth_accounts.update_tokens.assert_called_once()
    assert mock_uow.oauth_accounts.update_tokens.call_args.args == (link.id,)
    assert mock_uow.oauth_accounts.update_tokens.call_args.kwargs["access_token"] == "ya29.access"
    assert mock_uow.oauth_accounts.update_tokens.call_args.kwargs["scope"] == "openid profile email"
    assert mock_uow.oauth_accounts.update_tokens.call_args.kwargs["token_type"] == "Bearer"
    mock_uow.users.create.assert_not_called()
    mock_uow.oauth_accounts.create.assert_not_called()
    assert await mock_uow.sessions.count_for_user(str(user.id)) == 1


@pytest.mark.asyncio
async def test_callback_orphaned_link_is_removed(mock_uow, profile, tokens):
    link = _link(uuid4())
    mock_uow.oauth_accounts.find_by_provider.return_value = link
    mock_uow.users.get_by_id.return_value = None

    with pytest.raises(NotFoundError):
        await HandleOAuthCallbackUseCase(mock_uow).execute(profile, tokens)

    mock_uow.oauth_accounts.delete.assert_called_once_with(link.id)
    mock_uow.commit.assert_called_once()
    assert await mock_uow.sessions.count_for_user(str(link.user_id)) == 0


@pytest.mark.asyncio
async def test_callback_email_match_links_passwordless_account(mock_uow, make_user, profile, tokens):
    user = make_user(email="new.student@test.com")
    mock_uow.users.get_by_email.return_value = user

    result = await HandleOAuthCallbackUseCase(mock_uow).execute(profile, tokens)

    assert result.is_new_user is False
    assert result.user.id == user.id
    mock_uow.users.get_by_email.assert_called_once_with("new.student@test.com")
    link = mock_uow.oauth_accounts.create.call_args.args[0]
    assert link.user_id == user.id
    mock_uow.users.create.assert_not_called()


@pytest.mark.asyncio
async def test_callback_email_match_refuses_password_account(mock_uow, make_user, profile, tokens):
    user = make_user(password="Pw123!", email="new.student@test.com")
    mock_uow.users.get_by_email.return_value = user

    with pytest.raises(InvalidCredentialsError) as exc_info:
        await HandleOAuthCallbackUseCase(mock_uow).execute(profile, tokens)

    assert "log in with your password first" in exc_info.value.message
    mock_uow.oauth_accounts.create.assert_not_called()
    mock_uow.commit.assert_not_called()
    assert await mock_uow.sessions.count_for_user(str(user.id)) == 0


@pytest.mark.asyncio
async def test_callback_existing_link_suspended_user(mock_uow, make_user, profile, tokens):
    user = make_user(suspended=True)
    mock_uow.oauth_accounts.find_by_provider.return_value = _link(user.id)
    mock_uow.users.get_by_id.return_value = user

    with pytest.raises(ForbiddenError):
        await HandleOAuthCallbackUseCase(mock_uow).execute(profile, tokens)

    mock_uow.oauth_accounts.update_tokens.assert_not_called()
    assert await mock_uow.sessions.count_for_user(str(user.id)) == 0


@pytest.mark.asyncio
async def test_callback_email_match_suspended_user(mock_uow, make_user, profile, tokens):
    user = make_user(email="new.student@test.com", suspended=True)
    mock_uow.users.get_by_email.return_value = user

    with pytest.raises(ForbiddenError):
        await HandleOAuthCallbackUseCase(mock_uow).execute(profile, tokens)

    mock_uow.oauth_accounts.create.assert_not_called()


@pytest.mark.asyncio
async def test_callback_uses_configured_default_role(mock_uow, monkeypatch, profile, tokens):
    monkeypatch.setattr(ApplicationConfig, "OAUTH_DEFAULT_ROLE", "teacher")

    result = await HandleOAuthCallbackUseCase(mock_uow).execute(profile, tokens)

    assert result.user.role == UserRole.teacher
