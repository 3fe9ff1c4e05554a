import pytest
from sqlalchemy.exc import OperationalError

from src.api.utils.jwt import decode_jwt
from src.app.use_cases.auth import LoginUseCase, RefreshTokenUseCase
from src.domain.errors import ForbiddenError, UnauthorizedError


@pytest.fixture
def logged_in(mock_uow, make_user):
    """Returns a coroutine factory that logs the mocked user in"""
    user = make_user(password="Pw123!")
    mock_uow.users.get_by_email.return_value = user
    mock_uow.users.get_by_id.return_value = user

    async def _login():
        login = await LoginUseCase(mock_uow).execute("u@test.com", "Pw123!")
        return user, login.refresh_token

    return _login


@pytest.mark.asyncio
async def test_refresh_without_rotation_returns_same_token(mock_uow, logged_in):
    user, refresh_token = await logged_in()

    result = await RefreshTokenUseCase(mock_uow).execute(refresh_token, rotate=False)

    assert result.refresh_token == refresh_token
    assert decode_jwt(result.access_token).user_id == user.id
    assert await mock_uow.sessions.get(refresh_token) == str(user.id)


@pytest.mark.asyncio
async def test_refresh_with_rotation_invalidates_old_token(mock_uow, logged_in):
    user, refresh_token = await logged_in()

    result = await RefreshTokenUseCase(mock_uow).execute(refresh_token, rotate=True)

    assert result.refresh_token != refresh_token
    assert await mock_uow.sessions.get(result.refresh_token) == str(user.id)
    with pytest.raises(UnauthorizedError):
        await RefreshTokenUseCase(mock_uow).execute(refresh_token)
    with pytest.raises(UnauthorizedError):
        await RefreshTokenUseCase(mock_uow).execute(refresh_token, rotate=True)


@pytest.mark.asyncio
async def test_repeated_rotation_only_latest_token_is_valid(mock_uow, logged_in):
    user, refresh_token = await logged_in()
    seen = [refresh_token]

    for _ in range(3):
        result = await RefreshTokenUseCase(mock_uow).execute(seen[-1], rotate=True)
        assert result.refresh_token not in seen
        seen.append(result.refresh_token)

    for stale in seen[:-1]:
        assert await mock_uow.sessions.exists(stale) is False
    assert await mock_uow.sessions.get_all_for_user(str(user.id)) == [seen[-1]]


@pytest.mark.asyncio
async def test_refresh_unknown_token(mock_uow):
    with pytest.raises(UnauthorizedError) as exc_info:
        await RefreshTokenUseCase(mock_uow).execute("not-a-session")

    assert exc_info.value.message == "Invalid or expired refresh token"
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_deleted_user_cleans_up_session(mock_uow, logged_in):
    _, refresh_token = await logged_in()
    mock_uow.users.get_by_id.return_value = None

    with pytest.raises(UnauthorizedError):
        await RefreshTokenUseCase(mock_uow).execute(refresh_token)

    assert await mock_uow.sessions.exists(refresh_token) is False


@pytest.mark.asyncio
async def test_refresh_suspended_user_forbidden_and_session_removed(mock_uow, logged_in):
    user, refresh_token = await logged_in()
    user.suspended = True

    with pytest.raises(ForbiddenError):
        await RefreshTokenUseCase(mock_uow).execute(refresh_token, rotate=True)

    assert await mock_uow.sessions.exists(refresh_token) is False


@pytest.mark.asyncio
async def test_refresh_store_error_keeps_session(mock_uow, logged_in):
    """A transient database failure must not destroy a valid session"""
    _, refresh_token = await logged_in()
    mock_uow.users.get_by_id.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))

    with pytest.raises(OperationalError):
        await RefreshTokenUseCase(mock_uow).execute(refresh_token, rotate=True)

    assert await mock_uow.sessions.exists(refresh_token) is True


@pytest.mark.asyncio
async def test_rotation_race_loser_is_rejected(mock_uow, logged_in):
    """If another request consumed the token between lookup and delete, fail"""
    _, refresh_token = await logged_in()
    original_delete = mock_uow.sessions.delete

    async def delete_after_competitor(key):
        await original_delete(key)  # Competing rotation wins
        return await original_delete(key)

    mock_uow.sessions.delete = delete_after_competitor

    with pytest.raises(UnauthorizedError):
        await RefreshTokenUseCase(mock_uow).execute(refresh_token, rotate=True)
