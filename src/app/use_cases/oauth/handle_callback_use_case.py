"""
Handle OAuth Callback Use Case

Signs a user in through an identity provider, creating or linking the local
account as needed.
"""

import logging

from config import ApplicationConfig
from src.app.services.owner_lookup import resolve_owner
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.session_issuer import issue_session
from src.domain.entities import OAuthAccount, User, UserRole, normalize_email
from src.domain.errors import ForbiddenError, InvalidCredentialsError, NotFoundError
from .dtos import CallbackBranch, OAuthCallbackResponse, OAuthProfile, OAuthTokenBundle

logger = logging.getLogger(__name__)


class HandleOAuthCallbackUseCase:
    """
    Use case for completing an OAuth sign-in.

    Business Rules:
    - existing_link: tokens on the link are refreshed; a link whose user is
      gone is deleted and the callback fails with NotFoundError
    - email_match: a password-protected account is never linked silently
      (InvalidCredentialsError, the user must link explicitly after logging
      in); a password-less account gets the new link
    - new_user: user is created without a password and with the default
      OAuth role, then linked
    - Suspended users are rejected before any write
    - Every successful callback opens a session exactly like login
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, profile: OAuthProfile, tokens: OAuthTokenBundle
    ) -> OAuthCallbackResponse:
        """
        Execute OAuth callback use case.

        Args:
            profile: Provider profile
            tokens: Provider token bundle

        Returns:
            OAuthCallbackResponse with user, tokens and is_new_user flag

        Raises:
            NotFoundError: linked user no longer exists (link is removed)
            InvalidCredentialsError: email belongs to a password account
            ForbiddenError: user is suspended
        """
        email = normalize_email(profile.email)

        async with self.uow:
            link = await self.uow.oauth_accounts.find_by_provider(
                profile.provider, profile.id
            )
            existing_user = None
            if link is not None:
                branch = CallbackBranch.existing_link
            else:
                existing_user = await self.uow.users.get_by_email(email)
                branch = (
                    CallbackBranch.email_match
                    if existing_user is not None
                    else CallbackBranch.new_user
                )

            if branch == CallbackBranch.existing_link:
                lookup = await resolve_owner(self.uow.users, link.user_id)
                if lookup.is_dangling:
                    await self.uow.oauth_accounts.delete(link.id)
                    await self.uow.commit()
                    logger.warning(
                        f"Removed orphaned {profile.provider} link {link.id} of deleted user {link.user_id}"
                    )
                    raise NotFoundError("User account not found for OAuth account")

                user = lookup.user
                self._ensure_active(user)
                await self.uow.oauth_accounts.update_tokens(
                    link.id,
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                    expires_at=tokens.expires_at(),
                    id_token=tokens.id_token,
                    token_type=tokens.token_type,
                    scope=tokens.scope,
                )
                is_new_user = False

            elif branch == CallbackBranch.email_match:
                if existing_user.password_hash is not None:
                    raise InvalidCredentialsError(
                        "An account with this email already exists. Please log in "
                        f"with your password first to link your {profile.provider} account."
                    )
                user = existing_user
                self._ensure_active(user)
                await self.uow.oauth_accounts.create(
                    self._build_link(user, profile, tokens)
                )
                is_new_user = False

            else:
                user = await self.uow.users.create(
                    User(
                        email=email,
                        password_hash=None,
                        name=profile.name,
                        role=UserRole(ApplicationConfig.OAUTH_DEFAULT_ROLE),
                        suspended=False,
                    )
                )
                await self.uow.oauth_accounts.create(
                    self._build_link(user, profile, tokens)
                )
                is_new_user = True

            await self.uow.commit()
            session_tokens = await issue_session(self.uow.sessions, user)

        logger.info(
            f"OAuth sign-in via {profile.provider} for user {user.id} ({branch.value})"
        )
        return OAuthCallbackResponse(
            user=user,
            is_new_user=is_new_user,
            access_token=session_tokens.access_token,
            refresh_token=session_tokens.refresh_token,
        )

    @staticmethod
    def _ensure_active(user: User) -> None:
        if user.suspended:
            logger.warning(f"Suspended user {user.id} attempted OAuth sign-in")
            raise ForbiddenError("Your account has been suspended")

    @staticmethod
    def _build_link(
        user: User, profile: OAuthProfile, tokens: OAuthTokenBundle
    ) -> OAuthAccount:
        return OAuthAccount(
            user_id=user.id,
            provider=profile.provider,
            provider_account_id=profile.id,
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            expires_at=tokens.expires_at(),
            token_type=tokens.token_type,
            scope=tokens.scope,
            id_token=tokens.id_token,
            session_state=None,
        )
