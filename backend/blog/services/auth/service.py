# blog/services/auth/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from blog.services._shared.base import BaseService
from blog.services._shared.errors import (
    DuplicateEmailError,
    InvalidPasswordError,
    InvalidTokenError,
    MissingTokenError,
    UnknownRefreshTokenError,
    UserNotFoundError,
    ValidationError,
    is_unique_violation,
)
from blog.services._shared.ports import (
    RefreshTokenStore,
    TokenBlacklist,
    TokenCodec,
    TokenError,
)
from blog.services.auth.dto import (
    AuthTokenConfig,
    LoginIn,
    LogoutIn,
    LogoutOut,
    RefreshIn,
    SignupIn,
    SignupOut,
    TokenPairOut,
)

log = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"


def strip_bearer(value: str | None) -> str:
    """Return the raw token from ``"Bearer <token>"`` or a bare token."""
    value = (value or "").strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer":
        return rest.strip()
    return value


def _event(name: str, **fields) -> None:
    log.info(name, extra={"event": name, **fields})


class AuthService(BaseService):
    """
    Authentication lifecycle service (signup / login / refresh / logout).

    Composes the credential store (``users`` table), a :class:`TokenCodec`,
    a :class:`RefreshTokenStore` and a :class:`TokenBlacklist`. The session
    state machine it implements is per account:

    - login issues an access/refresh pair and remembers the refresh token;
    - refresh consumes the presented refresh token and issues a new pair
      (strict rotate-on-use: a consumed token is unknown forever after);
    - logout blacklists the access token until its natural expiry. The
      refresh token survives unless ``all_sessions`` is requested.
    """

    def __init__(
        self,
        *,
        token_codec: TokenCodec,
        refresh_store: RefreshTokenStore,
        blacklist: TokenBlacklist,
        token_cfg: AuthTokenConfig | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_codec: Signs and verifies JWTs.
        :param refresh_store: Server-side refresh token bookkeeping.
        :param blacklist: Revoked access token ids.
        :param token_cfg: Lifetimes of issued tokens.
        """
        super().__init__()
        self.tokens = token_codec
        self.refresh_store = refresh_store
        self.blacklist = blacklist
        self.cfg = token_cfg or AuthTokenConfig()

    # ------------------------------------------------------------------ #
    # Signup
    # ------------------------------------------------------------------ #

    def signup(self, dto: SignupIn) -> SignupOut:
        """
        Register a new account. No token is issued.

        :raises DuplicateEmailError: If the email is already registered,
            including when a concurrent signup wins the unique constraint.
        :raises ValidationError: If the model rejects the email or nickname.
        """
        with self.rw_uow() as uow:
            repo = uow.users
            if repo.exists_by_email(dto.email):
                raise DuplicateEmailError(dto.email)
            try:
                user = repo.model(email=dto.email, nickname=dto.nickname)
                user.password = dto.password
            except ValueError as exc:
                raise ValidationError("user", str(exc)) from exc
            try:
                repo.add(user)
            except IntegrityError as exc:
                if is_unique_violation(exc):
                    raise DuplicateEmailError(dto.email) from exc
                raise
            user_id = user.id

        _event("auth.signup", user_id=user_id)
        return SignupOut(user_id=user_id)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> TokenPairOut:
        """
        Authenticate credentials and issue a fresh token pair.

        :raises UserNotFoundError: If no account uses the email.
        :raises InvalidPasswordError: If the password does not match.
        """
        with self.ro_uow() as uow:
            user = uow.users.get_by_email(dto.email)
            if user is None:
                _event("auth.login.failed", email=dto.email, reason="user_not_found")
                raise UserNotFoundError(dto.email)
            if not user.verify_password(dto.password):
                _event("auth.login.failed", email=dto.email, reason="invalid_password")
                raise InvalidPasswordError()
            subject, user_id = user.email, user.id

        pair = self._issue_pair(subject)
        _event("auth.login.success", user_id=user_id)
        return pair

    # ------------------------------------------------------------------ #
    # Refresh (rotate-on-use)
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Exchange a refresh token for a new pair, consuming the old token.

        The store's atomic ``consume`` makes concurrent refreshes with the
        same token race safely: one wins, the rest see
        :class:`UnknownRefreshTokenError`.

        :raises InvalidTokenError: If the token fails verification.
        :raises UnknownRefreshTokenError: If the token is not in the store.
        :raises UserNotFoundError: If the account was deleted meanwhile.
        """
        token = (dto.refresh_token or "").strip()
        try:
            subject = self.tokens.verify(token, expected_type=REFRESH)
        except TokenError as exc:
            _event("auth.refresh.failed", reason=exc.reason)
            raise InvalidTokenError(exc.reason) from exc

        owner = self.refresh_store.consume(token)
        if owner is None or owner != subject:
            _event("auth.refresh.failed", reason="unknown_refresh_token")
            raise UnknownRefreshTokenError()

        with self.ro_uow() as uow:
            if not uow.users.exists_by_email(subject):
                _event("auth.refresh.failed", reason="user_not_found")
                raise UserNotFoundError(subject)

        pair = self._issue_pair(subject)
        _event("auth.refresh.success")
        return pair

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> LogoutOut:
        """
        Blacklist the presented access token until its own expiry.

        :raises MissingTokenError: If no token was supplied.
        :raises InvalidTokenError: If the token fails verification.
        """
        token = strip_bearer(dto.token)
        if not token:
            raise MissingTokenError()
        try:
            claims = self.tokens.claims(token, expected_type=ACCESS)
        except TokenError as exc:
            raise InvalidTokenError(exc.reason) from exc

        self.blacklist.block(claims.jti, claims.expires_at)
        revoked = 0
        if dto.all_sessions:
            revoked = self.revoke_all_sessions(claims.subject)
        _event("auth.logout", all_sessions=dto.all_sessions, revoked_sessions=revoked)
        return LogoutOut(revoked_sessions=revoked)

    # ------------------------------------------------------------------ #
    # Protected-route support
    # ------------------------------------------------------------------ #

    def is_revoked(self, jti: str) -> bool:
        """``True`` when the access token ``jti`` was logged out."""
        return self.blacklist.is_blocked(jti)

    def revoke_all_sessions(self, subject: str) -> int:
        """Forget every refresh token of ``subject``; returns how many were live."""
        return self.refresh_store.delete_all_for_subject(subject)

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _issue_pair(self, subject: str) -> TokenPairOut:
        access = self.tokens.issue(subject, self.cfg.access_expires, token_type=ACCESS)
        refresh = self.tokens.issue(subject, self.cfg.refresh_expires, token_type=REFRESH)
        # Remember the refresh token before the client ever sees it.
        self.refresh_store.put(refresh, subject, self.cfg.refresh_store_ttl)
        return TokenPairOut(
            access_token=access,
            refresh_token=refresh,
            expires_in=int(self.cfg.access_expires.total_seconds()),
        )
