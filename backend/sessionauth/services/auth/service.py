from __future__ import annotations

import logging

from sessionauth.services._shared.base import BaseService, ServiceContext
from sessionauth.services._shared.errors import (
    AuthError,
    AuthErrorKind,
    ConflictError,
    ValidationError,
)
from sessionauth.services._shared.ports import AccountStore, AccountView, SessionRecord
from sessionauth.services.auth.dto import (
    AccessTokenOut,
    AuthSessionOut,
    LoginIn,
    LogoutIn,
    RegisterIn,
    RenewIn,
)
from sessionauth.services.sessions.store import SessionStore
from sessionauth.services.tokens.issuer import TokenIssuer
from sessionauth.services.tokens.verifier import CredentialVerifier

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication lifecycle service (register / login / renew / logout).

    Credentials are signed by a :class:`TokenIssuer`. Session credentials are
    persisted as salted hashes through a :class:`SessionStore` and checked on
    renewal by scanning the account's records. Access credentials are
    stateless and are not revocable before they expire.
    """

    def __init__(
        self,
        *,
        accounts: AccountStore,
        sessions: SessionStore,
        issuer: TokenIssuer,
        session_verifier: CredentialVerifier,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its collaborators.

        :param accounts: External account store (lookup, creation, password check).
        :param sessions: Hashed session-credential store.
        :param issuer: Signs access and session credentials.
        :param session_verifier: Verifier bound to the session signing secret.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.accounts = accounts
        self.sessions = sessions
        self.issuer = issuer
        self.session_verifier = session_verifier

    # ------------------------------------------------------------------ #
    # Register / Login
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> AuthSessionOut:
        """
        Create an account and open its first session.

        :raises ValidationError: If a field is blank.
        :raises ConflictError: If the email is already registered.
        """
        for field in ("name", "email", "password"):
            if not str(getattr(dto, field) or "").strip():
                raise ValidationError(f"{field} is required.", field=field)

        if self.accounts.find_by_email(dto.email) is not None:
            raise ConflictError("Account", "email already in use")

        # Account and first session are separate writes; a failed session save
        # leaves the account in place and a retry gets ConflictError.
        account = self.accounts.create(name=dto.name, email=dto.email, password=dto.password)
        out = self._open_session(account)
        self._log_event("auth.register", account_id=account.id)
        return out

    def login(self, dto: LoginIn) -> AuthSessionOut:
        """
        Check a password and open a new session.

        :raises AuthError: ``INVALID_CREDENTIALS`` for an unknown email or a
            wrong password, with no distinction between the two.
        """
        # Always run the password check so unknown emails cost the same.
        valid = self.accounts.verify_credential(dto.email, dto.password)
        account = self.accounts.find_by_email(dto.email) if valid else None
        if account is None:
            self._log_event("auth.login.failed")
            raise AuthError(AuthErrorKind.INVALID_CREDENTIALS)

        out = self._open_session(account)
        self._log_event("auth.login", account_id=account.id)
        return out

    # ------------------------------------------------------------------ #
    # Renew
    # ------------------------------------------------------------------ #

    def renew(self, dto: RenewIn) -> AccessTokenOut:
        """
        Issue a fresh access credential for a live session credential.

        The session credential is not rotated and the store is only read, so
        concurrent renewals with the same credential are independent.

        :raises AuthError: ``EXPIRED`` or ``INVALID`` from verification;
            ``INVALID`` when no stored record matches.
        """
        account_id = self.session_verifier.verify(dto.session_token)

        record = self.sessions.first_match(
            self.sessions.find_by_account(account_id), dto.session_token
        )
        if record is None:
            self._log_event("auth.renew.rejected", account_id=account_id)
            raise AuthError(AuthErrorKind.INVALID)

        access = self.issuer.issue_access(account_id)
        self._log_event("auth.renew", account_id=account_id)
        return AccessTokenOut(access_token=access)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Revoke a session credential. Always succeeds.

        When the credential's signature verifies (expired or not) only that
        account's records are scanned. Otherwise every record is scanned.
        At most one record is deleted; deleting is idempotent so two
        concurrent logouts both succeed.
        """
        account_id = self.session_verifier.peek_account(dto.session_token)
        candidates: list[SessionRecord]
        if account_id is not None:
            candidates = self.sessions.find_by_account(account_id)
        else:
            candidates = self.sessions.find_all()

        record = self.sessions.first_match(candidates, dto.session_token)
        if record is not None:
            self.sessions.delete(record.id)
            account_id = record.account_id

        self._log_event("auth.logout", account_id=account_id, revoked=record is not None)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _open_session(self, account: AccountView) -> AuthSessionOut:
        access = self.issuer.issue_access(account.id)
        session = self.issuer.issue_session(account.id)
        self.sessions.save(session.token, account.id, session.expires_at)
        return AuthSessionOut(account=account, access_token=access, session_token=session)

    def _log_event(self, event: str, **fields: object) -> None:
        extra = {"event": event, **fields}
        if self.ctx.request_id:
            extra["request_id"] = self.ctx.request_id
        log.info(event, extra=extra)
