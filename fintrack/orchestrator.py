"""
Main Orchestrator for FinTrack

This module ties together the components and defines the flows the
shell drives:
1. Login (bounded attempts → ledger session)
2. Component wiring (settings → audit logger → session → login flow)

DESIGN DECISION: The retry policy for logins lives here, not in the
ledger. The ledger rejects bad input; the flow decides how many chances
the user gets before the session is over.
"""

from typing import Optional

from pydantic import BaseModel, Field

from fintrack.audit import AuditLogger, configure_logging
from fintrack.config import AppSettings, LedgerSettings, get_settings
from fintrack.models.account import (
    Account,
    LedgerError,
    OperationResult,
)
from fintrack.services.ledger import LedgerSession
from fintrack.services.storage import AuditStorageInterface, InMemoryAuditStorage


class LoginAttempt(BaseModel):
    """Outcome of one pass through LoginFlow.attempt()."""

    result: Optional[OperationResult[Account]] = Field(
        default=None,
        description="Ledger result; None when the attempt was refused outright"
    )
    attempts_used: int = Field(ge=0)
    attempts_remaining: int = Field(ge=0)
    exhausted: bool = Field(
        ...,
        description="No attempts left: the shell should end the session"
    )

    @property
    def success(self) -> bool:
        return self.result is not None and self.result.success

    @property
    def error(self) -> Optional[LedgerError]:
        return self.result.error if self.result else None


class LoginFlow:
    """
    Login with a bounded number of attempts.

    Flow:
    1. attempt(name, email) → ledger login_or_create
    2. Failure → counter goes up, remaining attempts reported
    3. Counter reaches max_attempts → exhausted, further attempts refused
    4. Success → counter resets

    reset() re-arms the flow (e.g. "log in as another user" after logout).
    """

    def __init__(
        self,
        session: LedgerSession,
        max_attempts: Optional[int] = None,
    ):
        self._session = session
        self._max_attempts = (
            max_attempts
            if max_attempts is not None
            else session.settings.max_login_attempts
        )
        if self._max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._failures = 0

    @property
    def session(self) -> LedgerSession:
        return self._session

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def attempts_remaining(self) -> int:
        return max(self._max_attempts - self._failures, 0)

    @property
    def exhausted(self) -> bool:
        return self._failures >= self._max_attempts

    def attempt(self, name: Optional[str], email: Optional[str]) -> LoginAttempt:
        """
        Try to log in.

        Once exhausted, the session is not touched and result is None.
        """
        if self.exhausted:
            return self._outcome(None)

        result = self._session.login_or_create(name, email)
        if result.success:
            self._failures = 0
        else:
            self._failures += 1
        return self._outcome(result)

    def reset(self) -> None:
        self._failures = 0

    def _outcome(self, result: Optional[OperationResult[Account]]) -> LoginAttempt:
        return LoginAttempt(
            result=result,
            attempts_used=self._failures,
            attempts_remaining=self.attempts_remaining,
            exhausted=self.exhausted,
        )


def create_app_components(
    settings: Optional[LedgerSettings] = None,
    audit_storage: Optional[AuditStorageInterface] = None,
    app_settings: Optional[AppSettings] = None,
) -> tuple[LedgerSession, LoginFlow, AuditLogger]:
    """
    Factory function to create all application components.

    Args:
        settings: Ledger settings; loaded from the environment if None.
        audit_storage: Audit sink. Defaults to an in-memory log.
        app_settings: Environment name and debug switch; loaded from
            the environment if None.

    Returns:
        (ledger_session, login_flow, audit_logger)
    """
    settings = settings or get_settings().ledger
    app_settings = app_settings or get_settings().app
    configure_logging(app_settings.debug_mode)

    if audit_storage is None:
        audit_storage = InMemoryAuditStorage()
    audit_logger = AuditLogger(
        audit_storage,
        environment=app_settings.app_environment,
    )

    session = LedgerSession(
        settings=settings,
        audit_logger=audit_logger,
    )
    login_flow = LoginFlow(session)

    return session, login_flow, audit_logger
