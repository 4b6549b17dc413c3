"""Workflow outcomes for the account lifecycle.

Every workflow returns a WorkflowOutcome instead of raising for expected
failures. The outcome is routed to a navigation action and an optional
categorized message by ``mydiary.routing``. Outcomes are per-request values
and are never persisted.
"""

from dataclasses import dataclass
from enum import Enum

from mydiary.core.credentials import CredentialCheck

# =============================================================================
# Enums
# =============================================================================


class OutcomeKind(str, Enum):
    """Tag of a workflow outcome.

    Values:
        INPUT_INVALID: Credential format rules failed (detail: check name).
        AUTHENTICATION_FAILED: Unknown username or wrong password.
        ACCOUNT_DELETED: Correct credentials for a soft-deleted account.
        ACCOUNT_UNVERIFIED: Correct credentials, email not verified
            (detail: email).
        AUTHENTICATED: Login succeeded (detail: username, plus the
            account session generation).
        REGISTERED: Account created (detail: email).
        REGISTRATION_CONFLICT: Username or email already taken.
        CODE_INVALID: Code missing, wrong, or already consumed.
        CODE_VALID: Code consumed, account activated (detail: email).
        CODE_SENT: First code issued and delivered.
        CODE_PENDING: A code is already outstanding; nothing was sent.
        CODE_SEND_FAILED: First code could not be stored or delivered.
        RESEND_SENT: Old code replaced and the new one delivered.
        RESEND_FAILED: Replacement code could not be stored or delivered.
        LOGGED_OUT: Session ended by the user.
        ACCOUNT_REMOVED: Account soft-deleted and session ended.
    """

    INPUT_INVALID = "input_invalid"
    AUTHENTICATION_FAILED = "authentication_failed"
    ACCOUNT_DELETED = "account_deleted"
    ACCOUNT_UNVERIFIED = "account_unverified"
    AUTHENTICATED = "authenticated"
    REGISTERED = "registered"
    REGISTRATION_CONFLICT = "registration_conflict"
    CODE_INVALID = "code_invalid"
    CODE_VALID = "code_valid"
    CODE_SENT = "code_sent"
    CODE_PENDING = "code_pending"
    CODE_SEND_FAILED = "code_send_failed"
    RESEND_SENT = "resend_sent"
    RESEND_FAILED = "resend_failed"
    LOGGED_OUT = "logged_out"
    ACCOUNT_REMOVED = "account_removed"


class FormOrigin(str, Enum):
    """Form an INPUT_INVALID outcome should send the user back to."""

    LOGIN = "login"
    REGISTRATION = "registration"


# =============================================================================
# Data Models
# =============================================================================


@dataclass(frozen=True)
class WorkflowOutcome:
    """Tagged result of an authentication, registration or verification step.

    Attributes:
        kind: Which outcome this is.
        detail: Payload for the tags that carry one (username, email, or
            the failed credential check).
        origin: For INPUT_INVALID, the form the input came from.
        session_generation: For AUTHENTICATED, the account generation the
            new session is bound to.
    """

    kind: OutcomeKind
    detail: str | None = None
    origin: FormOrigin | None = None
    session_generation: int | None = None

    @classmethod
    def input_invalid(
        cls, check: CredentialCheck, origin: FormOrigin
    ) -> "WorkflowOutcome":
        return cls(OutcomeKind.INPUT_INVALID, detail=check.value, origin=origin)

    @classmethod
    def authenticated(
        cls, username: str, session_generation: int
    ) -> "WorkflowOutcome":
        return cls(
            OutcomeKind.AUTHENTICATED,
            detail=username,
            session_generation=session_generation,
        )

    @classmethod
    def of(cls, kind: OutcomeKind, detail: str | None = None) -> "WorkflowOutcome":
        return cls(kind, detail=detail)
