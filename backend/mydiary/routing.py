"""Outcome router: where a request goes next and what the user is told.

All post-action navigation policy lives in this module. route_outcome()
maps a WorkflowOutcome to a data-only NavigationAction; apply_navigation()
performs the session writes and builds the HTTP response.

Navigation variants:
- RedirectWithMessage: store one categorized message, redirect (303)
- RedirectWithParams: redirect with query parameters, optionally ending
  the session first (logout, account deletion)
- Forward: continue at another entry point within the same request,
  carrying values in the session instead of a visible message. The
  client is never asked to re-post, so the submitted credentials are not
  sent a second time. The entry point that got the Forward runs the
  target itself (see mydiary.api.verification.navigate_or_forward)
- RedirectPlain: redirect after setting session values (login success)
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from fastapi.responses import RedirectResponse

from mydiary.core import messages
from mydiary.core.credentials import CredentialCheck
from mydiary.core.messages import MessageCategory
from mydiary.core.session import (
    LOGGED_IN_KEY,
    PENDING_EMAIL_KEY,
    SESSION_GENERATION_KEY,
    USERNAME_KEY,
    SessionHandle,
)
from mydiary.services.outcomes import FormOrigin, OutcomeKind, WorkflowOutcome

LOGIN_URI = "/login"
REGISTRATION_URI = "/registration"
VERIFICATION_URI = "/verification"
EMAIL_SENDER_URI = "/email-sender"
USER_PAGE_URI = "/user/diary"
LOGOUT_URI = "/user/logout"
ACCOUNT_DELETION_URI = "/user/account-deletion"

LOGOUT_MESSAGE_PARAM = "logout_message"

# =============================================================================
# Navigation actions
# =============================================================================


@dataclass(frozen=True)
class RedirectWithMessage:
    """Redirect and leave one message for the next view of ``category``."""

    uri: str
    category: MessageCategory
    message: str
    drop_keys: tuple[str, ...] = ()


@dataclass(frozen=True)
class RedirectWithParams:
    """Redirect with query parameters."""

    uri: str
    params: Mapping[str, str] = field(default_factory=dict)
    end_session: bool = False


@dataclass(frozen=True)
class Forward:
    """Continue at another entry point without a client round trip."""

    uri: str
    session_values: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RedirectPlain:
    """Redirect after setting session values."""

    uri: str
    session_values: Mapping[str, Any] = field(default_factory=dict)
    clear_messages: bool = False


NavigationAction = RedirectWithMessage | RedirectWithParams | Forward | RedirectPlain

# =============================================================================
# Routing table
# =============================================================================

_VALIDATION_MESSAGES: dict[str, str] = {
    CredentialCheck.EMPTY_FIELDS.value: messages.HAS_EMPTY_FIELDS,
    CredentialCheck.BAD_USERNAME.value: messages.INVALID_USERNAME_FORMAT,
    CredentialCheck.BAD_PASSWORD.value: messages.INVALID_PASSWORD_FORMAT,
    CredentialCheck.BAD_EMAIL.value: messages.INVALID_EMAIL_FORMAT,
}

_ORIGIN_URIS: dict[FormOrigin, str] = {
    FormOrigin.LOGIN: LOGIN_URI,
    FormOrigin.REGISTRATION: REGISTRATION_URI,
}

# Outcomes that always redirect with a fixed categorized message
_MESSAGE_ROUTES: dict[OutcomeKind, tuple[str, MessageCategory, str]] = {
    OutcomeKind.AUTHENTICATION_FAILED: (
        LOGIN_URI,
        MessageCategory.LOGIN,
        messages.FAILED_AUTHENTICATION,
    ),
    OutcomeKind.ACCOUNT_DELETED: (
        LOGIN_URI,
        MessageCategory.LOGIN,
        messages.DELETED_ACCOUNT,
    ),
    OutcomeKind.REGISTRATION_CONFLICT: (
        REGISTRATION_URI,
        MessageCategory.REGISTRATION,
        messages.UNAVAILABLE_USERNAME_OR_EMAIL,
    ),
    OutcomeKind.CODE_INVALID: (
        VERIFICATION_URI,
        MessageCategory.VERIFICATION,
        messages.INVALID_VERIFICATION_CODE,
    ),
    OutcomeKind.CODE_SENT: (
        VERIFICATION_URI,
        MessageCategory.VERIFICATION,
        messages.CODE_SENT,
    ),
    OutcomeKind.CODE_PENDING: (
        VERIFICATION_URI,
        MessageCategory.VERIFICATION,
        messages.CODE_PENDING,
    ),
    OutcomeKind.CODE_SEND_FAILED: (
        VERIFICATION_URI,
        MessageCategory.VERIFICATION,
        messages.ERROR_SENDING_VERIFICATION_CODE,
    ),
    OutcomeKind.RESEND_SENT: (
        VERIFICATION_URI,
        MessageCategory.VERIFICATION,
        messages.NEW_VERIFICATION_CODE_SENT,
    ),
    OutcomeKind.RESEND_FAILED: (
        VERIFICATION_URI,
        MessageCategory.VERIFICATION,
        messages.ERROR_SENDING_NEW_VERIFICATION_CODE,
    ),
}

_END_SESSION_MESSAGES: dict[OutcomeKind, str] = {
    OutcomeKind.LOGGED_OUT: messages.LOGOUT_SUCCESSFUL,
    OutcomeKind.ACCOUNT_REMOVED: messages.ACCOUNT_DELETION_SUCCESSFUL,
}


def route_outcome(outcome: WorkflowOutcome) -> NavigationAction:
    """Map a workflow outcome to exactly one navigation action.

    Args:
        outcome: Result of a login, registration, verification, logout or
            account deletion step.

    Returns:
        The navigation action to apply.

    Raises:
        ValueError: If the outcome is missing the payload its kind needs.
    """
    kind = outcome.kind

    if kind in _MESSAGE_ROUTES:
        uri, category, message = _MESSAGE_ROUTES[kind]
        return RedirectWithMessage(uri, category, message)

    if kind is OutcomeKind.INPUT_INVALID:
        if outcome.origin is None or outcome.detail not in _VALIDATION_MESSAGES:
            msg = "INPUT_INVALID outcome needs an origin and a credential check"
            raise ValueError(msg)
        return RedirectWithMessage(
            _ORIGIN_URIS[outcome.origin],
            MessageCategory.VALIDATION,
            _VALIDATION_MESSAGES[outcome.detail],
        )

    if kind in (OutcomeKind.ACCOUNT_UNVERIFIED, OutcomeKind.REGISTERED):
        return Forward(
            EMAIL_SENDER_URI, {PENDING_EMAIL_KEY: _required_detail(outcome)}
        )

    if kind is OutcomeKind.AUTHENTICATED:
        if outcome.session_generation is None:
            msg = "AUTHENTICATED outcome needs a session generation"
            raise ValueError(msg)
        return RedirectPlain(
            USER_PAGE_URI,
            {
                LOGGED_IN_KEY: True,
                USERNAME_KEY: _required_detail(outcome),
                SESSION_GENERATION_KEY: outcome.session_generation,
            },
            clear_messages=True,
        )

    if kind is OutcomeKind.CODE_VALID:
        return RedirectWithMessage(
            LOGIN_URI,
            MessageCategory.LOGIN,
            messages.ACCOUNT_ACTIVATED,
            drop_keys=(PENDING_EMAIL_KEY,),
        )

    if kind in _END_SESSION_MESSAGES:
        return RedirectWithParams(
            LOGIN_URI,
            {LOGOUT_MESSAGE_PARAM: _END_SESSION_MESSAGES[kind]},
            end_session=True,
        )

    msg = f"No route for outcome {kind.value}"
    raise ValueError(msg)


def _required_detail(outcome: WorkflowOutcome) -> str:
    if not outcome.detail:
        msg = f"{outcome.kind.value} outcome needs a detail value"
        raise ValueError(msg)
    return outcome.detail


# =============================================================================
# Applying actions
# =============================================================================


def _clear_messages(session: SessionHandle) -> None:
    for category in MessageCategory:
        session.delete(category.session_key)


def apply_forward(action: Forward, session: SessionHandle) -> None:
    """Store the values a Forward carries to its target."""
    for key, value in action.session_values.items():
        session.set(key, value)


def apply_navigation(
    action: NavigationAction, session: SessionHandle
) -> RedirectResponse:
    """Perform an action's session writes and build its redirect.

    Args:
        action: Redirect action returned by route_outcome().
        session: Session of the current user.

    Returns:
        303 redirect.

    Raises:
        TypeError: For a Forward, which has no response of its own; the
            entry point applies it with apply_forward() and runs the target.
    """
    if isinstance(action, RedirectWithMessage):
        # One message per view: a newer message replaces any unread ones
        _clear_messages(session)
        session.set(action.category.session_key, action.message)
        for key in action.drop_keys:
            session.delete(key)
        return RedirectResponse(url=action.uri, status_code=303)

    if isinstance(action, RedirectWithParams):
        if action.end_session:
            session.clear()
        url = action.uri
        if action.params:
            url = f"{url}?{urlencode(action.params)}"
        return RedirectResponse(url=url, status_code=303)

    if isinstance(action, Forward):
        msg = f"Forward to {action.uri} must be run by the entry point"
        raise TypeError(msg)

    if action.clear_messages:
        _clear_messages(session)
    for key, value in action.session_values.items():
        session.set(key, value)
    return RedirectResponse(url=action.uri, status_code=303)


def navigate(outcome: WorkflowOutcome, session: SessionHandle) -> RedirectResponse:
    """Route an outcome and apply the resulting action."""
    return apply_navigation(route_outcome(outcome), session)


def take_view_message(
    session: SessionHandle, *categories: MessageCategory
) -> str | None:
    """Read-once message lookup for a view.

    Every listed category is taken (cleared) so stale messages never
    reappear; the first one present, in argument order, is returned.
    """
    found: str | None = None
    for category in categories:
        value = session.take(category.session_key)
        if found is None and value:
            found = value
    return found
