"""Verification code endpoints.

POST /email-sender issues a code for the email carried in the session when
the user presses "send new code". Login for an unverified account and
successful registration reach the same step through
navigate_or_forward(), inside their own request. GET/POST /verification show
the code form and check a submitted code.
"""

from typing import Annotated

from fastapi import APIRouter, Form, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from mydiary.api.deps import DbSession, Mailer, Session
from mydiary.core.config import settings
from mydiary.core.email import MailSender
from mydiary.core.messages import MessageCategory
from mydiary.core.rate_limiting import limiter
from mydiary.core.responses import DataResponse, ViewModel
from mydiary.core.session import SessionHandle
from mydiary.routing import (
    EMAIL_SENDER_URI,
    VERIFICATION_URI,
    Forward,
    apply_forward,
    apply_navigation,
    navigate,
    route_outcome,
    take_view_message,
)
from mydiary.services.outcomes import WorkflowOutcome
from mydiary.services.verification import request_code, validate_code

router = APIRouter()


async def send_code(
    db: AsyncSession,
    mailer: MailSender,
    session: SessionHandle,
    *,
    resend: bool = False,
) -> RedirectResponse:
    """Issue a code for the session's pending email and redirect."""
    outcome = await request_code(db, mailer, session.pending_email, resend=resend)
    return navigate(outcome, session)


async def navigate_or_forward(
    outcome: WorkflowOutcome,
    session: SessionHandle,
    db: AsyncSession,
    mailer: MailSender,
) -> RedirectResponse:
    """Like navigate(), but runs a Forward's target in this request.

    Args:
        outcome: Result of the login or registration workflow.
        session: Session of the current user.
        db: Async database session.
        mailer: Outbound mail collaborator.

    Returns:
        The redirect of the outcome, or of the code-issuance step when the
        outcome forwards to /email-sender.

    Raises:
        ValueError: If a Forward names a target other than /email-sender.
    """
    action = route_outcome(outcome)
    if not isinstance(action, Forward):
        return apply_navigation(action, session)
    if action.uri != EMAIL_SENDER_URI:
        msg = f"No forward target {action.uri}"
        raise ValueError(msg)
    apply_forward(action, session)
    return await send_code(db, mailer, session)


@router.post(EMAIL_SENDER_URI)
@limiter.limit(lambda: settings.rate_limit_email)
async def email_sender(
    request: Request,  # noqa: ARG001 - required by @limiter.limit()
    db: DbSession,
    session: Session,
    mailer: Mailer,
    send_new_code: Annotated[str | None, Form()] = None,
) -> RedirectResponse:
    """Issue a verification code, or a replacement when asked for one.

    A present send_new_code field (any value) means the user pressed the
    resend button.

    Rate limit: settings.rate_limit_email per IP.
    """
    return await send_code(db, mailer, session, resend=send_new_code is not None)


@router.get(VERIFICATION_URI)
async def verification_view(session: Session) -> DataResponse[ViewModel]:
    """Code entry view with the latest verification message, if any."""
    message = take_view_message(session, MessageCategory.VERIFICATION)
    return DataResponse(data=ViewModel(view="verification", message=message))


@router.post(VERIFICATION_URI)
async def verification(
    db: DbSession,
    session: Session,
    code: Annotated[str | None, Form()] = None,
) -> RedirectResponse:
    """Check the submitted code against the email carried in the session."""
    outcome = await validate_code(db, session.pending_email, code)
    return navigate(outcome, session)
