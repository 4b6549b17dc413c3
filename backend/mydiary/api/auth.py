"""Login and registration endpoints.

Security considerations:
- POST /login: unknown username and wrong password share one message;
  rate limited per IP to slow down credential stuffing
- POST /registration: duplicate username/email surface as one generic
  "already taken" message; rate limited per IP
- GET /login: the logout_message query parameter is only echoed back when
  it is one of the known logout messages, so it cannot carry arbitrary text

Both POSTs answer with a redirect chosen by mydiary.routing. A correct login
for an unverified account, and a successful registration, continue with the
code-issuance step in the same request, so a verification code goes out
without the browser posting the credentials again.
"""

from typing import Annotated

from fastapi import APIRouter, Form, Request
from fastapi.responses import RedirectResponse

from mydiary.api.deps import DbSession, Mailer, Session
from mydiary.api.verification import navigate_or_forward
from mydiary.core.config import settings
from mydiary.core.messages import LOGIN_VIEW_PARAM_MESSAGES, MessageCategory
from mydiary.core.rate_limiting import limiter
from mydiary.core.responses import DataResponse, ViewModel
from mydiary.routing import (
    LOGIN_URI,
    LOGOUT_MESSAGE_PARAM,
    REGISTRATION_URI,
    take_view_message,
)
from mydiary.services.authentication import authenticate
from mydiary.services.registration import register

router = APIRouter()

FormField = Annotated[str | None, Form()]


# ===================================================================
# /login
# ===================================================================


@router.get(LOGIN_URI)
async def login_view(request: Request, session: Session) -> DataResponse[ViewModel]:
    """Login view with at most one feedback message.

    Session messages win over the query parameter. Validation feedback is
    preferred over login feedback.
    """
    message = take_view_message(
        session, MessageCategory.VALIDATION, MessageCategory.LOGIN
    )
    if message is None:
        param = request.query_params.get(LOGOUT_MESSAGE_PARAM)
        if param in LOGIN_VIEW_PARAM_MESSAGES:
            message = param

    return DataResponse(data=ViewModel(view="login", message=message))


@router.post(LOGIN_URI)
@limiter.limit(lambda: settings.rate_limit_login)
async def login(
    request: Request,  # noqa: ARG001 - required by @limiter.limit()
    db: DbSession,
    session: Session,
    mailer: Mailer,
    username: FormField = None,
    password: FormField = None,
) -> RedirectResponse:
    """Authenticate the posted credentials.

    Rate limit: settings.rate_limit_login per IP.
    """
    outcome = await authenticate(db, username, password)
    return await navigate_or_forward(outcome, session, db, mailer)


# ===================================================================
# /registration
# ===================================================================


@router.get(REGISTRATION_URI)
async def registration_view(session: Session) -> DataResponse[ViewModel]:
    """Registration view; validation feedback wins over registration feedback."""
    message = take_view_message(
        session, MessageCategory.VALIDATION, MessageCategory.REGISTRATION
    )
    return DataResponse(data=ViewModel(view="registration", message=message))


@router.post(REGISTRATION_URI)
@limiter.limit(lambda: settings.rate_limit_registration)
async def registration(
    request: Request,  # noqa: ARG001 - required by @limiter.limit()
    db: DbSession,
    session: Session,
    mailer: Mailer,
    username: FormField = None,
    password: FormField = None,
    email: FormField = None,
) -> RedirectResponse:
    """Create an unverified account from the posted form.

    Rate limit: settings.rate_limit_registration per IP.
    """
    outcome = await register(db, username, password, email)
    return await navigate_or_forward(outcome, session, db, mailer)
