"""Endpoints behind the login guard (/user/*).

Every route depends on CurrentUsername, which raises LoginRequiredError for
a session without the logged-in marker or one that has been revoked; the
app turns that into a redirect to the login view.
"""

from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from mydiary.api.deps import CurrentUsername, DbSession, Session
from mydiary.core.responses import DataResponse, ViewModel
from mydiary.routing import (
    ACCOUNT_DELETION_URI,
    LOGOUT_URI,
    USER_PAGE_URI,
    navigate,
)
from mydiary.services.account_lifecycle import log_out, soft_delete_account
from mydiary.services.outcomes import OutcomeKind, WorkflowOutcome

router = APIRouter()


@router.get(USER_PAGE_URI)
async def diary_view(username: CurrentUsername) -> DataResponse[ViewModel]:
    """Landing page after login."""
    return DataResponse(data=ViewModel(view="diary", username=username))


@router.post(LOGOUT_URI)
async def logout(
    username: CurrentUsername,
    db: DbSession,
    session: Session,
) -> RedirectResponse:
    """End the session everywhere and return to the login view."""
    await log_out(db, username)
    await db.commit()
    return navigate(WorkflowOutcome.of(OutcomeKind.LOGGED_OUT), session)


@router.get(ACCOUNT_DELETION_URI)
async def account_deletion_view(
    username: CurrentUsername,
) -> DataResponse[ViewModel]:
    """Confirmation view for account deletion."""
    return DataResponse(data=ViewModel(view="account-deletion", username=username))


@router.post(ACCOUNT_DELETION_URI)
async def account_deletion(
    username: CurrentUsername,
    db: DbSession,
    session: Session,
) -> RedirectResponse:
    """Soft-delete the logged-in account and end the session.

    Raises:
        NotFoundError: If the account behind the session no longer exists.
        InvalidStateError: If the account is already deleted.
    """
    await soft_delete_account(db, username)
    await db.commit()
    return navigate(WorkflowOutcome.of(OutcomeKind.ACCOUNT_REMOVED), session)
