"""Response envelope models.

WHY RESPONSE ENVELOPES:
- Consistent structure across all endpoints
- Easy to distinguish success from error responses
- Type-safe response building in endpoints

Views return a ViewModel inside the data envelope: the view name plus
whatever the presentation layer needs to render it. Rendering itself
happens elsewhere.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Standard response envelope for single resources.

    All success responses use the {"data": ...} envelope.
    """

    data: T


class ViewModel(BaseModel):
    """Data handed to the presentation layer for one rendered view.

    Attributes:
        view: Which view to render (e.g., "login", "verification").
        message: At most one feedback message, already taken from the
            session.
        username: Logged-in username, for views behind the login guard.
    """

    view: str
    message: str | None = None
    username: str | None = None


class ErrorDetail(BaseModel):
    """Error detail for response body.

    Attributes:
        code: Machine-readable error code (e.g., "NOT_FOUND").
        message: Human-readable error message.
        details: Optional list of field-level errors (for validation).
    """

    code: str
    message: str
    details: list[dict] | None = None


class ErrorResponse(BaseModel):
    """Standard error response envelope.

    Usage in exception handlers:
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=ErrorDetail(code=exc.code, message=exc.message)
            ).model_dump(),
        )
    """

    error: ErrorDetail
