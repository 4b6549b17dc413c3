"""Verification code model - pending one-time email codes.

The email is the primary key, so the database itself guarantees at most one
live code per email. Reissuing means delete-then-insert, never update.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from mydiary.models.base import Base


class VerificationCode(Base):
    """Pending email verification code.

    Attributes:
        email: Email address the code was issued for (primary key).
        code_hash: Argon2id hash of the numeric code. Never the plaintext.
        created_at: When the code was issued.
    """

    __tablename__ = "verification_codes"

    email: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
    )
    code_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
