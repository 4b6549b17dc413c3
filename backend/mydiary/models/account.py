"""Account model - registered identity with activation and deletion flags."""

from sqlalchemy import Boolean, CheckConstraint, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from mydiary.models.base import Base, TimestampMixin


class Account(Base, TimestampMixin):
    """User account for authentication.

    Three meaningful states: unverified (both flags false), active, and
    soft-deleted. Deleted-and-active is rejected by a CHECK constraint.

    Attributes:
        id: Integer primary key.
        username: Unique login name (HTML-escaped on the way in).
        email: Unique email address, lower-cased.
        password_hash: Argon2id encoded hash.
        is_active: True once the email has been verified.
        is_deleted: True after a soft delete. Records are never removed.
        session_generation: Bumped on logout and deletion. A session
            cookie is only honored while it carries the current value.
        created_at: Account creation timestamp (from TimestampMixin).
        updated_at: Last modification timestamp (from TimestampMixin).
    """

    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint(
            "NOT (is_deleted AND is_active)",
            name="ck_accounts_deleted_not_active",
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    username: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=text("false"),
        default=False,
    )
    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=text("false"),
        default=False,
    )
    session_generation: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        server_default=text("0"),
        default=0,
    )

    @property
    def is_unverified(self) -> bool:
        """Registered but not yet activated, and not deleted."""
        return not self.is_active and not self.is_deleted
