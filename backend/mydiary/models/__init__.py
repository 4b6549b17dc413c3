"""SQLAlchemy ORM models for My Diary.

All models are exported from this module for convenient imports:
    from mydiary.models import Account, VerificationCode

- account.py: Account (credentials, activation and deletion flags)
- verification_code.py: VerificationCode (one pending code per email)
"""

from mydiary.models.account import Account
from mydiary.models.base import Base, TimestampMixin
from mydiary.models.verification_code import VerificationCode

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    # Models
    "Account",
    "VerificationCode",
]
