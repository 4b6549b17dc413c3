"""Router aggregator.

All entry point routers are included here. Paths are absolute (see
mydiary.routing), so no prefixes are applied.
"""

from fastapi import APIRouter

from mydiary.api import auth, user, verification

router = APIRouter()

# =============================================================================
# Public entry points
# =============================================================================

router.include_router(auth.router, tags=["auth"])
router.include_router(verification.router, tags=["verification"])

# =============================================================================
# Login required
# =============================================================================

router.include_router(user.router, tags=["user"])
