"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

WHY Dependency Injection?
=========================
1. Reusability: Write once, use in many routes
2. Testing: Easy to swap the database session in tests
3. Separation of Concerns: Routes focus on the request, not on plumbing
4. Lifecycle Management: FastAPI handles creation/cleanup

Dependencies in this module:
- Database session (per-request)
- Bearer token decoding, current user and admin checks
- Author sort parameters
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from library_api.database import get_db
from library_api.models.user import User
from library_api.services.security import ADMIN_CLAIM, verify_token_type

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def list_authors(db: Session = Depends(get_db)):
#
# You can write:
#   def list_authors(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Author Sort Parameters
# =============================================================================
class SortParams:
    """
    Sort parameters for the author listing.

        GET /authors/?sort_by=2&direction=1   -> by surname, ascending

    sort_by: 1 = name, 2 = surname, 3 = birth date, anything else = id
    direction: 1 = ascending, anything else = descending
    """

    def __init__(
        self,
        sort_by: int = Query(
            default=0,
            description="1 = name, 2 = surname, 3 = birth date, other = id",
            examples=[1, 2, 3],
        ),
        direction: int = Query(
            default=0,
            description="1 = ascending, other = descending",
            examples=[0, 1],
        ),
    ) -> None:
        self.sort_by = sort_by
        self.direction = direction


Sorting = Annotated[SortParams, Depends()]


# =============================================================================
# JWT Authentication
# =============================================================================
# HTTPBearer extracts the token from "Authorization: Bearer <token>" and adds
# the "Authorize" button to Swagger UI. auto_error is off so a missing header
# gets the same 401 as a bad token.

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_payload(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """
    Decode and validate the bearer token.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = verify_token_type(credentials.credentials, "access")
    if payload is None or payload.get("sub") is None:
        raise credentials_exception

    return payload


TokenPayload = Annotated[dict, Depends(get_token_payload)]


def get_current_user(payload: TokenPayload, db: DbSession) -> User:
    """
    Look up the user the token was issued to.

    Raises:
        HTTPException: 401 if the user no longer exists
    """
    try:
        user_id = int(payload["sub"])
    except ValueError:
        user_id = None

    user = db.get(User, user_id) if user_id is not None else None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def get_current_admin(payload: TokenPayload, current_user: CurrentUser) -> User:
    """
    Require the admin claim on the token.

    The claim is set when the token is issued, so an account promoted
    after signing in needs to sign in again.

    Raises:
        HTTPException: 403 if the token carries no admin claim
    """
    if not payload.get(ADMIN_CLAIM):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return current_user


AdminUser = Annotated[User, Depends(get_current_admin)]
