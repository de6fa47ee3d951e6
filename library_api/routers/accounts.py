"""
Accounts Router

Handles account endpoints:
- Registration (email/password -> access token)
- Login (email/password -> access token)
- Granting and revoking admin (admin only)

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- The admin flag is copied into the token at issue time, so admin changes
  apply from the affected user's next login
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from sqlalchemy import select

from library_api.config import get_settings
from library_api.dependencies import AdminUser, DbSession
from library_api.models.user import User
from library_api.schemas.account import (
    AdminChangeRequest,
    AuthResponse,
    LoginRequest,
    RegisterRequest,
)
from library_api.services.rate_limiter import limiter
from library_api.services.security import (
    hash_password,
    issue_user_token,
    verify_password,
)

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/accounts",
    tags=["Accounts"],
    responses={
        400: {"description": "Bad request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Admin privileges required"},
    },
)


def get_user_by_email(db: DbSession, email: str) -> User | None:
    stmt = select(User).where(User.email == email.lower())
    return db.execute(stmt).scalar_one_or_none()


def get_user_by_email_or_404(db: DbSession, email: str) -> User:
    user = get_user_by_email(db, email)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No account with email {email}",
        )
    return user


def build_auth_response(user: User) -> AuthResponse:
    token, expires_at = issue_user_token(user)
    return AuthResponse(access_token=token, expires_at=expires_at)


# -------------------------------------------------------------------------
# Registration Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    description="""
    Create a new account and receive an access token.

    **Password Requirements:**
    - Minimum 8 characters
    - At least 1 uppercase letter
    - At least 1 lowercase letter
    - At least 1 number
    """,
    responses={409: {"description": "Email already registered"}},
)
@limiter.limit(settings.rate_limit_auth)
def register(
    request: Request,
    account_data: RegisterRequest,
    db: DbSession,
) -> AuthResponse:
    """Create the account, then sign it in."""
    if get_user_by_email(db, account_data.email) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )

    user = User(
        email=account_data.email.lower(),
        hashed_password=hash_password(account_data.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"New account registered: {user.email}")

    return build_auth_response(user)


# -------------------------------------------------------------------------
# Login Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login with email and password",
    description="""
    Authenticate and receive an access token.

    **Usage:**
    ```
    Authorization: Bearer <access_token>
    ```
    """,
)
@limiter.limit(settings.rate_limit_auth)
def login(
    request: Request,
    credentials: LoginRequest,
    db: DbSession,
) -> AuthResponse:
    """Bad email and bad password get the same 400 answer."""
    user = get_user_by_email(db, credentials.email)

    if user is None or not verify_password(credentials.password, user.hashed_password):
        logger.warning(f"Login failed for {credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Incorrect email or password",
        )

    logger.info(f"User logged in: {user.email}")

    return build_auth_response(user)


# -------------------------------------------------------------------------
# Admin Management
# -------------------------------------------------------------------------
@router.post(
    "/make-admin",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Grant admin",
    description="Give an account admin privileges. Requires admin.",
)
def make_admin(
    change: AdminChangeRequest,
    db: DbSession,
    admin: AdminUser,
) -> None:
    user = get_user_by_email_or_404(db, change.email)
    user.is_admin = True
    db.commit()

    logger.info(f"Admin granted to {user.email} by {admin.email}")


@router.post(
    "/remove-admin",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke admin",
    description="Remove admin privileges from an account. Requires admin.",
)
def remove_admin(
    change: AdminChangeRequest,
    db: DbSession,
    admin: AdminUser,
) -> None:
    user = get_user_by_email_or_404(db, change.email)
    user.is_admin = False
    db.commit()

    logger.info(f"Admin revoked from {user.email} by {admin.email}")
