"""
Authentication Router

Admin login and token verification.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.estatehub.api.auth import (
    TokenPayload,
    create_access_token,
    get_token_payload,
    validate_credentials,
)
from src.estatehub.api.dependencies import get_db
from src.estatehub.api.rate_limit import enforce_auth_rate_limit
from src.estatehub.api.schemas import AdminResponse, LoginRequest, LoginResponse, VerifyResponse
from src.estatehub.db.repository import AdminRepository

router = APIRouter(prefix="/api/admin", tags=["authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    dependencies=[Depends(enforce_auth_rate_limit)],
)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
):
    """
    Exchange admin credentials for a bearer token valid for 24 hours.

    Raises:
        HTTPException: 401 if the credentials are wrong or the account is inactive
    """
    admin = validate_credentials(db, credentials.username, credentials.password)
    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return LoginResponse(
        token=create_access_token(admin),
        admin=AdminResponse.model_validate(admin),
    )


@router.get("/verify", response_model=VerifyResponse)
def verify(
    token: TokenPayload = Depends(get_token_payload),
    db: Session = Depends(get_db),
):
    """
    Confirm the bearer token and return the admin it belongs to.

    Raises:
        HTTPException: 401 if the admin no longer exists or was deactivated
    """
    admin = AdminRepository().get_active_by_id(db, token.admin_id)
    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return VerifyResponse(admin=AdminResponse.model_validate(admin))
