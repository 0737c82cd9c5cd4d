# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Auth endpoints – login and current-principal info.

Login returns the *same* error message whether the principal doesn't exist
or the password is wrong, so principal names cannot be enumerated.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from database import get_db
from core.logger import logger
from core.security import (
    create_access_token,
    get_client_ip,
    get_current_principal,
    verify_password,
)
from models.principal import Principal
from auth.schemas import LoginRequest, LoginResponse, PrincipalInfoResponse
from vault.dependencies import record_audit

router = APIRouter(prefix="/auth", tags=["auth"])

# Generic message used for both "no such principal" and "wrong password"
_LOGIN_FAIL = "Invalid principal or password"


# ---------------------------------------------------------------------------
# POST /auth/login
# ---------------------------------------------------------------------------


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """Authenticate and return a signed JWT."""
    principal = db.query(Principal).filter(Principal.name == body.principal).first()

    if not principal or not verify_password(body.password, principal.password_hash):
        logger.warning("login failed | principal=%s", body.principal)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=_LOGIN_FAIL)

    if not principal.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Principal disabled",
        )

    principal.last_login = datetime.now(timezone.utc)
    record_audit(db, actor=principal.name, action="principal_login", request_ip=get_client_ip(request))

    token = create_access_token({"sub": principal.name})
    return LoginResponse(access_token=token, token_type="bearer")


# ---------------------------------------------------------------------------
# GET /auth/me
# ---------------------------------------------------------------------------


@router.get("/me", response_model=PrincipalInfoResponse)
def me(current_principal: Principal = Depends(get_current_principal)):
    """Return the authenticated principal's public profile (no secrets)."""
    return current_principal
