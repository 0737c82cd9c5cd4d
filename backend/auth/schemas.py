# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the auth endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


# -- Requests --------------------------------------------------------------


class LoginRequest(BaseModel):
    principal: str
    password: str


# -- Responses -------------------------------------------------------------


class LoginResponse(BaseModel):
    access_token: str
    token_type: str  # always "bearer"


class PrincipalInfoResponse(BaseModel):
    name: str
    is_active: bool
    last_login: Optional[datetime] = None

    model_config = {"from_attributes": True}
