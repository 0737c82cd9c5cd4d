# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the access-grant endpoints."""

from pydantic import BaseModel, Field, StrictBool

from models.principal import NAME_MAX


# -- Requests --------------------------------------------------------------


class DelegateRequest(BaseModel):
    target: str = Field(max_length=NAME_MAX)
    tier: str            # "observer", "contributor" or "administrator"
    duration: int        # heights, 1–52560
    can_modify: StrictBool = False


# -- Responses -------------------------------------------------------------


class GrantResponse(BaseModel):
    vault_id: int
    grantee: str
    tier: str
    granted_at: int
    expires_at: int
    can_modify: bool
    active: bool
