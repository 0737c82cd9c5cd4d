# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the vault endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


# -- Requests --------------------------------------------------------------
# Only types are declared here.  Lengths, counts and enumerations are
# checked by vault.validators so every rejection carries a registry error
# kind instead of a generic 422.


class VaultRegisterRequest(BaseModel):
    title: str
    fingerprint: str
    summary: str
    classification: str
    labels: List[str]


class VaultUpdateRequest(BaseModel):
    title: str
    fingerprint: str
    summary: str
    labels: List[str]


# -- Responses -------------------------------------------------------------


class VaultRegisterResponse(BaseModel):
    vault_id: int


class SuccessResponse(BaseModel):
    success: bool = True


class SequenceResponse(BaseModel):
    last_vault_id: int


class VaultResponse(BaseModel):
    vault_id: int
    title: str
    originator: str
    fingerprint: str
    summary: str
    classification: str
    labels: List[str]
    created_at: int
    modified_at: int

    model_config = {"from_attributes": True}


class HistoryRow(BaseModel):
    id: int
    actor: str
    action: str
    detail: Optional[str] = None
    request_ip: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class HistoryResponse(BaseModel):
    events: List[HistoryRow]
