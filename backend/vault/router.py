# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Vault endpoints – register, update and read registry records.

Invariants enforced by every handler
------------------------------------
* JWT is required on every endpoint (via ``get_current_principal``).  The
  caller identity is the token's principal, never a body field.
* All field checks happen in the registry, in a fixed order; the first
  failure becomes the response (404 not-found, 403 unauthorized, 400 for
  every other kind).
* Audit rows are written only after the registry call has committed.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from database import get_db
from core.security import get_client_ip, get_current_principal
from models.audit_log import AuditLog
from models.principal import Principal
from vault.dependencies import get_registry, raise_for_outcome, record_audit
from vault.registry import VaultRegistry
from vault.schemas import (
    HistoryResponse,
    SequenceResponse,
    SuccessResponse,
    VaultRegisterRequest,
    VaultRegisterResponse,
    VaultResponse,
    VaultUpdateRequest,
)

router = APIRouter(prefix="/vaults", tags=["vaults"])


# ---------------------------------------------------------------------------
# POST /vaults  – register a new record
# ---------------------------------------------------------------------------


@router.post("", response_model=VaultRegisterResponse, status_code=status.HTTP_201_CREATED)
def register_vault(
    body: VaultRegisterRequest,
    request: Request,
    current_principal: Principal = Depends(get_current_principal),
    registry: VaultRegistry = Depends(get_registry),
    db: Session = Depends(get_db),
):
    """Register a record owned by the caller and return its sequence id."""
    outcome = registry.register(
        body.title,
        body.fingerprint,
        body.summary,
        body.classification,
        body.labels,
    )
    raise_for_outcome(outcome)

    record_audit(
        db,
        actor=current_principal.name,
        action="vault_register",
        vault_id=outcome.value,
        detail=f"title={body.title}, classification={body.classification}, labels={len(body.labels)}",
        request_ip=get_client_ip(request),
    )
    return VaultRegisterResponse(vault_id=outcome.value)


# ---------------------------------------------------------------------------
# GET /vaults/sequence  – highest allocated id
# ---------------------------------------------------------------------------


@router.get("/sequence", response_model=SequenceResponse)
def get_sequence(registry: VaultRegistry = Depends(get_registry)):
    return SequenceResponse(last_vault_id=registry.last_vault_id())


# ---------------------------------------------------------------------------
# GET /vaults/{id}  – read a record
# ---------------------------------------------------------------------------


@router.get("/{vault_id}", response_model=VaultResponse)
def get_vault(vault_id: int, registry: VaultRegistry = Depends(get_registry)):
    """Records are public to any authenticated principal."""
    record = registry.get_vault(vault_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not-found")
    return record


# ---------------------------------------------------------------------------
# PUT /vaults/{id}  – revise content fields
# ---------------------------------------------------------------------------


@router.put("/{vault_id}", response_model=SuccessResponse)
def update_vault(
    vault_id: int,
    body: VaultUpdateRequest,
    request: Request,
    current_principal: Principal = Depends(get_current_principal),
    registry: VaultRegistry = Depends(get_registry),
    db: Session = Depends(get_db),
):
    """
    Replace title, fingerprint, summary and labels.  Originator, creation
    height and classification never change.
    """
    outcome = registry.update(
        vault_id,
        body.title,
        body.fingerprint,
        body.summary,
        body.labels,
    )
    raise_for_outcome(outcome)

    record_audit(
        db,
        actor=current_principal.name,
        action="vault_update",
        vault_id=vault_id,
        detail=f"title={body.title}, labels={len(body.labels)}",
        request_ip=get_client_ip(request),
    )
    return SuccessResponse()


# ---------------------------------------------------------------------------
# GET /vaults/{id}/history  – audit trail, originator only
# ---------------------------------------------------------------------------


@router.get("/{vault_id}/history", response_model=HistoryResponse)
def get_history(
    vault_id: int,
    current_principal: Principal = Depends(get_current_principal),
    registry: VaultRegistry = Depends(get_registry),
    db: Session = Depends(get_db),
):
    """Accepted calls against this record, oldest first."""
    record = registry.get_vault(vault_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not-found")
    if record.originator != current_principal.name:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="unauthorized")

    events = (
        db.query(AuditLog)
        .filter(AuditLog.vault_id == vault_id)
        .order_by(AuditLog.id.asc())
        .all()
    )
    return HistoryResponse(events=events)
