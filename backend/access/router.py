# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Access-grant endpoints – delegate a tier on a vault and read grants back.

Only a record's originator may delegate.  An ``administrator`` grant does
not let its holder delegate further, and grants are not consulted by any
other endpoint: they are recorded, and their expiry can be queried.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from database import get_db
from core.security import get_client_ip, get_current_principal
from models.principal import Principal
from access.schemas import DelegateRequest, GrantResponse
from vault.dependencies import get_registry, raise_for_outcome, record_audit
from vault.registry import VaultRegistry
from vault.schemas import SuccessResponse

router = APIRouter(prefix="/vaults", tags=["access"])


# ---------------------------------------------------------------------------
# POST /vaults/{id}/grants  – delegate
# ---------------------------------------------------------------------------


@router.post("/{vault_id}/grants", response_model=SuccessResponse)
def delegate_access(
    vault_id: int,
    body: DelegateRequest,
    request: Request,
    current_principal: Principal = Depends(get_current_principal),
    registry: VaultRegistry = Depends(get_registry),
    db: Session = Depends(get_db),
):
    """Create or overwrite the grant for ``body.target`` on this vault."""
    outcome = registry.delegate(
        vault_id,
        body.target,
        body.tier,
        body.duration,
        body.can_modify,
    )
    raise_for_outcome(outcome)

    record_audit(
        db,
        actor=current_principal.name,
        action="access_delegate",
        vault_id=vault_id,
        detail=f"grantee={body.target}, tier={body.tier}, duration={body.duration}, can_modify={body.can_modify}",
        request_ip=get_client_ip(request),
    )
    return SuccessResponse()


# ---------------------------------------------------------------------------
# GET /vaults/{id}/grants/{grantee}  – read a grant
# ---------------------------------------------------------------------------


@router.get("/{vault_id}/grants/{grantee}", response_model=GrantResponse)
def get_grant(
    vault_id: int,
    grantee: str,
    registry: VaultRegistry = Depends(get_registry),
):
    """Return the stored grant, lapsed or not, with its current status."""
    grant = registry.get_grant(vault_id, grantee)
    if grant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not-found")
    return GrantResponse(
        vault_id=grant.vault_id,
        grantee=grant.grantee,
        tier=grant.tier,
        granted_at=grant.granted_at,
        expires_at=grant.expires_at,
        can_modify=grant.can_modify,
        active=registry.grant_is_active(vault_id, grantee),
    )
