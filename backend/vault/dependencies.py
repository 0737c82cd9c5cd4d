# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
FastAPI glue between the HTTP layer and the registry.

* ``get_registry``      – one ``VaultRegistry`` per request, bound to the
  authenticated principal, the request's DB session and the chain clock.
* ``raise_for_outcome`` – turns a rejected ``Outcome`` into an HTTP error.
"""

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.host import HeightSource, RequestHost, get_clock
from core.security import get_current_principal
from database import get_db
from models.audit_log import AuditLog
from models.principal import Principal
from vault.errors import Outcome, RegistryError
from vault.registry import VaultRegistry
from vault.store import SqlStore

_STATUS_FOR_ERROR = {
    RegistryError.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    RegistryError.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
}


def get_registry(
    current_principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
    clock: HeightSource = Depends(get_clock),
) -> VaultRegistry:
    host = RequestHost(current_principal.name, clock)
    return VaultRegistry(SqlStore(db), host)


def raise_for_outcome(outcome: Outcome) -> None:
    """No-op for a successful outcome; HTTPException otherwise."""
    if outcome.ok:
        return
    raise HTTPException(
        status_code=_STATUS_FOR_ERROR.get(outcome.error, status.HTTP_400_BAD_REQUEST),
        detail=outcome.error.value,
    )


def record_audit(
    db: Session,
    actor: str,
    action: str,
    vault_id: int | None = None,
    detail: str | None = None,
    request_ip: str | None = None,
) -> None:
    """Append an audit row.  Called only after the registry call committed."""
    db.add(AuditLog(
        actor=actor,
        vault_id=vault_id,
        action=action,
        detail=detail,
        request_ip=request_ip,
    ))
    db.commit()
