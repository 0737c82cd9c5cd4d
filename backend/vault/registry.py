# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Vault registry service.

Three mutating operations – ``register``, ``update`` and ``delegate`` – and
a handful of read-only queries over one ``RegistryStore``.

Every mutating operation follows the same shape:

1. Run its checks in a fixed order.  The first failing check decides the
   error kind; nothing after it runs.
2. Only if every check passed, perform the writes inside ``store.atomic()``.

So a rejected call never leaves anything behind.

Grants are bookkeeping only.  Neither ``update`` nor ``delegate`` consults
them; the originator is the only principal who may mutate a record or
delegate on it.
"""

from dataclasses import replace
from typing import Callable, Iterable, Optional, Sequence, Tuple

from core.host import HostEnvironment
from core.logger import logger
from vault import guard
from vault.errors import Outcome, RegistryError
from vault.records import AccessGrant, VaultRecord
from vault.store import RegistryStore
from vault.validators import (
    cross_check,
    target_not_self,
    valid_classification,
    valid_duration,
    valid_fingerprint,
    valid_labels,
    valid_modify_flag,
    valid_summary,
    valid_tier,
    valid_title,
)

Check = Tuple[Callable[[], bool], RegistryError]


def _first_failure(checks: Iterable[Check]) -> Optional[RegistryError]:
    """Evaluate *checks* in order; return the error of the first that fails."""
    for passes, error in checks:
        if not passes():
            return error
    return None


class VaultRegistry:
    def __init__(self, store: RegistryStore, host: HostEnvironment):
        self._store = store
        self._host = host

    # -- mutations ------------------------------------------------------------

    def register(
        self,
        title: str,
        fingerprint: str,
        summary: str,
        classification: str,
        labels: Sequence[str],
    ) -> Outcome:
        """Create a record owned by the caller.  Returns the new vault id."""
        caller = self._host.current_identity()
        error = _first_failure([
            (lambda: valid_title(title), RegistryError.MALFORMED_INPUT),
            (lambda: valid_fingerprint(fingerprint), RegistryError.MALFORMED_INPUT),
            (lambda: valid_summary(summary), RegistryError.CONTENT_VALIDATION_FAILURE),
            (lambda: valid_classification(classification), RegistryError.CATEGORY_VALIDATION_FAILURE),
            (lambda: valid_labels(labels), RegistryError.CONTENT_VALIDATION_FAILURE),
            (lambda: cross_check(title, summary), RegistryError.MALFORMED_INPUT),
        ])
        if error is not None:
            return self._reject("register", caller, None, error)

        height = self._host.current_height()
        with self._store.atomic():
            next_id = self._store.last_vault_id() + 1
            self._store.put_record(VaultRecord(
                vault_id=next_id,
                title=title,
                originator=caller,
                fingerprint=fingerprint,
                summary=summary,
                classification=classification,
                labels=tuple(labels),
                created_at=height,
                modified_at=height,
            ))
            self._store.set_last_vault_id(next_id)

        logger.info("vault registered | vault_id=%d originator=%s height=%d", next_id, caller, height)
        return Outcome.success(next_id)

    def update(
        self,
        vault_id: int,
        title: str,
        fingerprint: str,
        summary: str,
        labels: Sequence[str],
    ) -> Outcome:
        """
        Rewrite the content fields of a record.  Only the originator may do
        this.  ``originator``, ``created_at`` and ``classification`` are
        carried over untouched.
        """
        caller = self._host.current_identity()
        error = _first_failure([
            (lambda: guard.exists(self._store, vault_id), RegistryError.NOT_FOUND),
            (lambda: guard.is_owner(self._store, vault_id, caller), RegistryError.UNAUTHORIZED),
            (lambda: valid_title(title), RegistryError.MALFORMED_INPUT),
            (lambda: valid_fingerprint(fingerprint), RegistryError.MALFORMED_INPUT),
            (lambda: valid_summary(summary), RegistryError.CONTENT_VALIDATION_FAILURE),
            (lambda: valid_labels(labels), RegistryError.CONTENT_VALIDATION_FAILURE),
            (lambda: guard.in_allocated_range(self._store, vault_id), RegistryError.NOT_FOUND),
            (lambda: cross_check(title, summary), RegistryError.MALFORMED_INPUT),
        ])
        if error is not None:
            return self._reject("update", caller, vault_id, error)

        current = self._store.get_record(vault_id)
        height = self._host.current_height()
        with self._store.atomic():
            self._store.put_record(replace(
                current,
                title=title,
                fingerprint=fingerprint,
                summary=summary,
                labels=tuple(labels),
                modified_at=height,
            ))

        logger.info("vault updated | vault_id=%d originator=%s height=%d", vault_id, caller, height)
        return Outcome.success(True)

    def delegate(
        self,
        vault_id: int,
        target: str,
        tier: str,
        duration: int,
        can_modify: bool,
    ) -> Outcome:
        """
        Grant *target* a time-boxed tier on a record the caller originated.

        Any earlier grant to the same target is overwritten, whether it has
        lapsed or not.
        """
        caller = self._host.current_identity()
        error = _first_failure([
            (lambda: guard.exists(self._store, vault_id), RegistryError.NOT_FOUND),
            (lambda: guard.is_owner(self._store, vault_id, caller), RegistryError.UNAUTHORIZED),
            (lambda: target_not_self(caller, target), RegistryError.MALFORMED_INPUT),
            (lambda: valid_tier(tier), RegistryError.AUTHORIZATION_LEVEL_MISMATCH),
            (lambda: valid_duration(duration), RegistryError.TEMPORAL_BOUNDARY_VIOLATION),
            (lambda: guard.in_allocated_range(self._store, vault_id), RegistryError.NOT_FOUND),
            (lambda: valid_modify_flag(can_modify), RegistryError.MALFORMED_INPUT),
        ])
        if error is not None:
            return self._reject("delegate", caller, vault_id, error)

        height = self._host.current_height()
        grant = AccessGrant(
            vault_id=vault_id,
            grantee=target,
            tier=tier,
            granted_at=height,
            expires_at=height + duration,
            can_modify=can_modify,
        )
        with self._store.atomic():
            self._store.put_grant(grant)

        logger.info(
            "access delegated | vault_id=%d grantee=%s tier=%s expires_at=%d can_modify=%s",
            vault_id, target, tier, grant.expires_at, can_modify,
        )
        return Outcome.success(True)

    # -- queries --------------------------------------------------------------

    def get_vault(self, vault_id: int) -> Optional[VaultRecord]:
        return self._store.get_record(vault_id)

    def get_grant(self, vault_id: int, grantee: str) -> Optional[AccessGrant]:
        return self._store.get_grant(vault_id, grantee)

    def last_vault_id(self) -> int:
        return self._store.last_vault_id()

    def grant_is_active(self, vault_id: int, grantee: str) -> bool:
        """True while a stored grant has not reached its expiry height."""
        grant = self._store.get_grant(vault_id, grantee)
        return grant is not None and grant.is_active(self._host.current_height())

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _reject(operation: str, caller: str, vault_id: Optional[int], error: RegistryError) -> Outcome:
        logger.warning(
            "%s rejected | vault_id=%s caller=%s error=%s",
            operation, vault_id, caller, error.value,
        )
        return Outcome.failure(error)
