# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Keyed storage behind the registry.

The registry sees two maps and one counter:

* records  – vault_id            → VaultRecord
* grants   – (vault_id, grantee) → AccessGrant
* sequence – highest vault_id handed out

``atomic()`` wraps the writes of a single operation.  Either all of them
land or none do.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Callable, ContextManager, Dict, Iterator, List, Optional, Tuple

from sqlalchemy.orm import Session

from models.access_grant import Grant
from models.registry_sequence import RegistrySequence
from models.vault import Vault
from vault.records import AccessGrant, VaultRecord


class RegistryStore(ABC):
    """Read-your-writes keyed storage for one registry."""

    @abstractmethod
    def get_record(self, vault_id: int) -> Optional[VaultRecord]: ...

    @abstractmethod
    def put_record(self, record: VaultRecord) -> None: ...

    @abstractmethod
    def get_grant(self, vault_id: int, grantee: str) -> Optional[AccessGrant]: ...

    @abstractmethod
    def put_grant(self, grant: AccessGrant) -> None: ...

    @abstractmethod
    def last_vault_id(self) -> int: ...

    @abstractmethod
    def set_last_vault_id(self, vault_id: int) -> None: ...

    @abstractmethod
    def atomic(self) -> ContextManager[None]:
        """Group the writes of one operation; all land or none do."""


# ---------------------------------------------------------------------------
# In-memory
# ---------------------------------------------------------------------------


class InMemoryStore(RegistryStore):
    """
    Dict-backed store.  Writes apply immediately; inside ``atomic()`` the
    previous values are remembered and put back if the block raises.
    """

    def __init__(self):
        self._records: Dict[int, VaultRecord] = {}
        self._grants: Dict[Tuple[int, str], AccessGrant] = {}
        self._last_vault_id = 0
        self._undo: Optional[List[Callable[[], None]]] = None

    def get_record(self, vault_id: int) -> Optional[VaultRecord]:
        return self._records.get(vault_id)

    def put_record(self, record: VaultRecord) -> None:
        self._remember(self._records, record.vault_id)
        self._records[record.vault_id] = record

    def get_grant(self, vault_id: int, grantee: str) -> Optional[AccessGrant]:
        return self._grants.get((vault_id, grantee))

    def put_grant(self, grant: AccessGrant) -> None:
        key = (grant.vault_id, grant.grantee)
        self._remember(self._grants, key)
        self._grants[key] = grant

    def last_vault_id(self) -> int:
        return self._last_vault_id

    def set_last_vault_id(self, vault_id: int) -> None:
        if self._undo is not None:
            previous = self._last_vault_id
            self._undo.append(lambda: setattr(self, "_last_vault_id", previous))
        self._last_vault_id = vault_id

    def _remember(self, table: dict, key) -> None:
        if self._undo is None:
            return
        if key in table:
            previous = table[key]
            self._undo.append(lambda: table.__setitem__(key, previous))
        else:
            self._undo.append(lambda: table.pop(key, None))

    @contextmanager
    def atomic(self) -> Iterator[None]:
        self._undo = []
        try:
            yield
        except Exception:
            for undo in reversed(self._undo):
                undo()
            raise
        finally:
            self._undo = None


# ---------------------------------------------------------------------------
# SQLAlchemy
# ---------------------------------------------------------------------------


# Integer columns are signed 32-bit on MySQL
MAX_STORED_ID = 2**31 - 1


def _storable_id(vault_id) -> bool:
    return isinstance(vault_id, int) and not isinstance(vault_id, bool) and 0 < vault_id <= MAX_STORED_ID


def _to_record(row: Vault) -> VaultRecord:
    return VaultRecord(
        vault_id=row.id,
        title=row.title,
        originator=row.originator,
        fingerprint=row.fingerprint,
        summary=row.summary,
        classification=row.classification,
        labels=tuple(row.labels or ()),
        created_at=row.created_at,
        modified_at=row.modified_at,
    )


def _to_grant(row: Grant) -> AccessGrant:
    return AccessGrant(
        vault_id=row.vault_id,
        grantee=row.grantee,
        tier=row.tier,
        granted_at=row.granted_at,
        expires_at=row.expires_at,
        can_modify=row.can_modify,
    )


class SqlStore(RegistryStore):
    """
    Store backed by a SQLAlchemy session.

    Keys outside the signed 32-bit range of the id columns cannot name a
    stored row; lookups with them return None without touching the database.

    Writes are added to the session and only reach the database when the
    enclosing ``atomic()`` block commits.  Any exception inside the block
    rolls the session back and propagates.
    """

    def __init__(self, db: Session):
        self._db = db

    def get_record(self, vault_id: int) -> Optional[VaultRecord]:
        if not _storable_id(vault_id):
            return None
        row = self._db.get(Vault, vault_id)
        return _to_record(row) if row else None

    def put_record(self, record: VaultRecord) -> None:
        row = self._db.get(Vault, record.vault_id)
        if row is None:
            row = Vault(id=record.vault_id)
            self._db.add(row)
        row.title = record.title
        row.originator = record.originator
        row.fingerprint = record.fingerprint
        row.summary = record.summary
        row.classification = record.classification
        row.labels = list(record.labels)
        row.created_at = record.created_at
        row.modified_at = record.modified_at
        self._db.flush()

    def get_grant(self, vault_id: int, grantee: str) -> Optional[AccessGrant]:
        if not _storable_id(vault_id):
            return None
        row = self._db.get(Grant, (vault_id, grantee))
        return _to_grant(row) if row else None

    def put_grant(self, grant: AccessGrant) -> None:
        row = self._db.get(Grant, (grant.vault_id, grant.grantee))
        if row is None:
            row = Grant(vault_id=grant.vault_id, grantee=grant.grantee)
            self._db.add(row)
        row.tier = grant.tier
        row.granted_at = grant.granted_at
        row.expires_at = grant.expires_at
        row.can_modify = grant.can_modify
        self._db.flush()

    def _sequence(self) -> Optional[RegistrySequence]:
        return (
            self._db.query(RegistrySequence)
            .filter(RegistrySequence.id == 1)
            .with_for_update()
            .first()
        )

    def last_vault_id(self) -> int:
        seq = self._sequence()
        return seq.last_vault_id if seq else 0

    def set_last_vault_id(self, vault_id: int) -> None:
        seq = self._sequence()
        if seq is None:
            seq = RegistrySequence(id=1)
            self._db.add(seq)
        seq.last_vault_id = vault_id
        self._db.flush()

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            yield
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
