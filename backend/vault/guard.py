# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Ownership and existence checks.

``exists`` and ``in_allocated_range`` agree whenever storage and the
sequence are consistent.  They are still separate checks: the first asks
storage, the second asks the sequence.
"""

from vault.store import RegistryStore


def exists(store: RegistryStore, vault_id: int) -> bool:
    return store.get_record(vault_id) is not None


def is_owner(store: RegistryStore, vault_id: int, who: str) -> bool:
    """True iff the stored record's originator is *who*; False if absent."""
    record = store.get_record(vault_id)
    return record is not None and record.originator == who


def in_allocated_range(store: RegistryStore, vault_id: int) -> bool:
    return 0 < vault_id <= store.last_vault_id()
