# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Registry value types – storage independent."""

from dataclasses import dataclass
from typing import Tuple


# Exact-match access tiers.  A tier does not imply any other tier.
VALID_TIERS = {
    "observer",
    "contributor",
    "administrator",
}


@dataclass(frozen=True)
class VaultRecord:
    vault_id: int
    title: str
    originator: str
    fingerprint: str
    summary: str
    classification: str
    # immutable: readers cannot alter the stored labels
    labels: Tuple[str, ...] = ()
    created_at: int = 0
    modified_at: int = 0


@dataclass(frozen=True)
class AccessGrant:
    vault_id: int
    grantee: str
    tier: str
    granted_at: int
    expires_at: int
    can_modify: bool = False

    def is_active(self, height: int) -> bool:
        """A grant lapses at ``expires_at``; it is never pruned."""
        return height < self.expires_at
