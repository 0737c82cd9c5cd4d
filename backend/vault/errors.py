# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Registry error kinds and the value every mutating operation returns.

Registry operations do not raise for rejected input.  They return an
``Outcome`` and the caller inspects ``outcome.error``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class RegistryError(str, Enum):
    UNAUTHORIZED = "unauthorized"
    MALFORMED_INPUT = "malformed-input"
    NOT_FOUND = "not-found"
    CONTENT_VALIDATION_FAILURE = "content-validation-failure"
    CATEGORY_VALIDATION_FAILURE = "category-validation-failure"
    TEMPORAL_BOUNDARY_VIOLATION = "temporal-boundary-violation"
    AUTHORIZATION_LEVEL_MISMATCH = "authorization-level-mismatch"


@dataclass(frozen=True)
class Outcome:
    value: Any = None
    error: Optional[RegistryError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "Outcome":
        return cls(value=value)

    @classmethod
    def failure(cls, error: RegistryError) -> "Outcome":
        return cls(error=error)
