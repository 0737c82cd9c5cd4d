# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Field predicates for registry input.

Every function here is pure and total: it answers True/False and never
raises, whatever it is handed.  Error kinds are chosen by the caller, not
here, so the same predicate can back different failures.
"""

from vault.records import VALID_TIERS

TITLE_MAX = 50
FINGERPRINT_LENGTH = 64
SUMMARY_MAX = 200
CLASSIFICATION_MAX = 20
LABELS_MAX = 5
LABEL_MAX = 30

# One year of 10-minute blocks
MAX_GRANT_DURATION = 52_560


def _length_between(value, low: int, high: int) -> bool:
    return isinstance(value, str) and low <= len(value) <= high


def valid_title(title) -> bool:
    return _length_between(title, 1, TITLE_MAX)


def valid_fingerprint(fingerprint) -> bool:
    """Exactly 64 characters – any other length is rejected."""
    return isinstance(fingerprint, str) and len(fingerprint) == FINGERPRINT_LENGTH


def valid_summary(summary) -> bool:
    return _length_between(summary, 1, SUMMARY_MAX)


def valid_classification(classification) -> bool:
    """Free-form category text, 1–20 characters."""
    return _length_between(classification, 1, CLASSIFICATION_MAX)


def valid_labels(labels) -> bool:
    """1–5 labels, each 1–30 characters.  One bad label rejects them all."""
    if isinstance(labels, (str, bytes)) or not isinstance(labels, (list, tuple)):
        return False
    if not 1 <= len(labels) <= LABELS_MAX:
        return False
    return all(_length_between(label, 1, LABEL_MAX) for label in labels)


def valid_tier(tier) -> bool:
    return isinstance(tier, str) and tier in VALID_TIERS


def valid_duration(duration) -> bool:
    # bool is an int subclass; True is not a duration
    if isinstance(duration, bool) or not isinstance(duration, int):
        return False
    return 0 < duration <= MAX_GRANT_DURATION


def valid_modify_flag(can_modify) -> bool:
    return isinstance(can_modify, bool)


def cross_check(title, summary) -> bool:
    """
    Title and summary together: each valid on its own and neither empty.
    Kept apart from the length checks; callers run it last.
    """
    if not (valid_title(title) and valid_summary(summary)):
        return False
    return title != "" and summary != ""


def target_not_self(caller, target) -> bool:
    """A principal cannot delegate to itself."""
    return caller != target
