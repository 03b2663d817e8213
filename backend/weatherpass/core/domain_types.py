"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AccountId wraps the integer primary key — never a bare int in handler signatures
    - Location is the free-text query sent to the provider, never parsed here
    - Units is fixed to METRIC for every provider call

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to query strings and JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", int)


# ─── Value Types ─────────────────────────────────────────────────

Email = NewType("Email", str)
Location = NewType("Location", str)


# ─── Enums ───────────────────────────────────────────────────────

class Units(str, Enum):
    """Provider unit system requested on every lookup."""
    METRIC = "metric"


class LogFormat(str, Enum):
    """Log output formats accepted by setup_logging."""
    JSON = "json"
    TEXT = "text"
