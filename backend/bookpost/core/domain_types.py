"""Domain Types: identity types and enums shared across layers.

Invariants:
    - Rental status is one of RentalStatus; no raw string matching elsewhere
    - str Enums serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
BookId = NewType("BookId", int)
RentalId = NewType("RentalId", int)
PostId = NewType("PostId", int)


# ─── Enums ───────────────────────────────────────────────────────

class RentalStatus(str, Enum):
    """Rental lifecycle: created at checkout, paid once."""
    CREATED = "created"
    PAID = "paid"
