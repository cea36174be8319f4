"""Safety layer - the statement classifier in front of the database.

Every query goes through classify() before it can reach the pool. A
Rejected verdict means the query is never executed.
"""

from .masking import MaskedQuery, mask
from .validator import (
    FORBIDDEN_KEYWORDS,
    FORBIDDEN_PHRASES,
    Allowed,
    ReasonCode,
    Rejected,
    Verdict,
    classify,
    validate_query,
)

__all__ = [
    "mask",
    "MaskedQuery",
    "classify",
    "validate_query",
    "Allowed",
    "Rejected",
    "Verdict",
    "ReasonCode",
    "FORBIDDEN_KEYWORDS",
    "FORBIDDEN_PHRASES",
]
