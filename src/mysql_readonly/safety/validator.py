"""Statement classifier - decides whether a query may reach the database.

Every query handed to the server is untrusted. It is executed with the
pool's credentials only if it is a single SELECT statement with no
comments and none of the forbidden constructs below.

The analysis is textual, not a parser: string literals and comments are
masked first (see masking.py), then the masked text is checked in a
fixed order. The first failing check decides the verdict:

1. The statement must start with SELECT.
2. No unmasked semicolon, trailing or otherwise.
3. No comments of any kind.
4. No forbidden keyword as a whole word outside literals.
5. No comment opener may survive masking.

The keyword list is a blocklist and is therefore incomplete by nature.
Account privileges on the database remain the real authorization layer.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from mysql_readonly.core.exceptions import QueryRejectedError
from mysql_readonly.safety.masking import MaskedQuery, mask

logger = structlog.get_logger()


class ReasonCode(str, Enum):
    """Why a query was rejected."""

    NOT_A_SELECT = "NOT_A_SELECT"
    MULTIPLE_STATEMENTS = "MULTIPLE_STATEMENTS"
    COMMENT_DETECTED = "COMMENT_DETECTED"
    FORBIDDEN_CONSTRUCT = "FORBIDDEN_CONSTRUCT"


FORBIDDEN_KEYWORDS: tuple[str, ...] = (
    "insert",
    "update",
    "delete",
    "drop",
    "create",
    "alter",
    "truncate",
    "replace",
    "grant",
    "revoke",
    "set",
    "use",
    "commit",
    "rollback",
    "lock",
    "unlock",
    "call",
    "execute",
    "prepare",
    "deallocate",
    "load",
)

FORBIDDEN_PHRASES: tuple[str, ...] = (
    "into outfile",
    "into dumpfile",
)

# Also common function names; "name(" is a call, not a statement.
# Any keyword added here must be re-audited against MySQL's grammar.
FUNCTION_NAME_KEYWORDS: frozenset[str] = frozenset(
    {"update", "delete", "create", "replace", "set"}
)

_MESSAGES: dict[ReasonCode, str] = {
    ReasonCode.NOT_A_SELECT: "Only SELECT queries are allowed.",
    ReasonCode.MULTIPLE_STATEMENTS: (
        "Multiple statements are not allowed. Remove all semicolons outside string literals."
    ),
    ReasonCode.COMMENT_DETECTED: "SQL comments are not allowed.",
    ReasonCode.FORBIDDEN_CONSTRUCT: "Forbidden construct: {construct}.",
}


def _token_pattern(token: str) -> str:
    words = r"\s+".join(re.escape(word) for word in token.split())
    pattern = rf"(?<!\w)({words})(?!\w)"
    if token in FUNCTION_NAME_KEYWORDS:
        pattern += r"(?!\s*\()"
    return pattern


_FORBIDDEN_TOKENS: tuple[str, ...] = FORBIDDEN_PHRASES + FORBIDDEN_KEYWORDS
_FORBIDDEN_RE = re.compile(
    "|".join(_token_pattern(token) for token in _FORBIDDEN_TOKENS),
    re.IGNORECASE,
)
_SELECT_RE = re.compile(r"select(?!\w)", re.IGNORECASE)
_COMMENT_OPENER_RE = re.compile(r"--|/\*|#")


@dataclass(frozen=True)
class Allowed:
    """The query may be executed exactly as submitted."""

    @property
    def allowed(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """The query must not be executed.

    Attributes:
        reason: The check that failed.
        construct: Canonical name of the forbidden construct, only set
            when reason is FORBIDDEN_CONSTRUCT.
    """

    reason: ReasonCode
    construct: str | None = None

    @property
    def allowed(self) -> bool:
        return False

    @property
    def message(self) -> str:
        """Human-readable explanation for the requester."""
        return _MESSAGES[self.reason].format(construct=self.construct)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a structured error payload."""
        payload: dict[str, Any] = {
            "error": self.message,
            "reason": self.reason.value,
        }
        if self.construct is not None:
            payload["construct"] = self.construct
        return payload


Verdict = Allowed | Rejected


def _check_verb(raw: str) -> Rejected | None:
    if not _SELECT_RE.match(raw.lstrip()):
        return Rejected(ReasonCode.NOT_A_SELECT)
    return None


def _check_statement_boundary(masked: MaskedQuery) -> Rejected | None:
    if ";" in masked.text:
        return Rejected(ReasonCode.MULTIPLE_STATEMENTS)
    return None


def _check_comments(masked: MaskedQuery) -> Rejected | None:
    if masked.has_comment:
        return Rejected(ReasonCode.COMMENT_DETECTED)
    return None


def find_forbidden_construct(masked: MaskedQuery) -> str | None:
    """Find the leftmost forbidden construct in masked text.

    Matching is case-insensitive and whole-word: the characters on
    either side of a match must not be letters, digits or underscores.

    Args:
        masked: Output of mask().

    Returns:
        Upper-case canonical name of the construct, or None.
    """
    match = _FORBIDDEN_RE.search(masked.text)
    if match is None or match.lastindex is None:
        return None
    return _FORBIDDEN_TOKENS[match.lastindex - 1].upper()


def _check_forbidden(masked: MaskedQuery) -> Rejected | None:
    construct = find_forbidden_construct(masked)
    if construct is not None:
        return Rejected(ReasonCode.FORBIDDEN_CONSTRUCT, construct=construct)
    return None


def _check_comment_residue(masked: MaskedQuery) -> Rejected | None:
    match = _COMMENT_OPENER_RE.search(masked.text)
    if match is None:
        return None
    logger.error("masking_invariant_violated", position=match.start())
    return Rejected(ReasonCode.COMMENT_DETECTED)


def classify(raw: str, backslash_escapes: bool = True) -> Verdict:
    """Classify a query as Allowed or Rejected.

    Pure and stateless; safe to call concurrently. Never raises for any
    string input, including empty or malformed (unterminated quote or
    comment) queries.

    Args:
        raw: The untrusted query text.
        backslash_escapes: Passed through to mask().

    Returns:
        Allowed, or Rejected carrying exactly one ReasonCode.

    Examples:
        >>> classify("SELECT id, name FROM users LIMIT 10")
        Allowed()
        >>> classify("SELECT * FROM users; DROP TABLE users;").reason
        <ReasonCode.MULTIPLE_STATEMENTS: 'MULTIPLE_STATEMENTS'>
    """
    masked = mask(raw, backslash_escapes=backslash_escapes)

    rejected = (
        _check_verb(raw)
        or _check_statement_boundary(masked)
        or _check_comments(masked)
        or _check_forbidden(masked)
        or _check_comment_residue(masked)
    )
    if rejected is None:
        return Allowed()

    logger.info(
        "query_rejected",
        reason=rejected.reason.value,
        construct=rejected.construct,
    )
    return rejected


def validate_query(sql: str, backslash_escapes: bool = True) -> None:
    """Raise unless the statement classifier allows ``sql``.

    Args:
        sql: The query to check.
        backslash_escapes: Passed through to mask().

    Raises:
        QueryRejectedError: If the verdict is Rejected.
    """
    verdict = classify(sql, backslash_escapes=backslash_escapes)
    if isinstance(verdict, Rejected):
        raise QueryRejectedError(verdict)
