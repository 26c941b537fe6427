"""
errors/taxonomy.py - Issue classification system

Two tiers:
- DATA_QUALITY issues come from the validation engine. ERROR severity blocks
  a transfer; WARNING severity only informs.
- OPERATIONAL issues describe a failed transfer attempt.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from enum import Enum
import uuid


class IssueSeverity(Enum):
    """Issue severity levels."""
    WARNING = "warning"
    ERROR = "error"


class IssueCategory(Enum):
    """Issue categories."""
    DATA_QUALITY = "data_quality"
    OPERATIONAL = "operational"


class IssueCode(Enum):
    """Specific issue codes."""

    # Blocking data-quality errors (1xxx)
    NO_CONTAINERS = 1001
    NO_PARAGRAPHS = 1002
    CONTENT_TOO_SHORT = 1003

    # Non-blocking data-quality warnings (2xxx)
    FEW_CONTAINERS = 2001
    FEW_PARAGRAPHS = 2002
    UNASSIGNED_PARAGRAPHS = 2003
    CONTENT_BELOW_RECOMMENDED = 2004
    EMPTY_CONTAINERS = 2005

    # Operational (3xxx)
    TRANSFER_FAILED = 3001
    TRANSFER_TIMEOUT = 3002
    TRANSFER_REJECTED = 3003


@dataclass
class BridgeIssue:
    """Structured issue representation."""

    issue_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])

    code: IssueCode = IssueCode.TRANSFER_FAILED
    category: IssueCategory = IssueCategory.OPERATIONAL
    severity: IssueSeverity = IssueSeverity.ERROR

    message: str = ""

    # Count behind the message, where one applies (e.g. unassigned paragraphs)
    count: Optional[int] = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_blocking(self) -> bool:
        return self.severity == IssueSeverity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "issue_id": self.issue_id,
            "code": self.code.name,
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "count": self.count,
        }


class BridgeError(Exception):
    """Base class for bridge exceptions."""
    pass


class TransferTimeoutError(BridgeError):
    """The injected transfer function did not finish in time."""

    def __init__(self, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(f"Transfer timed out after {timeout_ms} ms")


class TransferRejectedError(BridgeError):
    """The injected transfer function reported that it did not accept the payload."""

    def __init__(self, message: str = "Transfer was rejected by the receiver"):
        super().__init__(message)


def create_validation_issue(
    code: IssueCode,
    message: str,
    blocking: bool,
    count: Optional[int] = None,
) -> BridgeIssue:
    """Factory for data-quality issues."""
    return BridgeIssue(
        code=code,
        category=IssueCategory.DATA_QUALITY,
        severity=IssueSeverity.ERROR if blocking else IssueSeverity.WARNING,
        message=message,
        count=count,
    )


def create_transfer_issue(message: str, code: IssueCode = IssueCode.TRANSFER_FAILED) -> BridgeIssue:
    """Factory for operational failures."""
    return BridgeIssue(
        code=code,
        category=IssueCategory.OPERATIONAL,
        severity=IssueSeverity.ERROR,
        message=message,
    )
