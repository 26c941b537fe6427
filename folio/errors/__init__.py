"""
errors/ - Issue Taxonomy

Structured classification of data-quality issues (validation findings that
block or inform a transfer) and operational failures (transfer attempts that
raised, timed out or were rejected), plus the bridge's exception types.
"""

from .taxonomy import (
    IssueSeverity,
    IssueCategory,
    IssueCode,
    BridgeIssue,
    BridgeError,
    TransferTimeoutError,
    TransferRejectedError,
    create_validation_issue,
    create_transfer_issue,
)

__all__ = [
    "IssueSeverity",
    "IssueCategory",
    "IssueCode",
    "BridgeIssue",
    "BridgeError",
    "TransferTimeoutError",
    "TransferRejectedError",
    "create_validation_issue",
    "create_transfer_issue",
]
