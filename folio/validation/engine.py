"""
folio Validation Engine

Readiness report for handing the document off. All rules are evaluated on
every call (no short-circuit):

    ERROR    no containers
    ERROR    no paragraphs
    ERROR    total content length < 10
    WARNING  fewer than 2 containers
    WARNING  fewer than 3 paragraphs
    WARNING  unassigned paragraphs exist (count in message)
    WARNING  total content length < 100
    WARNING  containers without paragraphs exist (count in message)

Errors block a transfer, warnings never do. Total content length is the sum
of raw (untrimmed) paragraph content lengths.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List
import logging

from folio.adapters.converters import normalize_containers, normalize_paragraphs
from folio.errors.taxonomy import (
    BridgeIssue,
    IssueCode,
    create_validation_issue,
)

logger = logging.getLogger(__name__)

MIN_CONTENT_LENGTH = 10
RECOMMENDED_CONTENT_LENGTH = 100
RECOMMENDED_CONTAINERS = 2
RECOMMENDED_PARAGRAPHS = 3


# =============================================================================
# REPORT
# =============================================================================

@dataclass
class ValidationReport:
    """
    Result of validating a record set.

    is_ready requires zero errors and the caller-supplied transfer capability.
    """
    issues: List[BridgeIssue] = field(default_factory=list)
    is_ready: bool = False

    # Summary counts
    container_count: int = 0
    paragraph_count: int = 0
    assigned_paragraph_count: int = 0
    unassigned_paragraph_count: int = 0
    total_content_length: int = 0

    @property
    def errors(self) -> List[str]:
        return [i.message for i in self.issues if i.is_blocking]

    @property
    def warnings(self) -> List[str]:
        return [i.message for i in self.issues if not i.is_blocking]

    @property
    def has_errors(self) -> bool:
        return any(i.is_blocking for i in self.issues)

    def codes(self) -> List[IssueCode]:
        return [i.code for i in self.issues]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "errors": self.errors,
            "warnings": self.warnings,
            "is_ready": self.is_ready,
            "container_count": self.container_count,
            "paragraph_count": self.paragraph_count,
            "assigned_paragraph_count": self.assigned_paragraph_count,
            "unassigned_paragraph_count": self.unassigned_paragraph_count,
            "total_content_length": self.total_content_length,
            "issues": [i.to_dict() for i in self.issues],
        }


# =============================================================================
# ENGINE
# =============================================================================

def validate(containers: Any, paragraphs: Any, transfer_capable: bool = True) -> ValidationReport:
    """
    Validate a record set for transfer.

    Args:
        containers: Container records (or anything the adapters accept)
        paragraphs: Paragraph records (or anything the adapters accept)
        transfer_capable: Capability flag from the transfer orchestrator

    Returns:
        ValidationReport
    """
    container_list = normalize_containers(containers)
    paragraph_list = normalize_paragraphs(paragraphs)

    container_count = len(container_list)
    paragraph_count = len(paragraph_list)
    unassigned_count = sum(1 for p in paragraph_list if p.container_id is None)
    total_length = sum(len(p.content) for p in paragraph_list)

    used_ids = {p.container_id for p in paragraph_list if p.container_id is not None}
    empty_container_count = sum(1 for c in container_list if c.id not in used_ids)

    issues: List[BridgeIssue] = []

    # Blocking
    if container_count == 0:
        issues.append(create_validation_issue(
            IssueCode.NO_CONTAINERS, "No containers defined", blocking=True,
        ))
    if paragraph_count == 0:
        issues.append(create_validation_issue(
            IssueCode.NO_PARAGRAPHS, "No paragraphs written", blocking=True,
        ))
    if total_length < MIN_CONTENT_LENGTH:
        issues.append(create_validation_issue(
            IssueCode.CONTENT_TOO_SHORT,
            f"Content is too short (minimum {MIN_CONTENT_LENGTH} characters required)",
            blocking=True,
            count=total_length,
        ))

    # Informational
    if container_count < RECOMMENDED_CONTAINERS:
        issues.append(create_validation_issue(
            IssueCode.FEW_CONTAINERS,
            f"Fewer than {RECOMMENDED_CONTAINERS} containers (recommended: {RECOMMENDED_CONTAINERS} or more)",
            blocking=False,
            count=container_count,
        ))
    if paragraph_count < RECOMMENDED_PARAGRAPHS:
        issues.append(create_validation_issue(
            IssueCode.FEW_PARAGRAPHS,
            f"Fewer than {RECOMMENDED_PARAGRAPHS} paragraphs (recommended: {RECOMMENDED_PARAGRAPHS} or more)",
            blocking=False,
            count=paragraph_count,
        ))
    if unassigned_count > 0:
        issues.append(create_validation_issue(
            IssueCode.UNASSIGNED_PARAGRAPHS,
            f"{unassigned_count} unassigned paragraph(s)",
            blocking=False,
            count=unassigned_count,
        ))
    if total_length < RECOMMENDED_CONTENT_LENGTH:
        issues.append(create_validation_issue(
            IssueCode.CONTENT_BELOW_RECOMMENDED,
            f"Content is under {RECOMMENDED_CONTENT_LENGTH} characters (recommended: {RECOMMENDED_CONTENT_LENGTH} or more)",
            blocking=False,
            count=total_length,
        ))
    if empty_container_count > 0:
        issues.append(create_validation_issue(
            IssueCode.EMPTY_CONTAINERS,
            f"{empty_container_count} empty container(s)",
            blocking=False,
            count=empty_container_count,
        ))

    report = ValidationReport(
        issues=issues,
        container_count=container_count,
        paragraph_count=paragraph_count,
        assigned_paragraph_count=paragraph_count - unassigned_count,
        unassigned_paragraph_count=unassigned_count,
        total_content_length=total_length,
    )
    report.is_ready = bool(transfer_capable) and not report.has_errors

    logger.debug(
        f"Validation: {len(report.errors)} errors, {len(report.warnings)} warnings, "
        f"ready={report.is_ready}"
    )
    return report
