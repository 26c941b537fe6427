"""
folio Validation

Readiness report (blocking errors vs. informational warnings) for a record set.
"""

from folio.validation.engine import (
    ValidationReport,
    validate,
    MIN_CONTENT_LENGTH,
    RECOMMENDED_CONTENT_LENGTH,
    RECOMMENDED_CONTAINERS,
    RECOMMENDED_PARAGRAPHS,
)

__all__ = [
    "ValidationReport",
    "validate",
    "MIN_CONTENT_LENGTH",
    "RECOMMENDED_CONTENT_LENGTH",
    "RECOMMENDED_CONTAINERS",
    "RECOMMENDED_PARAGRAPHS",
]
