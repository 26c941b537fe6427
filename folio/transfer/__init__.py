"""
transfer/ - Transfer orchestration

Single-flight state machine that hands the generated document to an injected
transfer function, with timed auto-reset and running metrics.
"""

from .failures import (
    describe_failure,
    rejection_reason,
    GENERIC_FAILURE_MESSAGE,
    EMPTY_FAILURE_MESSAGE,
    REJECTED_MESSAGE,
)

from .metrics import TransferMetrics

from .orchestrator import (
    TransferPayload,
    TransferStatus,
    TransferFunction,
    TransferOrchestrator,
    LEGAL_TRANSITIONS,
)


__all__ = [
    "describe_failure",
    "rejection_reason",
    "REJECTED_MESSAGE",
    "GENERIC_FAILURE_MESSAGE",
    "EMPTY_FAILURE_MESSAGE",
    "TransferMetrics",
    "TransferPayload",
    "TransferStatus",
    "TransferFunction",
    "TransferOrchestrator",
    "LEGAL_TRANSITIONS",
]
