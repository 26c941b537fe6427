"""
folio - Editor-to-Form Content Bridge

Sections ("containers") of ordered text blocks ("paragraphs"), readiness
validation, deterministic markdown generation and a single-flight transfer
orchestrator.
"""

from folio.core.records import Paragraph, Container
from folio.core.enums import TransferState
from folio.core.store import EditorStore
from folio.adapters.sources import RecordSource, SnapshotSource, StoreSource
from folio.content.generator import generate_content
from folio.validation.engine import validate, ValidationReport
from folio.transfer.orchestrator import TransferOrchestrator, TransferStatus, TransferPayload
from folio.bootstrap.config import BridgeConfig
from folio.bootstrap.entrypoints import create_bridge

__version__ = "1.0.0"

__all__ = [
    "Paragraph",
    "Container",
    "TransferState",
    "EditorStore",
    "RecordSource",
    "SnapshotSource",
    "StoreSource",
    "generate_content",
    "validate",
    "ValidationReport",
    "TransferOrchestrator",
    "TransferStatus",
    "TransferPayload",
    "BridgeConfig",
    "create_bridge",
]
