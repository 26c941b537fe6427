"""
folio Core Module

Contains the foundation layer:
- Record Model (Paragraph, Container)
- Shared editor store (EditorStore)
- Enumerations (TransferState, MoveDirection)
"""

from folio.core.enums import TransferState, MoveDirection
from folio.core.records import Paragraph, Container, utc_now

__all__ = [
    "TransferState",
    "MoveDirection",
    "Paragraph",
    "Container",
    "utc_now",
]
