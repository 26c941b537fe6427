"""
folio Adapters

Store-side record shapes, the type adapter between them and the local
records, and the RecordSource implementations used by queries and the
transfer orchestrator.
"""

from folio.adapters.schemas import ParagraphBlock, ContainerBlock
from folio.adapters.converters import (
    block_to_paragraph,
    block_to_container,
    paragraph_to_block,
    container_to_block,
    coerce_paragraph,
    coerce_container,
    normalize_paragraphs,
    normalize_containers,
)
from folio.adapters.sources import RecordSource, SnapshotSource, StoreSource

__all__ = [
    "ParagraphBlock",
    "ContainerBlock",
    "block_to_paragraph",
    "block_to_container",
    "paragraph_to_block",
    "container_to_block",
    "coerce_paragraph",
    "coerce_container",
    "normalize_paragraphs",
    "normalize_containers",
    "RecordSource",
    "SnapshotSource",
    "StoreSource",
]
