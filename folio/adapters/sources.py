"""
adapters/sources.py - Record sources

A RecordSource hands out the current containers and paragraphs as local
records. Two implementations:

- SnapshotSource: caller-supplied lists, normalized once at ingestion
- StoreSource: reads the shared EditorStore and converts blocks on every read

The source is chosen once, at construction of whatever consumes it.
"""

from __future__ import annotations
from typing import Any, List, Protocol, TYPE_CHECKING, runtime_checkable
import logging

from folio.core.records import Paragraph, Container
from folio.adapters.converters import normalize_containers, normalize_paragraphs

if TYPE_CHECKING:
    from folio.core.store import EditorStore

logger = logging.getLogger(__name__)


@runtime_checkable
class RecordSource(Protocol):
    """Anything that can provide the current record set."""

    def get_containers(self) -> List[Container]:
        ...

    def get_paragraphs(self) -> List[Paragraph]:
        ...


class SnapshotSource:
    """
    Record source over caller-supplied snapshots.

    Input is normalized once here; reads return copies of the normalized lists.
    """

    def __init__(self, containers: Any = (), paragraphs: Any = ()):
        self._containers: List[Container] = []
        self._paragraphs: List[Paragraph] = []
        self.update(containers, paragraphs)

    def update(self, containers: Any, paragraphs: Any) -> None:
        """Replace the snapshot with a new one."""
        self._containers = normalize_containers(containers)
        self._paragraphs = normalize_paragraphs(paragraphs)
        logger.debug(
            f"Snapshot updated: {len(self._containers)} containers, "
            f"{len(self._paragraphs)} paragraphs"
        )

    def get_containers(self) -> List[Container]:
        return list(self._containers)

    def get_paragraphs(self) -> List[Paragraph]:
        return list(self._paragraphs)


class StoreSource:
    """
    Record source over the shared EditorStore.

    Read-only: blocks are converted to fresh local records on every call, so
    callers can never write back into the store through them.
    """

    def __init__(self, store: "EditorStore"):
        self._store = store

    @property
    def store(self) -> "EditorStore":
        return self._store

    def get_containers(self) -> List[Container]:
        try:
            blocks = self._store.containers
        except Exception as e:
            logger.error(f"Store access failed while reading containers: {e}")
            return []
        return normalize_containers(blocks)

    def get_paragraphs(self) -> List[Paragraph]:
        try:
            blocks = self._store.paragraphs
        except Exception as e:
            logger.error(f"Store access failed while reading paragraphs: {e}")
            return []
        return normalize_paragraphs(blocks)
