"""
queries/containers.py - Container and paragraph queries

Every function accepts possibly-malformed input and degrades to an empty or
zero result; problems are logged by the ingestion pass, never raised.
Sorting is by numeric order only and stable, so ties keep input order.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from folio.core.records import Paragraph, Container
from folio.adapters.converters import normalize_containers, normalize_paragraphs
from folio.adapters.sources import RecordSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContainerStats:
    """Paragraph counts for one container."""
    count: int = 0
    has_content_count: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"count": self.count, "has_content_count": self.has_content_count}


# ==================== Pure queries ====================

def unassigned_paragraphs(paragraphs: Any) -> List[Paragraph]:
    """Paragraphs with no container."""
    return [p for p in normalize_paragraphs(paragraphs) if p.container_id is None]


def paragraphs_by_container(container_id: Any, paragraphs: Any) -> List[Paragraph]:
    """Paragraphs of one container, ascending by order."""
    if not isinstance(container_id, str) or not container_id:
        logger.error(f"paragraphs_by_container: invalid container id {container_id!r}")
        return []
    matching = [p for p in normalize_paragraphs(paragraphs) if p.container_id == container_id]
    return sorted(matching, key=lambda p: p.order)


def sorted_containers(containers: Any) -> List[Container]:
    """Containers ascending by order."""
    return sorted(normalize_containers(containers), key=lambda c: c.order)


def container_stats(containers: Any, paragraphs: Any) -> Dict[str, ContainerStats]:
    """
    Per-container paragraph count and count of paragraphs with content.

    Paragraphs pointing at unknown containers count toward no container.
    """
    paragraph_list = normalize_paragraphs(paragraphs)
    stats: Dict[str, ContainerStats] = {}

    for container in normalize_containers(containers):
        members = [p for p in paragraph_list if p.container_id == container.id]
        stats[container.id] = ContainerStats(
            count=len(members),
            has_content_count=sum(1 for p in members if p.has_content),
        )
        logger.debug(
            f"Container {container.id} ({container.name!r}): "
            f"{stats[container.id].count} paragraphs, "
            f"{stats[container.id].has_content_count} with content"
        )

    return stats


def total_assigned(paragraphs: Any) -> int:
    """Number of paragraphs assigned to a container."""
    return sum(1 for p in normalize_paragraphs(paragraphs) if p.is_assigned)


def total_with_content(paragraphs: Any) -> int:
    """Number of assigned paragraphs whose trimmed content is non-empty."""
    return sum(1 for p in normalize_paragraphs(paragraphs) if p.is_assigned and p.has_content)


def dangling_paragraphs(containers: Any, paragraphs: Any) -> List[Paragraph]:
    """Assigned paragraphs whose container does not exist."""
    known = {c.id for c in normalize_containers(containers)}
    return [
        p for p in normalize_paragraphs(paragraphs)
        if p.container_id is not None and p.container_id not in known
    ]


# ==================== Source-bound queries ====================

class RecordQueries:
    """
    The query functions bound to a RecordSource.

    Each method takes the same record lists as the module functions, but
    reads them from the source when they are omitted.

    Usage:
        queries = RecordQueries(StoreSource(store))
        queries.sorted_containers()                  # from the store
        queries.sorted_containers(other_containers)  # explicit
    """

    def __init__(self, source: RecordSource):
        self._source = source

    @property
    def source(self) -> RecordSource:
        return self._source

    def _containers(self, containers: Optional[Any]) -> Any:
        return self._source.get_containers() if containers is None else containers

    def _paragraphs(self, paragraphs: Optional[Any]) -> Any:
        return self._source.get_paragraphs() if paragraphs is None else paragraphs

    def unassigned_paragraphs(self, paragraphs: Optional[Any] = None) -> List[Paragraph]:
        return unassigned_paragraphs(self._paragraphs(paragraphs))

    def paragraphs_by_container(self, container_id: str, paragraphs: Optional[Any] = None) -> List[Paragraph]:
        return paragraphs_by_container(container_id, self._paragraphs(paragraphs))

    def sorted_containers(self, containers: Optional[Any] = None) -> List[Container]:
        return sorted_containers(self._containers(containers))

    def container_stats(
        self,
        containers: Optional[Any] = None,
        paragraphs: Optional[Any] = None,
    ) -> Dict[str, ContainerStats]:
        return container_stats(self._containers(containers), self._paragraphs(paragraphs))

    def total_assigned(self, paragraphs: Optional[Any] = None) -> int:
        return total_assigned(self._paragraphs(paragraphs))

    def total_with_content(self, paragraphs: Optional[Any] = None) -> int:
        return total_with_content(self._paragraphs(paragraphs))

    def dangling_paragraphs(
        self,
        containers: Optional[Any] = None,
        paragraphs: Optional[Any] = None,
    ) -> List[Paragraph]:
        return dangling_paragraphs(self._containers(containers), self._paragraphs(paragraphs))
