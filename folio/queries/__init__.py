"""
folio Query Layer

Read-only lookups over containers and paragraphs, either on explicit
record lists or on an injected RecordSource.
"""

from folio.queries.containers import (
    ContainerStats,
    RecordQueries,
    unassigned_paragraphs,
    paragraphs_by_container,
    sorted_containers,
    container_stats,
    total_assigned,
    total_with_content,
    dangling_paragraphs,
)

__all__ = [
    "ContainerStats",
    "RecordQueries",
    "unassigned_paragraphs",
    "paragraphs_by_container",
    "sorted_containers",
    "container_stats",
    "total_assigned",
    "total_with_content",
    "dangling_paragraphs",
]
