"""
folio EditorStore

The shared, mutable editor store. Holds containers and paragraphs in the
store-side block shape and exposes the apply operations the editor uses to
build a document. Queries, validation and the transfer orchestrator only
read from it (through adapters.sources.StoreSource).

Apply operations never raise on unknown ids or arguments: they log a warning
and return None / False / [] so a stale UI action cannot crash the host.
"""

import logging
from typing import Iterable, List, Optional

from folio.core.enums import MoveDirection
from folio.core.records import new_record_id, utc_now
from folio.adapters.schemas import ParagraphBlock, ContainerBlock

logger = logging.getLogger(__name__)


class EditorStore:
    """
    In-memory holder of the editor's containers and paragraphs.

    Invariants kept by every mutation:
    - container order values are unique
    - paragraph order values are unique within a container
    - deleting a container orphans its paragraphs (container_id -> None)
    """

    def __init__(
        self,
        containers: Optional[Iterable[ContainerBlock]] = None,
        paragraphs: Optional[Iterable[ParagraphBlock]] = None,
    ):
        self._containers: List[ContainerBlock] = list(containers or [])
        self._paragraphs: List[ParagraphBlock] = list(paragraphs or [])

    # ==================== Read ====================

    @property
    def containers(self) -> List[ContainerBlock]:
        """Copy of the container list (blocks are shared)."""
        return list(self._containers)

    @property
    def paragraphs(self) -> List[ParagraphBlock]:
        """Copy of the paragraph list (blocks are shared)."""
        return list(self._paragraphs)

    def get_container(self, container_id: str) -> Optional[ContainerBlock]:
        for container in self._containers:
            if container.id == container_id:
                return container
        return None

    def get_paragraph(self, paragraph_id: str) -> Optional[ParagraphBlock]:
        for paragraph in self._paragraphs:
            if paragraph.id == paragraph_id:
                return paragraph
        return None

    def _next_container_order(self) -> int:
        if not self._containers:
            return 0
        return int(max(c.order for c in self._containers)) + 1

    def _next_paragraph_order(self, container_id: Optional[str]) -> int:
        orders = [p.order for p in self._paragraphs if p.container_id == container_id]
        if not orders:
            return 0
        return int(max(orders)) + 1

    # ==================== Containers ====================

    def add_container(self, name: str, order: Optional[float] = None) -> ContainerBlock:
        """Create a container; order defaults to after the last one."""
        now = utc_now()
        container = ContainerBlock(
            id=new_record_id(),
            name=name,
            order=self._next_container_order() if order is None else order,
            created_at=now,
            updated_at=now,
        )
        self._containers.append(container)
        logger.debug(f"Added container {container.id} ({name!r}) at order {container.order}")
        return container

    def create_containers_from_sections(self, section_names: Iterable[str]) -> List[ContainerBlock]:
        """
        Create one container per non-blank section name.

        Names are trimmed; blank or non-string entries are skipped. Orders
        continue after any existing containers, in the given sequence.
        """
        created = []
        for name in section_names:
            if not isinstance(name, str) or not name.strip():
                logger.warning(f"Skipping blank section name {name!r}")
                continue
            created.append(self.add_container(name.strip()))
        logger.info(f"Created {len(created)} containers from sections")
        return created

    def rename_container(self, container_id: str, name: str) -> Optional[ContainerBlock]:
        container = self.get_container(container_id)
        if container is None:
            logger.warning(f"rename_container: unknown container {container_id}")
            return None
        container.name = name
        container.updated_at = utc_now()
        return container

    def delete_container(self, container_id: str) -> bool:
        """
        Remove a container and orphan its paragraphs.

        Orphaned paragraphs are re-ordered after the existing unassigned
        paragraphs so order stays unique among unassigned ones.
        """
        container = self.get_container(container_id)
        if container is None:
            logger.warning(f"delete_container: unknown container {container_id}")
            return False

        orphans = sorted(
            (p for p in self._paragraphs if p.container_id == container_id),
            key=lambda p: p.order,
        )
        next_order = self._next_paragraph_order(None)
        now = utc_now()
        for offset, paragraph in enumerate(orphans):
            paragraph.container_id = None
            paragraph.order = next_order + offset
            paragraph.updated_at = now

        self._containers.remove(container)
        logger.info(f"Deleted container {container_id}, orphaned {len(orphans)} paragraphs")
        return True

    # ==================== Paragraphs ====================

    def add_paragraph(self, content: str = "", container_id: Optional[str] = None) -> Optional[ParagraphBlock]:
        """Create a paragraph appended at the end of its container (or the unassigned pool)."""
        if container_id is not None and self.get_container(container_id) is None:
            logger.warning(f"add_paragraph: unknown container {container_id}")
            return None

        now = utc_now()
        paragraph = ParagraphBlock(
            id=new_record_id(),
            content=content,
            container_id=container_id,
            order=self._next_paragraph_order(container_id),
            created_at=now,
            updated_at=now,
        )
        self._paragraphs.append(paragraph)
        return paragraph

    def update_paragraph_content(self, paragraph_id: str, content: str) -> Optional[ParagraphBlock]:
        paragraph = self.get_paragraph(paragraph_id)
        if paragraph is None:
            logger.warning(f"update_paragraph_content: unknown paragraph {paragraph_id}")
            return None
        paragraph.content = content
        paragraph.updated_at = utc_now()
        return paragraph

    def delete_paragraph(self, paragraph_id: str) -> bool:
        paragraph = self.get_paragraph(paragraph_id)
        if paragraph is None:
            logger.warning(f"delete_paragraph: unknown paragraph {paragraph_id}")
            return False
        self._paragraphs.remove(paragraph)
        return True

    def move_paragraph_to_container(
        self,
        paragraph_id: str,
        container_id: Optional[str],
    ) -> Optional[ParagraphBlock]:
        """Move (not copy) a paragraph to the end of another container; None unassigns."""
        paragraph = self.get_paragraph(paragraph_id)
        if paragraph is None:
            logger.warning(f"move_paragraph_to_container: unknown paragraph {paragraph_id}")
            return None
        if container_id is not None and self.get_container(container_id) is None:
            logger.warning(f"move_paragraph_to_container: unknown container {container_id}")
            return None
        if paragraph.container_id == container_id:
            return paragraph

        paragraph.order = self._next_paragraph_order(container_id)
        paragraph.container_id = container_id
        paragraph.updated_at = utc_now()
        return paragraph

    def copy_paragraphs_to_container(
        self,
        paragraph_ids: Iterable[str],
        container_id: str,
    ) -> List[ParagraphBlock]:
        """
        Duplicate the selected paragraphs into a container.

        Copies get fresh ids, original_id pointing at the source, and are
        appended in selection order. Nothing is copied when the selection is
        empty, the target is unknown, or any selected paragraph is blank.
        """
        ids = list(paragraph_ids)
        if not ids:
            logger.warning("copy_paragraphs_to_container: empty selection")
            return []
        if self.get_container(container_id) is None:
            logger.warning(f"copy_paragraphs_to_container: unknown container {container_id}")
            return []

        selected = [p for p in (self.get_paragraph(pid) for pid in ids) if p is not None]
        blank = [p.id for p in selected if not p.content.strip()]
        if blank:
            logger.warning(f"copy_paragraphs_to_container: refusing blank paragraphs {blank}")
            return []

        next_order = self._next_paragraph_order(container_id)
        now = utc_now()
        copies = []
        for offset, source in enumerate(selected):
            copy = ParagraphBlock(
                id=new_record_id(),
                content=source.content,
                container_id=container_id,
                order=next_order + offset,
                created_at=now,
                updated_at=now,
                original_id=source.id,
            )
            copies.append(copy)
        self._paragraphs.extend(copies)
        logger.info(f"Copied {len(copies)} paragraphs into container {container_id}")
        return copies

    def move_paragraph_within_container(self, paragraph_id: str, direction: MoveDirection) -> bool:
        """Swap order with the neighbouring paragraph in the same container."""
        try:
            direction = MoveDirection(direction)
        except (ValueError, TypeError):
            logger.warning(f"move_paragraph_within_container: unknown direction {direction!r}")
            return False

        paragraph = self.get_paragraph(paragraph_id)
        if paragraph is None:
            logger.warning(f"move_paragraph_within_container: unknown paragraph {paragraph_id}")
            return False

        siblings = sorted(
            (p for p in self._paragraphs if p.container_id == paragraph.container_id),
            key=lambda p: p.order,
        )
        index = siblings.index(paragraph)
        target = index - 1 if direction == MoveDirection.UP else index + 1
        if target < 0 or target >= len(siblings):
            return False

        neighbour = siblings[target]
        paragraph.order, neighbour.order = neighbour.order, paragraph.order
        now = utc_now()
        paragraph.updated_at = now
        neighbour.updated_at = now
        return True

    def reset(self) -> None:
        """Drop all containers and paragraphs."""
        self._containers.clear()
        self._paragraphs.clear()
