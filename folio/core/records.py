"""
folio Record Model

Paragraph and Container records. Records are created only through the
explicit factories below and mutated in place during an authoring session.
Each record includes to_dict() and from_dict() for serialization.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import uuid


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_record_id() -> str:
    """Opaque unique identifier for a new record."""
    return uuid.uuid4().hex


def _parse_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


# ==================== Paragraph ====================

@dataclass
class Paragraph:
    """
    A text block, optionally assigned to one Container.

    order is unique only among paragraphs sharing the same container_id.
    original_id is set when the paragraph was produced by copying another.
    """
    id: str
    content: str = ""
    container_id: Optional[str] = None
    order: float = 0
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    original_id: Optional[str] = None

    @property
    def is_assigned(self) -> bool:
        return self.container_id is not None

    @property
    def has_content(self) -> bool:
        """True when the content is non-empty after trimming."""
        return bool(self.content.strip())

    def update_content(self, content: str) -> None:
        """Replace content and refresh updated_at."""
        self.content = content
        self.updated_at = utc_now()

    def assign_to(self, container_id: Optional[str], order: float) -> None:
        """Move this paragraph into a container (None unassigns it)."""
        self.container_id = container_id
        self.order = order
        self.updated_at = utc_now()

    def copy_into(self, container_id: str, order: float) -> "Paragraph":
        """Duplicate this paragraph into a container, keeping a back-reference."""
        return Paragraph(
            id=new_record_id(),
            content=self.content,
            container_id=container_id,
            order=order,
            original_id=self.id,
        )

    @classmethod
    def create(
        cls,
        content: str = "",
        container_id: Optional[str] = None,
        order: float = 0,
    ) -> "Paragraph":
        """Create a new paragraph with a fresh id."""
        return cls(
            id=new_record_id(),
            content=content,
            container_id=container_id,
            order=order,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "container_id": self.container_id,
            "order": self.order,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "original_id": self.original_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Paragraph":
        created_at = _parse_datetime(data.get("created_at")) or utc_now()
        updated_at = _parse_datetime(data.get("updated_at")) or created_at
        return cls(
            id=data["id"],
            content=data.get("content", ""),
            container_id=data.get("container_id"),
            order=data.get("order", 0),
            created_at=created_at,
            updated_at=updated_at,
            original_id=data.get("original_id"),
        )

    def __repr__(self) -> str:
        return f"Paragraph(id={self.id}, container_id={self.container_id}, order={self.order})"


# ==================== Container ====================

@dataclass
class Container:
    """
    A named, ordered section of a document.
    The name becomes a level-2 heading in the generated document.
    """
    id: str
    name: str
    order: float = 0

    @classmethod
    def create(cls, name: str, order: float = 0) -> "Container":
        """Create a new container with a fresh id."""
        return cls(id=new_record_id(), name=name, order=order)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Container":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            order=data.get("order", 0),
        )
