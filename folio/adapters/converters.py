"""
adapters/converters.py - Type adapter between store blocks and local records

Every function here accepts possibly-malformed input and never raises.
Missing or invalid fields are replaced with a documented default and the
substitution is logged at WARNING:

    id            -> "fallback-<hex>" / "fallback-container-<hex>"
    content       -> ""
    container_id  -> None (also for blank strings)
    order         -> 0
    name          -> "Untitled"
    timestamps    -> now (UTC)

normalize_paragraphs() / normalize_containers() are the single ingestion
pass: everything downstream (queries, generator, validation) can assume
well-formed records.
"""

from __future__ import annotations
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, List, Optional
import logging
import math
import uuid

from pydantic import ValidationError

from folio.core.records import Paragraph, Container, utc_now
from folio.adapters.schemas import ParagraphBlock, ContainerBlock

logger = logging.getLogger(__name__)

FALLBACK_CONTAINER_NAME = "Untitled"

_CAMEL = {
    "container_id": "containerId",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
    "original_id": "originalId",
}


class _Missing:
    def __repr__(self):
        return "<MISSING>"

    def __bool__(self):
        return False


_MISSING = _Missing()


def _fallback_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def _read(raw: Any, key: str) -> Any:
    """Read key (or its camelCase alias) from a mapping or an object."""
    camel = _CAMEL.get(key)
    if isinstance(raw, Mapping):
        if key in raw:
            return raw[key]
        if camel and camel in raw:
            return raw[camel]
        return _MISSING
    value = getattr(raw, key, _MISSING)
    if value is _MISSING and camel:
        value = getattr(raw, camel, _MISSING)
    return value


# ==================== Field salvage ====================

def _text(raw: Any, key: str, default: str, label: str) -> str:
    value = _read(raw, key)
    if isinstance(value, str):
        return value
    if value is _MISSING:
        logger.warning(f"{label}: missing {key}, using {default!r}")
    else:
        logger.warning(f"{label}: invalid {key} {value!r}, using {default!r}")
    return default


def _optional_id(raw: Any, key: str, label: str, warn_missing: bool = False) -> Optional[str]:
    value = _read(raw, key)
    if value is _MISSING:
        if warn_missing:
            logger.warning(f"{label}: missing {key}, using None")
        return None
    if value is None:
        return None
    if not isinstance(value, str):
        logger.warning(f"{label}: invalid {key} {value!r}, using None")
        return None
    if not value.strip():
        return None
    return value


def _number(raw: Any, key: str, label: str) -> float:
    value = _read(raw, key)
    if not _is_order(value):
        logger.warning(f"{label}: invalid or missing {key} {value!r}, using 0")
        return 0
    return value


def _timestamp(raw: Any, key: str, label: str) -> datetime:
    value = _read(raw, key)
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            pass
    if value is _MISSING or value is None:
        logger.warning(f"{label}: missing {key}, using now")
    else:
        logger.warning(f"{label}: invalid {key} {value!r}, using now")
    return utc_now()


def _salvage_paragraph(raw: Any) -> Paragraph:
    paragraph_id = _read(raw, "id")
    if not isinstance(paragraph_id, str) or not paragraph_id.strip():
        fallback = _fallback_id("fallback")
        logger.warning(f"Paragraph: invalid or missing id {paragraph_id!r}, using {fallback}")
        paragraph_id = fallback

    label = f"Paragraph {paragraph_id}"
    return Paragraph(
        id=paragraph_id,
        content=_text(raw, "content", "", label),
        container_id=_optional_id(raw, "container_id", label, warn_missing=True),
        order=_number(raw, "order", label),
        created_at=_timestamp(raw, "created_at", label),
        updated_at=_timestamp(raw, "updated_at", label),
        original_id=_optional_id(raw, "original_id", label),
    )


def _salvage_container(raw: Any) -> Container:
    container_id = _read(raw, "id")
    if not isinstance(container_id, str) or not container_id.strip():
        fallback = _fallback_id("fallback-container")
        logger.warning(f"Container: invalid or missing id {container_id!r}, using {fallback}")
        container_id = fallback

    label = f"Container {container_id}"
    name = _text(raw, "name", FALLBACK_CONTAINER_NAME, label)
    if not name.strip():
        logger.warning(f"{label}: empty name, using {FALLBACK_CONTAINER_NAME!r}")
        name = FALLBACK_CONTAINER_NAME
    return Container(id=container_id, name=name, order=_number(raw, "order", label))


# ==================== Block -> record ====================

_PARAGRAPH_DEFAULTS = {
    "content": "''",
    "container_id": "None",
    "order": "0",
    "created_at": "now",
    "updated_at": "now",
}

# a missing name is reported by the blank-name check
_CONTAINER_DEFAULTS = {
    "order": "0",
}


def _warn_omitted(block: Any, defaults: dict, label: str) -> None:
    """Log every defaulted field the schema filled in for a mapping."""
    for key, default in defaults.items():
        if key not in block.model_fields_set:
            logger.warning(f"{label}: missing {key}, using {default}")


def block_to_paragraph(block: Any) -> Paragraph:
    """
    Convert a store paragraph block to a local Paragraph.

    A None block yields a complete fallback paragraph (unassigned, empty).
    """
    if block is None:
        logger.warning("Paragraph block is None, using fallback paragraph")
        return Paragraph(id=_fallback_id("fallback"))

    if isinstance(block, Mapping):
        try:
            block = ParagraphBlock.model_validate(block)
        except ValidationError as e:
            logger.warning(f"Paragraph block failed schema check ({e.error_count()} errors), salvaging fields")
            return _salvage_paragraph(block)
        _warn_omitted(block, _PARAGRAPH_DEFAULTS, f"Paragraph {block.id}")

    if not isinstance(block, ParagraphBlock):
        return _salvage_paragraph(block)

    return Paragraph(
        id=block.id,
        content=block.content,
        container_id=block.container_id,
        order=block.order,
        created_at=block.created_at,
        updated_at=block.updated_at,
        original_id=block.original_id,
    )


def block_to_container(block: Any) -> Container:
    """
    Convert a store container block to a local Container.

    The store's timestamps are dropped; the local record has none.
    """
    if block is None:
        logger.warning("Container block is None, using fallback container")
        return Container(id=_fallback_id("fallback-container"), name=FALLBACK_CONTAINER_NAME)

    if isinstance(block, Mapping):
        try:
            block = ContainerBlock.model_validate(block)
        except ValidationError as e:
            logger.warning(f"Container block failed schema check ({e.error_count()} errors), salvaging fields")
            return _salvage_container(block)
        _warn_omitted(block, _CONTAINER_DEFAULTS, f"Container {block.id}")

    if not isinstance(block, ContainerBlock):
        return _salvage_container(block)

    name = block.name
    if not name.strip():
        logger.warning(f"Container {block.id}: empty or missing name, using {FALLBACK_CONTAINER_NAME!r}")
        name = FALLBACK_CONTAINER_NAME
    return Container(id=block.id, name=name, order=block.order)


# ==================== Record -> block ====================

def paragraph_to_block(paragraph: Any) -> ParagraphBlock:
    """Convert a local Paragraph (or anything coercible) to a store block."""
    paragraph = coerce_paragraph(paragraph)
    return ParagraphBlock.model_construct(
        id=paragraph.id,
        content=paragraph.content,
        container_id=paragraph.container_id,
        order=paragraph.order,
        created_at=paragraph.created_at,
        updated_at=paragraph.updated_at,
        original_id=paragraph.original_id,
    )


def container_to_block(container: Any, created_at: Optional[datetime] = None) -> ContainerBlock:
    """
    Convert a local Container to a store block.

    The local record has no timestamps; created_at defaults to now.
    """
    container = coerce_container(container)
    created = created_at or utc_now()
    return ContainerBlock.model_construct(
        id=container.id,
        name=container.name,
        order=container.order,
        created_at=created,
        updated_at=created,
    )


# ==================== Ingestion ====================

def _is_order(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _is_id(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _well_formed_paragraph(paragraph: Paragraph) -> bool:
    return (
        _is_id(paragraph.id)
        and isinstance(paragraph.content, str)
        and (paragraph.container_id is None or _is_id(paragraph.container_id))
        and _is_order(paragraph.order)
    )


def _well_formed_container(container: Container) -> bool:
    return (
        _is_id(container.id)
        and isinstance(container.name, str)
        and bool(container.name.strip())
        and _is_order(container.order)
    )


def coerce_paragraph(value: Any) -> Paragraph:
    """
    Accept a Paragraph, a ParagraphBlock or a mapping; return a Paragraph.

    Well-formed Paragraph instances are returned as-is.
    """
    if isinstance(value, Paragraph):
        return value if _well_formed_paragraph(value) else _salvage_paragraph(value)
    return block_to_paragraph(value)


def coerce_container(value: Any) -> Container:
    """
    Accept a Container, a ContainerBlock or a mapping; return a Container.

    Well-formed Container instances are returned as-is.
    """
    if isinstance(value, Container):
        return value if _well_formed_container(value) else _salvage_container(value)
    return block_to_container(value)


def _iter_records(values: Any, kind: str) -> Optional[list]:
    if values is None:
        logger.error(f"Expected a sequence of {kind}, got None")
        return None
    if isinstance(values, (str, bytes, Mapping)) or not isinstance(values, Iterable):
        logger.error(f"Expected a sequence of {kind}, got {type(values).__name__}")
        return None
    try:
        return list(values)
    except Exception as e:
        logger.error(f"Failed to read {kind}: {e}")
        return None


def normalize_paragraphs(values: Any) -> List[Paragraph]:
    """
    Ingest a paragraph sequence.

    Non-sequences yield []. None entries are dropped; every other entry is
    coerced to a Paragraph.
    """
    items = _iter_records(values, "paragraphs")
    if items is None:
        return []

    paragraphs = []
    for index, item in enumerate(items):
        if item is None:
            logger.warning(f"Dropping None paragraph at index {index}")
            continue
        paragraphs.append(coerce_paragraph(item))
    return paragraphs


def normalize_containers(values: Any) -> List[Container]:
    """
    Ingest a container sequence.

    Non-sequences yield []. None entries are dropped; every other entry is
    coerced to a Container.
    """
    items = _iter_records(values, "containers")
    if items is None:
        return []

    containers = []
    for index, item in enumerate(items):
        if item is None:
            logger.warning(f"Dropping None container at index {index}")
            continue
        containers.append(coerce_container(item))
    return containers
