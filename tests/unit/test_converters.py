"""
Unit tests for the block/record type adapter.

The adapter must never raise: malformed input is salvaged field by field.
"""

import logging
import math
from datetime import datetime, timezone
from types import SimpleNamespace

from folio.core.records import Paragraph, Container
from folio.adapters.schemas import ParagraphBlock, ContainerBlock
from folio.adapters.converters import (
    FALLBACK_CONTAINER_NAME,
    block_to_paragraph,
    block_to_container,
    paragraph_to_block,
    container_to_block,
    coerce_paragraph,
    coerce_container,
    normalize_paragraphs,
    normalize_containers,
)


class TestBlockToParagraph:
    """Test store block -> Paragraph."""

    def test_block_instance(self):
        block = ParagraphBlock(id="p1", content="Hello", container_id="c1", order=2)
        p = block_to_paragraph(block)

        assert isinstance(p, Paragraph)
        assert p.id == "p1"
        assert p.content == "Hello"
        assert p.container_id == "c1"
        assert p.order == 2

    def test_camel_case_mapping(self):
        p = block_to_paragraph({
            "id": "p1",
            "content": "Hi",
            "containerId": "c1",
            "order": 1,
            "createdAt": "2024-01-01T00:00:00+00:00",
            "originalId": "p0",
        })
        assert p.container_id == "c1"
        assert p.original_id == "p0"
        assert p.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_blank_container_id_is_unassigned(self):
        p = block_to_paragraph({"id": "p1", "containerId": "   "})
        assert p.container_id is None

    def test_none_block_gives_fallback(self, caplog):
        with caplog.at_level(logging.WARNING):
            p = block_to_paragraph(None)

        assert p.id.startswith("fallback-")
        assert p.content == ""
        assert p.container_id is None
        assert p.order == 0
        assert "None" in caplog.text

    def test_invalid_fields_are_salvaged(self, caplog):
        with caplog.at_level(logging.WARNING):
            p = block_to_paragraph({
                "id": "p1",
                "content": None,
                "containerId": "c1",
                "order": "first",
            })

        assert p.id == "p1"
        assert p.content == ""
        assert p.container_id == "c1"
        assert p.order == 0
        assert "order" in caplog.text

    def test_missing_id_gets_fallback(self):
        p = block_to_paragraph({"content": "orphan text"})
        assert p.id.startswith("fallback-")
        assert p.content == "orphan text"

    def test_non_finite_order(self):
        p = block_to_paragraph({"id": "p1", "order": math.nan})
        assert p.order == 0

    def test_invalid_timestamp_uses_now(self):
        p = block_to_paragraph({"id": "p1", "order": "x", "createdAt": "not a date"})
        assert p.created_at.tzinfo is not None

    def test_attribute_object(self):
        raw = SimpleNamespace(id="p1", content="text", containerId="c9", order=4)
        p = block_to_paragraph(raw)
        assert p.container_id == "c9"
        assert p.order == 4


class TestBlockToContainer:
    """Test store block -> Container."""

    def test_block_instance_drops_timestamps(self):
        c = block_to_container(ContainerBlock(id="c1", name="Intro", order=1))
        assert c == Container(id="c1", name="Intro", order=1)

    def test_blank_name_is_untitled(self, caplog):
        with caplog.at_level(logging.WARNING):
            c = block_to_container({"id": "c1", "name": "  "})
        assert c.name == FALLBACK_CONTAINER_NAME
        assert "Untitled" in caplog.text

    def test_none_block(self):
        c = block_to_container(None)
        assert c.id.startswith("fallback-container-")
        assert c.name == FALLBACK_CONTAINER_NAME

    def test_empty_id_gets_fallback(self):
        c = block_to_container({"id": "", "name": "Body", "order": 2})
        assert c.id.startswith("fallback-container-")
        assert c.name == "Body"
        assert c.order == 2

    def test_bad_name_type(self):
        c = block_to_container({"id": "c1", "name": 42})
        assert c.name == FALLBACK_CONTAINER_NAME


class TestRecordToBlock:
    """Test local record -> store block."""

    def test_paragraph_to_block(self):
        p = Paragraph(id="p1", content="x", container_id="c1", order=3, original_id="p0")
        block = paragraph_to_block(p)

        assert isinstance(block, ParagraphBlock)
        assert block.id == "p1"
        assert block.container_id == "c1"
        assert block.original_id == "p0"
        assert block.created_at == p.created_at

    def test_container_to_block_timestamps(self):
        created = datetime(2024, 5, 1, tzinfo=timezone.utc)
        block = container_to_block(Container(id="c1", name="Intro"), created_at=created)
        assert block.created_at == created
        assert block.updated_at == created

    def test_container_to_block_defaults_to_now(self):
        block = container_to_block(Container(id="c1", name="Intro"))
        assert block.created_at.tzinfo is not None

    def test_back_and_forth_preserves_fields(self):
        p = Paragraph(id="p1", content="x", container_id="c1", order=3)
        assert block_to_paragraph(paragraph_to_block(p)) == p


class TestCoerce:
    """Test coerce_paragraph / coerce_container."""

    def test_well_formed_paragraph_is_returned_as_is(self):
        p = Paragraph(id="p1", content="x")
        assert coerce_paragraph(p) is p

    def test_malformed_paragraph_is_salvaged(self):
        p = Paragraph(id="p1", content=None, order="x")
        fixed = coerce_paragraph(p)
        assert fixed is not p
        assert fixed.content == ""
        assert fixed.order == 0

    def test_well_formed_container_is_returned_as_is(self):
        c = Container(id="c1", name="Intro")
        assert coerce_container(c) is c

    def test_blank_name_container_is_salvaged(self):
        fixed = coerce_container(Container(id="c1", name=""))
        assert fixed.name == FALLBACK_CONTAINER_NAME

    def test_bool_order_is_rejected(self):
        fixed = coerce_container(Container(id="c1", name="A", order=True))
        assert fixed.order == 0


class TestNormalize:
    """Test sequence ingestion."""

    def test_none_sequence(self, caplog):
        with caplog.at_level(logging.ERROR):
            assert normalize_paragraphs(None) == []
        assert "got None" in caplog.text

    def test_non_sequences(self):
        assert normalize_paragraphs("abc") == []
        assert normalize_containers({"id": "c1"}) == []
        assert normalize_containers(42) == []

    def test_none_entries_are_dropped(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = normalize_paragraphs([None, {"id": "p1"}, None])
        assert [p.id for p in result] == ["p1"]
        assert "index 0" in caplog.text

    def test_mixed_shapes(self):
        result = normalize_containers([
            Container(id="c1", name="A"),
            ContainerBlock(id="c2", name="B"),
            {"id": "c3", "name": "C"},
        ])
        assert [c.id for c in result] == ["c1", "c2", "c3"]
        assert all(isinstance(c, Container) for c in result)

    def test_generator_input(self):
        result = normalize_paragraphs(Paragraph(id=f"p{i}") for i in range(3))
        assert len(result) == 3


class TestSubstitutionLogging:
    """Every defaulted or rejected field is reported."""

    def test_omitted_paragraph_fields_are_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="folio.adapters.converters"):
            p = block_to_paragraph({"id": "p1"})

        assert (p.content, p.order, p.container_id) == ("", 0, None)
        for field_name in ("content", "order", "container_id", "created_at", "updated_at"):
            assert f"missing {field_name}" in caplog.text

    def test_complete_mapping_logs_nothing(self, caplog):
        with caplog.at_level(logging.WARNING, logger="folio.adapters.converters"):
            block_to_paragraph({
                "id": "p1",
                "content": "x",
                "containerId": None,
                "order": 1,
                "createdAt": "2024-01-01T00:00:00+00:00",
                "updatedAt": "2024-01-01T00:00:00+00:00",
            })
        assert caplog.records == []

    def test_numeric_string_order_is_not_coerced(self, caplog):
        with caplog.at_level(logging.WARNING, logger="folio.adapters.converters"):
            p = block_to_paragraph({"id": "p1", "content": "x", "order": "3"})

        assert p.order == 0
        assert "invalid or missing order '3'" in caplog.text

    def test_bool_order_is_not_coerced(self):
        assert block_to_paragraph({"id": "p1", "order": True}).order == 0

    def test_omitted_container_order_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="folio.adapters.converters"):
            c = block_to_container({"id": "c1", "name": "Intro"})
        assert c.order == 0
        assert "missing order" in caplog.text

    def test_numeric_string_container_order(self):
        assert block_to_container({"id": "c1", "name": "Intro", "order": "2"}).order == 0

    def test_salvage_logs_missing_content(self, caplog):
        with caplog.at_level(logging.WARNING, logger="folio.adapters.converters"):
            block_to_paragraph(SimpleNamespace(id="p1", order=1))
        assert "missing content" in caplog.text


class TestBlankIds:
    """Whitespace-only ids get a fallback on every path."""

    def test_blank_paragraph_id(self):
        p = block_to_paragraph({"id": "   ", "content": "x"})
        assert p.id.startswith("fallback-")
        assert p.content == "x"

    def test_blank_container_id(self):
        c = block_to_container({"id": " \t", "name": "Intro"})
        assert c.id.startswith("fallback-container-")
        assert c.name == "Intro"

    def test_block_and_record_paths_agree(self):
        from_mapping = block_to_paragraph({"id": "  "})
        from_record = coerce_paragraph(Paragraph(id="  "))
        assert from_mapping.id.strip()
        assert from_record.id.strip()
