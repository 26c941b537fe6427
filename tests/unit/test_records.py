"""
Unit tests for the Paragraph and Container records.
"""

from datetime import datetime, timezone

from folio.core.records import Paragraph, Container, utc_now, new_record_id


class TestParagraph:
    """Test Paragraph record."""

    def test_defaults(self):
        p = Paragraph(id="p1")
        assert p.content == ""
        assert p.container_id is None
        assert p.order == 0
        assert p.original_id is None
        assert p.created_at.tzinfo is not None

    def test_is_assigned(self):
        assert Paragraph(id="p1", container_id="c1").is_assigned
        assert not Paragraph(id="p1").is_assigned

    def test_has_content_ignores_whitespace(self):
        assert Paragraph(id="p1", content="  text ").has_content
        assert not Paragraph(id="p1", content=" \n\t ").has_content

    def test_update_content_refreshes_timestamp(self):
        p = Paragraph(id="p1", updated_at=datetime(2020, 1, 1, tzinfo=timezone.utc))
        p.update_content("new")
        assert p.content == "new"
        assert p.updated_at.year > 2020

    def test_assign_to(self):
        p = Paragraph(id="p1")
        p.assign_to("c1", 3)
        assert p.container_id == "c1"
        assert p.order == 3

    def test_copy_into_keeps_back_reference(self):
        source = Paragraph(id="p1", content="Hello", container_id="c1")
        copy = source.copy_into("c2", 5)

        assert copy.id != source.id
        assert copy.original_id == "p1"
        assert copy.container_id == "c2"
        assert copy.order == 5
        assert copy.content == "Hello"

    def test_create_generates_unique_ids(self):
        a = Paragraph.create("a")
        b = Paragraph.create("b")
        assert a.id and b.id and a.id != b.id

    def test_dict_round_trip(self):
        p = Paragraph(id="p1", content="x", container_id="c1", order=2, original_id="p0")
        restored = Paragraph.from_dict(p.to_dict())
        assert restored == p

    def test_from_dict_defaults(self):
        p = Paragraph.from_dict({"id": "p1"})
        assert p.content == ""
        assert p.container_id is None
        assert p.updated_at == p.created_at


class TestContainer:
    """Test Container record."""

    def test_create(self):
        c = Container.create("Intro", order=2)
        assert c.name == "Intro"
        assert c.order == 2
        assert c.id

    def test_to_dict(self):
        assert Container(id="c1", name="Intro", order=1).to_dict() == {
            "id": "c1",
            "name": "Intro",
            "order": 1,
        }

    def test_from_dict(self):
        c = Container.from_dict({"id": "c1", "name": "Body"})
        assert c.order == 0


class TestHelpers:
    """Test module helpers."""

    def test_utc_now_is_aware(self):
        assert utc_now().tzinfo == timezone.utc

    def test_new_record_id(self):
        assert len(new_record_id()) == 32
        assert new_record_id() != new_record_id()
