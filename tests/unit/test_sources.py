"""
Unit tests for RecordSource implementations.
"""

from unittest.mock import MagicMock, PropertyMock

from folio.core.records import Paragraph, Container
from folio.core.store import EditorStore
from folio.adapters.sources import RecordSource, SnapshotSource, StoreSource


class TestSnapshotSource:
    """Test SnapshotSource."""

    def test_is_record_source(self):
        assert isinstance(SnapshotSource(), RecordSource)

    def test_empty_by_default(self):
        source = SnapshotSource()
        assert source.get_containers() == []
        assert source.get_paragraphs() == []

    def test_normalizes_input(self):
        source = SnapshotSource(
            [{"id": "c1", "name": "Intro"}, None],
            [{"id": "p1", "containerId": "c1"}],
        )
        assert source.get_containers() == [Container(id="c1", name="Intro")]
        assert source.get_paragraphs()[0].container_id == "c1"

    def test_reads_are_copies(self, containers, paragraphs):
        source = SnapshotSource(containers, paragraphs)
        source.get_containers().clear()
        assert len(source.get_containers()) == 2

    def test_update_replaces_snapshot(self, containers, paragraphs):
        source = SnapshotSource(containers, paragraphs)
        source.update([], [])
        assert source.get_containers() == []
        assert source.get_paragraphs() == []

    def test_malformed_snapshot(self):
        source = SnapshotSource(None, "not a list")
        assert source.get_containers() == []
        assert source.get_paragraphs() == []


class TestStoreSource:
    """Test StoreSource."""

    def test_is_record_source(self):
        assert isinstance(StoreSource(EditorStore()), RecordSource)

    def test_reads_store(self, store):
        source = StoreSource(store)
        names = [c.name for c in source.get_containers()]
        assert names == ["Intro", "Body"]
        assert len(source.get_paragraphs()) == 3
        assert all(isinstance(p, Paragraph) for p in source.get_paragraphs())

    def test_reflects_later_mutations(self, store):
        source = StoreSource(store)
        store.add_paragraph("Late addition")
        assert len(source.get_paragraphs()) == 4

    def test_records_do_not_write_back(self, store):
        source = StoreSource(store)
        record = source.get_paragraphs()[0]
        record.content = "changed locally"
        assert store.get_paragraph(record.id).content != "changed locally"

    def test_store_failure_yields_empty(self):
        broken = MagicMock()
        type(broken).containers = PropertyMock(side_effect=RuntimeError("store gone"))
        type(broken).paragraphs = PropertyMock(side_effect=RuntimeError("store gone"))

        source = StoreSource(broken)
        assert source.get_containers() == []
        assert source.get_paragraphs() == []

    def test_store_property(self, store):
        assert StoreSource(store).store is store
