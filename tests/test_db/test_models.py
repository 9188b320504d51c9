"""Tests for ORM model helpers."""

from mdreader.db.models import HistoryRecord, ReadingListRecord, generate_uuid


class TestHistoryRecord:
    """Tests for HistoryRecord."""

    def test_completed_indices_round_trip(self):
        """Test the JSON-backed completed section indices."""
        record = HistoryRecord(path="a")
        record.set_completed_section_indices([3, 1, 2])

        assert record.completed_section_indices == "[1, 2, 3]"
        assert record.get_completed_section_indices() == [1, 2, 3]

    def test_empty_indices_stored_as_null(self):
        """Test that no completions are stored as NULL."""
        record = HistoryRecord(path="a")
        record.set_completed_section_indices([])

        assert record.completed_section_indices is None
        assert record.get_completed_section_indices() == []

    def test_apply_and_to_dict(self):
        """Test copying a dictionary onto a record and back."""
        record = HistoryRecord()
        record.apply(
            {
                "path": "docs/a",
                "title": "A",
                "read_count": 2,
                "completed_section_indices": [4],
                "unknown": "ignored",
            }
        )

        data = record.to_dict()
        assert data["path"] == "docs/a"
        assert data["read_count"] == 2
        assert data["completed_section_indices"] == [4]
        assert "unknown" not in data

    def test_column_names(self):
        """Test the column list used for dictionary conversion."""
        assert set(HistoryRecord.column_names()) == {
            "id",
            "path",
            "title",
            "last_read_at",
            "read_count",
            "time_spent",
            "words_read",
            "completed_section_indices",
        }


class TestReadingListRecord:
    """Tests for ReadingListRecord."""

    def test_to_dict(self):
        """Test converting a reading list record."""
        record = ReadingListRecord(id="x", path="p", title="T", added_at=1, completed=True)

        data = record.to_dict()
        assert data["id"] == "x"
        assert data["completed"] is True
        assert data["completed_at"] is None

    def test_generate_uuid(self):
        """Test that generated ids are unique uuid strings."""
        first, second = generate_uuid(), generate_uuid()

        assert len(first) == 36
        assert first != second
