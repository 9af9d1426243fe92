"""Unit tests for the in-memory record store."""

import pytest

from transport_billing.stores.record_store import (
    InMemoryRecordStore,
    RecordStore,
    StoreError,
)


@pytest.fixture
def store():
    return InMemoryRecordStore("areas", [["Guindy", "Area 1"], ["Padi", "Area 2"]])


class TestInMemoryRecordStore:
    """Test InMemoryRecordStore operations."""

    def test_insert_appends(self, store):
        message = store.insert(["Porur", "Area 2"])

        assert message == "Row added to 'areas'"
        assert store.list()[-1] == ["Porur", "Area 2"]

    def test_update_at(self, store):
        message = store.update_at(1, ["Padi", "Area 3"])

        assert message == "Row 1 of 'areas' updated"
        assert store.list()[1] == ["Padi", "Area 3"]

    def test_delete_at_shifts_rows(self, store):
        message = store.delete_at(0)

        assert message == "Row 0 of 'areas' deleted"
        assert store.list() == [["Padi", "Area 2"]]

    @pytest.mark.parametrize("index", [-1, 2, 10])
    def test_out_of_range(self, store, index):
        """Test out-of-range positions fail and leave the table as it was."""
        with pytest.raises(StoreError, match="out of range"):
            store.update_at(index, ["X", "Y"])
        with pytest.raises(StoreError, match="out of range"):
            store.delete_at(index)
        assert len(store.list()) == 2

    def test_listing_is_a_snapshot(self, store):
        """Test a listing does not change when the store changes."""
        listing = store.list()
        store.insert(["Porur", "Area 2"])
        listing[0][0] = "changed"

        assert len(listing) == 2
        assert store.list()[0][0] == "Guindy"

    def test_replace_all(self, store):
        store.replace_all([["Tambaram", "Area 3"]])
        assert store.list() == [["Tambaram", "Area 3"]]

    def test_default_replace_all(self, store):
        """Test the generic replace_all built on delete and insert."""
        RecordStore.replace_all(store, [["Avadi", "Area 3"]])
        assert store.list() == [["Avadi", "Area 3"]]
