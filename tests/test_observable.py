"""Tests for ObservableList change notifications."""

from __future__ import annotations

from unittest.mock import MagicMock

from account_form.observable import ChangeEvent, ChangeType, ObservableList


class TestObservableList:
    def setup_method(self):
        self.items = ObservableList(["a", "b"])
        self.events: list[ChangeEvent] = []
        self.items.subscribe(self.events.append)

    def test_behaves_like_a_list(self):
        assert len(self.items) == 2
        assert self.items[0] == "a"
        assert self.items[-1] == "b"
        assert list(self.items) == ["a", "b"]
        assert self.items == ["a", "b"]
        assert "b" in self.items

    def test_append_publishes_added(self):
        self.items.append("c")
        assert self.events == [ChangeEvent(ChangeType.ADDED, 2)]

    def test_insert_negative_index_position(self):
        self.items.insert(-1, "x")
        assert self.items.to_list() == ["a", "x", "b"]
        assert self.events == [ChangeEvent(ChangeType.ADDED, 1)]

    def test_delete_publishes_removed(self):
        del self.items[0]
        assert self.items.to_list() == ["b"]
        assert self.events == [ChangeEvent(ChangeType.REMOVED, 0)]

    def test_pop_negative_index(self):
        assert self.items.pop() == "b"
        assert self.events == [ChangeEvent(ChangeType.REMOVED, 1)]

    def test_setitem_publishes_updated(self):
        self.items[1] = "z"
        assert self.events == [ChangeEvent(ChangeType.UPDATED, 1)]

    def test_notify_publishes_updated(self):
        self.items.notify(0)
        assert self.events == [ChangeEvent(ChangeType.UPDATED, 0)]

    def test_slice_delete_and_clear_publish_reset(self):
        del self.items[:1]
        self.items.clear()
        assert [e.type for e in self.events] == [ChangeType.RESET, ChangeType.RESET]
        assert len(self.items) == 0

    def test_filtered_subscription(self):
        removed = MagicMock()
        self.items.subscribe(removed, change_types=[ChangeType.REMOVED])
        self.items.append("c")
        removed.assert_not_called()
        self.items.remove("a")
        removed.assert_called_once_with(ChangeEvent(ChangeType.REMOVED, 0))

    def test_unsubscribe(self):
        handler = MagicMock()
        sub_id = self.items.subscribe(handler)
        assert self.items.unsubscribe(sub_id) is True
        assert self.items.unsubscribe(sub_id) is False
        self.items.append("c")
        handler.assert_not_called()

    def test_failing_handler_does_not_block_others(self, caplog):
        def broken(event):
            raise RuntimeError("boom")

        items = ObservableList()
        seen: list[ChangeEvent] = []
        items.subscribe(broken)
        items.subscribe(seen.append)

        items.append(1)

        assert items.to_list() == [1]
        assert seen == [ChangeEvent(ChangeType.ADDED, 0)]
        assert "failed handling added" in caplog.text
