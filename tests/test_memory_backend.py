from __future__ import annotations

import unittest

from learn.backends import StoreError
from learn.memory_backend import MemoryListStore


class MemoryListStoreTests(unittest.TestCase):
    def test_missing_key_behaves_like_empty_list(self):
        store = MemoryListStore()
        self.assertEqual(store.length("nope"), 0)
        self.assertIsNone(store.get_at("nope", 0))

    def test_append_returns_new_length(self):
        store = MemoryListStore()
        self.assertEqual(store.append("k", "a"), 1)
        self.assertEqual(store.append("k", "b"), 2)
        self.assertEqual(store.get_at("k", 1), "b")
        self.assertEqual(store.get_at("k", -1), "b")
        self.assertIsNone(store.get_at("k", 2))

    def test_transaction_applies_queued_writes_in_order(self):
        store = MemoryListStore({"k": ["a", "b", "c"]})

        def _block(tx):
            tx.multi()
            tx.set_at("k", 1, "M")
            tx.insert_before("k", "M", "x")
            tx.remove_by_value("k", "M")
            return "done"

        self.assertEqual(store.run_transaction(["k"], _block), "done")
        self.assertEqual(store.snapshot("k"), ["a", "x", "c"])

    def test_remove_by_value_drops_first_occurrence_only(self):
        store = MemoryListStore({"k": ["a", "b", "a"]})

        def _block(tx):
            tx.multi()
            tx.remove_by_value("k", "a")

        store.run_transaction(["k"], _block)
        self.assertEqual(store.snapshot("k"), ["b", "a"])

    def test_insert_before_missing_pivot_is_a_no_op(self):
        store = MemoryListStore({"k": ["a"]})

        def _block(tx):
            tx.multi()
            tx.insert_before("k", "zzz", "x")

        store.run_transaction(["k"], _block)
        self.assertEqual(store.snapshot("k"), ["a"])

    def test_failed_command_leaves_list_untouched(self):
        store = MemoryListStore({"k": ["a", "b"]})

        def _block(tx):
            tx.multi()
            tx.append("k", "c")
            tx.set_at("k", 10, "boom")

        with self.assertRaises(StoreError):
            store.run_transaction(["k"], _block)
        self.assertEqual(store.snapshot("k"), ["a", "b"])

    def test_write_before_multi_is_rejected(self):
        store = MemoryListStore({"k": ["a"]})

        def _block(tx):
            tx.append("k", "b")

        with self.assertRaises(RuntimeError):
            store.run_transaction(["k"], _block)

    def test_read_after_multi_is_rejected(self):
        store = MemoryListStore({"k": ["a"]})

        def _block(tx):
            tx.multi()
            return tx.length("k")

        with self.assertRaises(RuntimeError):
            store.run_transaction(["k"], _block)

    def test_watched_key_change_reruns_block(self):
        store = MemoryListStore({"k": ["a"]})
        calls: list[int] = []

        def _block(tx):
            calls.append(tx.length("k"))
            if len(calls) == 1:
                store.append("k", "intruder")
            tx.multi()
            tx.append("k", "mine")

        store.run_transaction(["k"], _block)
        self.assertEqual(calls, [1, 2])
        self.assertEqual(store.conflicts, 1)
        self.assertEqual(store.snapshot("k"), ["a", "intruder", "mine"])

    def test_unwatched_key_change_does_not_rerun(self):
        store = MemoryListStore({"k": ["a"]})
        calls: list[int] = []

        def _block(tx):
            calls.append(1)
            store.append("other", "x")
            tx.multi()
            tx.append("k", "b")

        store.run_transaction(["k"], _block)
        self.assertEqual(len(calls), 1)
        self.assertEqual(store.conflicts, 0)

    def test_emptied_list_disappears(self):
        store = MemoryListStore({"k": ["a"]})

        def _block(tx):
            tx.multi()
            tx.remove_by_value("k", "a")

        store.run_transaction(["k"], _block)
        self.assertEqual(store.length("k"), 0)
        self.assertEqual(store.snapshot("k"), [])


if __name__ == "__main__":
    unittest.main()
