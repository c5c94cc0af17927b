from __future__ import annotations

import unittest

from relchart.errors import DataShapeError
from relchart.store import RecordStore


class TestRecordStoreContract(unittest.TestCase):
    def test_non_sequences_are_rejected(self) -> None:
        for bad in ({"title": "x"}, "title: x", None, 42, b"[]"):
            with self.subTest(bad=bad):
                with self.assertRaises(DataShapeError):
                    RecordStore.load(bad)

    def test_origin_index_follows_input_order(self) -> None:
        store = RecordStore.load([{"title": "a"}, {"title": "b"}, {"title": "c"}])
        self.assertEqual(store.origin_indices(), [0, 1, 2])
        self.assertEqual(store.get(1).title, "b")
        self.assertIsNone(store.get(3))
        self.assertEqual(len(store), 3)

    def test_fields_coerce_gracefully(self) -> None:
        store = RecordStore.load([{"title": 123, "modelType": "  ", "modelSize": " 7B "}, "not a mapping"])
        a, b = store.all()
        self.assertEqual(a.title, "123")
        self.assertIsNone(a.model_type)
        self.assertEqual(a.model_size, "7B")
        self.assertEqual(b.title, "")
        self.assertIsNone(b.raw_date)
        self.assertEqual(b.origin_index, 1)

    def test_raw_fields_are_kept(self) -> None:
        store = RecordStore.load([{"title": "x ⭐", "text": "hello", "openSource": True}])
        r = store.all()[0]
        self.assertTrue(r.has_marker)
        self.assertEqual(r.get("text"), "hello")
        self.assertIs(r.get("openSource"), True)
        self.assertIsNone(r.get("missing"))

    def test_empty_store(self) -> None:
        self.assertEqual(len(RecordStore.empty()), 0)
        self.assertEqual(RecordStore.load([]).all(), ())


if __name__ == "__main__":
    unittest.main(verbosity=2)
