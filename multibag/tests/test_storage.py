from unittest import TestCase
from multibag.storage import Storage


class StorageTests(TestCase):
    def setUp(self) -> None:
        self.subject = Storage[str]({'A': 3, 'B': 1, 'Z': 0, 'N': -2})
        return super().setUp()

    def test_init_drops_non_positive(self):
        self.assertEqual(dict(self.subject.items()), {'A': 3, 'B': 1})
        self.assertEqual(self.subject.total, 4)
        self.assertEqual(len(self.subject), 2)
        self.assertNotIn('Z', self.subject)
        empty = Storage[str]()
        self.assertEqual(empty.total, 0)
        self.assertEqual(len(empty), 0)

    def test_set_maintains_total(self):
        self.subject.set('A', 5)
        self.assertEqual(self.subject.total, 6)
        self.subject.set('C', 2)
        self.assertEqual(self.subject.total, 8)
        self.subject.set('A', 0)
        self.assertEqual(self.subject.total, 3)
        self.assertNotIn('A', self.subject)
        self.assertEqual(self.subject.total, sum(self.subject.values()))

    def test_add_and_pop(self):
        self.subject.add('B', 2)
        self.subject.add('B', 0)
        self.subject.add('B', -1)
        self.assertEqual(self.subject.get('B'), 3)
        self.assertEqual(self.subject.pop('B'), 3)
        self.assertEqual(self.subject.pop('B'), 0)
        self.assertEqual(self.subject.get('B'), 0)
        self.assertEqual(self.subject.total, 3)

    def test_share_is_copy_on_write(self):
        shared = self.subject.share()
        self.assertTrue(self.subject.shared)
        self.assertTrue(shared.shared)
        shared.add('C', 4)
        self.assertFalse(shared.shared)
        self.assertEqual(self.subject.get('C'), 0)
        self.assertEqual(self.subject.total, 4)
        self.assertEqual(shared.total, 8)
        self.subject.set('A', 0)
        self.assertEqual(shared.get('A'), 3)

    def test_noop_write_does_not_detach(self):
        shared = self.subject.share()
        shared.set('A', 3)
        shared.add('A', 0)
        self.assertTrue(shared.shared)

    def test_clear_shared(self):
        shared = self.subject.share()
        shared.clear()
        self.assertEqual(shared.total, 0)
        self.assertEqual(len(shared), 0)
        self.assertEqual(self.subject.total, 4)
        self.assertEqual(len(self.subject), 2)

    def test_buckets(self):
        self.assertEqual(self.subject.bucket(0), ('A', 3))
        self.assertEqual(self.subject.bucket(1), ('B', 1))
        self.assertEqual(self.subject.position('B'), 1)
        self.assertIsNone(self.subject.position('Z'))
        with self.assertRaises(IndexError):
            self.subject.bucket(2)
        with self.assertRaises(IndexError):
            self.subject.bucket(-1)

    def test_buckets_are_rebuilt_after_writes(self):
        self.assertEqual(self.subject.position('B'), 1)
        self.subject.set('A', 0)
        self.assertEqual(self.subject.position('B'), 0)
        self.assertEqual(self.subject.bucket(0), ('B', 1))
        self.subject.add('C', 1)
        self.assertEqual(self.subject.bucket(1), ('C', 1))
