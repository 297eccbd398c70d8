from unittest import TestCase
import multiset
from multibag import Multiset, FrozenMultiset
from multibag.compat import from_multiset, to_multiset, to_frozen_multiset


class CompatTests(TestCase):
    def test_from_multiset(self):
        source = multiset.Multiset('AAB')
        result = from_multiset(source)
        self.assertIsInstance(result, Multiset)
        self.assertEqual(result, Multiset({'A': 2, 'B': 1}))
        frozen = from_multiset(multiset.FrozenMultiset([1, 1, 1]), frozen=True)
        self.assertIsInstance(frozen, FrozenMultiset)
        self.assertEqual(frozen, FrozenMultiset({1: 3}))
        self.assertEqual(from_multiset(multiset.Multiset()), Multiset())

    def test_to_multiset(self):
        result = to_multiset(Multiset({'A': 2, 'B': 1}))
        self.assertIsInstance(result, multiset.Multiset)
        self.assertEqual(result, multiset.Multiset('AAB'))
        result.add('C')
        self.assertEqual(result['C'], 1)

    def test_to_frozen_multiset(self):
        result = to_frozen_multiset(FrozenMultiset('ABB'))
        self.assertIsInstance(result, multiset.FrozenMultiset)
        self.assertEqual(result, multiset.FrozenMultiset('ABB'))
        self.assertEqual(hash(result), hash(multiset.FrozenMultiset('BBA')))
