from .algebra import MultisetAlgebra, GroupedElement, compare_multisets, count_elements
from .index import MultisetIndex
from .multiset import BaseMultiset, Multiset, FrozenMultiset

__all__ = [
    'MultisetAlgebra',
    'GroupedElement',
    'compare_multisets',
    'count_elements',
    'MultisetIndex',
    'BaseMultiset',
    'Multiset',
    'FrozenMultiset',
]
