from copy import deepcopy
from itertools import chain, repeat, starmap
from typing import Generic, TypeVar, Hashable, Optional, Callable, Iterable, Iterator, Mapping, ItemsView, KeysView, ValuesView
from .algebra import (
    MultisetAlgebra, GroupedElement, count_elements, _Other,
    union_changes, intersection_changes, symmetric_difference_changes, difference_changes, combine_changes, times_changes,
)
from .index import MultisetIndex
from .storage import Storage

_T = TypeVar('_T', bound=Hashable)


class BaseMultiset(MultisetAlgebra[_T], Generic[_T]):
    """A multiset implementation.

    A multiset is similar to the builtin :class:`set`, but elements can occur multiple times in the multiset.
    It stores each distinct element once, along with its multiplicity, which is always strictly positive.

    Iterating over a multiset yields every occurrence of every element, with the copies of the same element
    always next to each other; the order of distinct elements is unspecified.
    :meth:`grouped` yields each distinct element with its multiplicity and :meth:`distinct` each distinct element once.

    The elements can also be addressed as a flattened sequence through :class:`MultisetIndex` positions,
    see :attr:`start_index`, :meth:`index_after` and :meth:`element_at`.

    Copies share their storage until one of them is modified.

    :see: https://en.wikipedia.org/wiki/Multiset
    """

    __slots__ = ('_storage',)
    _storage: Storage[_T]

    def __init__(self, iterable: Optional[_Other] = None):
        if isinstance(iterable, BaseMultiset):
            self._storage = iterable._storage.share()
        elif iterable is None:
            self._storage = Storage[_T]()
        else:
            self._storage = Storage[_T](count_elements(iterable))

    @classmethod
    def _from_counts(cls, counts: Mapping[_T, int]):
        result = cls.__new__(cls)
        result._storage = Storage[_T](counts)
        return result

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[_T, int]]):
        'Creates a multiset from (element, multiplicity) pairs, summing repeated elements and dropping non positive multiplicities.'
        storage = Storage[_T]()
        for element, count in pairs:
            storage.add(element, count)
        result = cls.__new__(cls)
        result._storage = storage
        return result

    @classmethod
    def of(cls, first: _T, second: _T, *others: _T):
        'Creates a multiset from two or more elements.'
        return cls((first, second, *others))

    @classmethod
    def from_elements(cls, elements: Iterable[_T], multiplicity: int):
        return cls._from_counts(dict.fromkeys(elements, multiplicity))

    def __contains__(self, element: object) -> bool:
        return element in self._storage

    def __getitem__(self, element: _T) -> int:
        return self._storage.get(element)

    def count_of(self, element: _T) -> int:
        return self._storage.get(element)

    def get(self, element: _T, default: int) -> int:
        return self._storage.get(element) or default

    @property
    def count(self) -> int:
        return self._storage.total

    @property
    def distinct_count(self) -> int:
        return len(self._storage)

    @property
    def is_empty(self) -> bool:
        return len(self._storage) == 0

    def __len__(self) -> int:
        return self._storage.total

    def __bool__(self) -> bool:
        return len(self._storage) > 0

    def __iter__(self) -> Iterator[_T]:
        return chain.from_iterable(starmap(repeat, self._storage.items()))

    def grouped(self) -> Iterator[GroupedElement[_T]]:
        return starmap(GroupedElement, self._storage.items())

    def distinct(self) -> Iterator[_T]:
        return iter(self._storage.keys())

    def root(self) -> frozenset[_T]:
        'The set of distinct elements of the multiset.'
        return frozenset(self._storage.keys())

    def items(self) -> ItemsView[_T, int]:
        return self._storage.items()

    def distinct_elements(self) -> KeysView[_T]:
        return self._storage.keys()

    def multiplicities(self) -> ValuesView[int]:
        return self._storage.values()

    def filter(self, predicate: Callable[[_T], bool]):
        """Returns a new multiset with the elements satisfying the predicate.

        The predicate is called once for each occurrence of each element.
        """
        storage = Storage[_T]()
        for element in self:
            if predicate(element):
                storage.add(element, 1)
        result = self.__class__.__new__(self.__class__)
        result._storage = storage
        return result

    @property
    def start_index(self) -> MultisetIndex:
        return MultisetIndex(0, 0, len(self))

    @property
    def end_index(self) -> MultisetIndex:
        return MultisetIndex(len(self._storage), 0, len(self))

    def element_at(self, index: MultisetIndex) -> _T:
        bucket, offset = index.bucket, index.offset
        while True:
            element, count = self._storage.bucket(bucket)
            if offset < count:
                return element
            # the offset runs over into the following buckets
            bucket += 1
            offset -= count

    def index_after(self, index: MultisetIndex) -> MultisetIndex:
        if index.bucket >= len(self._storage):
            raise IndexError('Cannot advance past the end of the multiset')
        _, count = self._storage.bucket(index.bucket)
        if index.offset < count - 1:
            return index.next_in_bucket()
        return MultisetIndex(index.bucket + 1, 0, len(self))

    def first_index(self, element: _T) -> Optional[MultisetIndex]:
        position = self._storage.position(element)
        if position is None:
            return None
        return MultisetIndex(position, 0, len(self))

    def indices(self) -> Iterator[MultisetIndex]:
        index = self.start_index
        end = self.end_index
        while index < end:
            yield index
            index = self.index_after(index)

    @property
    def first(self) -> Optional[_T]:
        if not self:
            return None
        return self.element_at(self.start_index)

    def __str__(self) -> str:
        items = ', '.join('%r: %r' % item for item in self._storage.items())
        return '{%s}' % items

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self})'

    def copy(self):
        return self.__class__(self)

    __copy__ = copy

    def __deepcopy__(self, memo: dict):
        return self._from_counts(deepcopy(dict(self._storage.items()), memo))


class Multiset(BaseMultiset[_T], Generic[_T]):
    """A mutable multiset.

    Removing is all-or-nothing with :meth:`remove` and best effort with :meth:`remove_if_possible`.
    Multiplicities reaching zero remove the element altogether.
    """

    __slots__ = ()

    def insert(self, element: _T, count: int = 1) -> None:
        self._storage.add(element, count)

    add = insert

    def remove(self, element: _T, count: int = 1) -> bool:
        current = self._storage.get(element)
        if count <= 0 or current < count:
            return False
        self._storage.set(element, current - count)
        return True

    def remove_if_possible(self, element: _T, count: int = 1) -> int:
        if count <= 0:
            return 0
        current = self._storage.get(element)
        removed = min(current, count)
        if removed:
            self._storage.set(element, current - removed)
        return removed

    def remove_all(self, element: _T) -> int:
        return self._storage.pop(element)

    def remove_all_of(self, elements: Iterable[_T]) -> int:
        return sum(self._storage.pop(element) for element in elements)

    def remove_at(self, index: MultisetIndex) -> _T:
        element = self.element_at(index)
        self.remove(element)
        return element

    def clear(self) -> None:
        self._storage.clear()

    def update_count(self, element: _T, count: int) -> None:
        if count < 0:
            raise ValueError('The multiplicity must not be negative.')
        self._storage.set(element, count)

    __setitem__ = update_count

    def __delitem__(self, element: _T) -> None:
        self._storage.pop(element)

    def _apply_in_place(self, changes: Iterator[tuple[_T, int]]):
        for element, count in list(changes):
            self._storage.set(element, count)

    def union_update(self, other: _Other) -> None:
        self._apply_in_place(union_changes(self, self._coerce(other)))

    def intersection_update(self, other: _Other) -> None:
        self._apply_in_place(intersection_changes(self, self._coerce(other)))

    def symmetric_difference_update(self, other: _Other) -> None:
        self._apply_in_place(symmetric_difference_changes(self, self._coerce(other)))

    def difference_update(self, other: _Other) -> None:
        self._apply_in_place(difference_changes(self, self._coerce(other)))

    subtract = difference_update

    def combine_update(self, other: _Other) -> None:
        self._apply_in_place(combine_changes(self, self._coerce(other)))

    def times_update(self, factor: int) -> None:
        if factor == 0:
            self.clear()
            return
        self._apply_in_place(times_changes(self, factor))

    def __ior__(self, other: _Other):
        if not self._is_operand(other):
            return NotImplemented
        self.union_update(other)
        return self

    def __iand__(self, other: _Other):
        if not self._is_operand(other):
            return NotImplemented
        self.intersection_update(other)
        return self

    def __ixor__(self, other: _Other):
        if not self._is_operand(other):
            return NotImplemented
        self.symmetric_difference_update(other)
        return self

    def __isub__(self, other: _Other):
        if not self._is_operand(other):
            return NotImplemented
        self.difference_update(other)
        return self

    def __iadd__(self, other: _Other):
        if not self._is_operand(other):
            return NotImplemented
        self.combine_update(other)
        return self

    def __imul__(self, factor: int):
        if not isinstance(factor, int):
            return NotImplemented
        self.times_update(factor)
        return self


class FrozenMultiset(BaseMultiset[_T], Generic[_T]):
    """An immutable, hashable multiset.

    The hash does not depend on the iteration order: every (element, multiplicity) pair is hashed on its own
    and the results are folded together with XOR.
    """

    __slots__ = ()

    def __hash__(self) -> int:
        folded = 0
        for entry in self._storage.items():
            folded ^= hash(entry)
        return hash((self._storage.total, folded))
