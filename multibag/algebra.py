from abc import abstractmethod
from collections import Counter
from collections.abc import Collection, Mapping, Set as AbstractSet
from typing import Generic, TypeVar, Hashable, Iterable, Iterator, NamedTuple, Union

_T = TypeVar('_T', bound=Hashable)
_Other = Union['MultisetAlgebra[_T]', Iterable[_T], Mapping[_T, int]]
_Changes = Iterator[tuple[_T, int]]


class GroupedElement(NamedTuple, Generic[_T]):
    element: _T
    count: int


def count_elements(source: _Other) -> dict[_T, int]:
    """Counts the multiplicity of each element of a multiset, a mapping of multiplicities or an iterable.

    Mappings are read as element to multiplicity, dropping non positive multiplicities.
    Any other iterable counts each occurrence of each element.
    """
    if isinstance(source, MultisetAlgebra):
        return dict(source.grouped())
    if isinstance(source, Mapping):
        return {element: count for element, count in source.items() if count > 0}
    return dict(Counter(source))


def compare_multisets(lhs: 'MultisetAlgebra[_T]', rhs: 'MultisetAlgebra[_T]') -> tuple[bool, bool]:
    """Checks in a single pass whether ``lhs`` is a subset of ``rhs`` and whether they are equal.

    Returns ``(is_subset, is_equal)``.
    """
    if any(rhs.count_of(element) == 0 for element in lhs.distinct()):
        return False, False
    equal = True
    for element, right_count in rhs.grouped():
        left_count = lhs.count_of(element)
        if left_count > right_count:
            return False, False
        if left_count < right_count:
            # an element not yet scanned can still have a greater count on the left
            equal = False
    return True, equal


def union_changes(lhs: 'MultisetAlgebra[_T]', rhs: 'MultisetAlgebra[_T]') -> _Changes:
    for element, right_count in rhs.grouped():
        if right_count > lhs.count_of(element):
            yield element, right_count


def intersection_changes(lhs: 'MultisetAlgebra[_T]', rhs: 'MultisetAlgebra[_T]') -> _Changes:
    for element, left_count in lhs.grouped():
        right_count = rhs.count_of(element)
        if right_count < left_count:
            yield element, right_count


def symmetric_difference_changes(lhs: 'MultisetAlgebra[_T]', rhs: 'MultisetAlgebra[_T]') -> _Changes:
    for element, right_count in rhs.grouped():
        yield element, abs(lhs.count_of(element) - right_count)


def difference_changes(lhs: 'MultisetAlgebra[_T]', rhs: 'MultisetAlgebra[_T]') -> _Changes:
    for element, right_count in rhs.grouped():
        yield element, max(0, lhs.count_of(element) - right_count)


def combine_changes(lhs: 'MultisetAlgebra[_T]', rhs: 'MultisetAlgebra[_T]') -> _Changes:
    for element, right_count in rhs.grouped():
        yield element, lhs.count_of(element) + right_count


def times_changes(lhs: 'MultisetAlgebra[_T]', factor: int) -> _Changes:
    if factor < 0:
        raise ValueError('The factor must not be negative.')
    for element, count in lhs.grouped():
        yield element, count * factor


class MultisetAlgebra(Collection, Generic[_T]):
    """Multiset algebra over per-element multiplicities.

    Any collection of hashable elements can implement this interface by providing
    :meth:`count_of`, :meth:`grouped`, :meth:`distinct`, :attr:`distinct_count`,
    ``__len__``, ``__iter__``, ``__contains__`` and the :meth:`_from_counts` factory.
    Combinators and relations are then provided as mixin methods.
    Every operation accepts another multiset, a mapping of multiplicities or an iterable of elements.
    """

    __slots__ = ()

    @abstractmethod
    def count_of(self, element: _T) -> int:
        ...

    @abstractmethod
    def grouped(self) -> Iterator[GroupedElement[_T]]:
        ...

    @abstractmethod
    def distinct(self) -> Iterator[_T]:
        ...

    @property
    @abstractmethod
    def distinct_count(self) -> int:
        ...

    @classmethod
    @abstractmethod
    def _from_counts(cls, counts: Mapping[_T, int]):
        ...

    @classmethod
    def _coerce(cls, other: _Other) -> 'MultisetAlgebra[_T]':
        if isinstance(other, MultisetAlgebra):
            return other
        return cls._from_counts(count_elements(other))

    def _apply(self, changes: _Changes):
        counts = dict(self.grouped())
        counts.update(changes)
        return self._from_counts(counts)

    def union(self, other: _Other):
        return self._apply(union_changes(self, self._coerce(other)))

    def intersection(self, other: _Other):
        return self._apply(intersection_changes(self, self._coerce(other)))

    def symmetric_difference(self, other: _Other):
        return self._apply(symmetric_difference_changes(self, self._coerce(other)))

    def difference(self, other: _Other):
        return self._apply(difference_changes(self, self._coerce(other)))

    subtracting = difference

    def combine(self, other: _Other):
        return self._apply(combine_changes(self, self._coerce(other)))

    def times(self, factor: int):
        if factor == 0:
            return self._from_counts({})
        return self._apply(times_changes(self, factor))

    def count_contains(self, other: _Other) -> int:
        other = self._coerce(other)
        if len(other) == 0:
            raise ZeroDivisionError('Cannot count the number of times an empty multiset is contained in another multiset')
        if len(other) > len(self):
            return 0
        return min(self.count_of(element) // count for element, count in other.grouped())

    def issubset(self, other: _Other) -> bool:
        is_subset, is_equal = compare_multisets(self, self._coerce(other))
        return is_subset or is_equal

    def issuperset(self, other: _Other) -> bool:
        return self._coerce(other).issubset(self)

    def is_strict_subset(self, other: _Other) -> bool:
        is_subset, is_equal = compare_multisets(self, self._coerce(other))
        return is_subset and not is_equal

    def is_strict_superset(self, other: _Other) -> bool:
        return self._coerce(other).is_strict_subset(self)

    def isdisjoint(self, other: _Other) -> bool:
        other = self._coerce(other)
        return not any(other.count_of(element) for element in self.distinct())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultisetAlgebra):
            return NotImplemented
        if len(self) != len(other) or self.distinct_count != other.distinct_count:
            return False
        return compare_multisets(self, other)[1]

    @staticmethod
    def _is_operand(other: object) -> bool:
        return isinstance(other, (MultisetAlgebra, AbstractSet))

    def __le__(self, other: _Other) -> bool:
        if not self._is_operand(other):
            return NotImplemented
        return self.issubset(other)

    def __lt__(self, other: _Other) -> bool:
        if not self._is_operand(other):
            return NotImplemented
        return self.is_strict_subset(other)

    def __ge__(self, other: _Other) -> bool:
        if not self._is_operand(other):
            return NotImplemented
        return self.issuperset(other)

    def __gt__(self, other: _Other) -> bool:
        if not self._is_operand(other):
            return NotImplemented
        return self.is_strict_superset(other)

    def __or__(self, other: _Other):
        if not self._is_operand(other):
            return NotImplemented
        return self.union(other)

    __ror__ = __or__

    def __and__(self, other: _Other):
        if not self._is_operand(other):
            return NotImplemented
        return self.intersection(other)

    __rand__ = __and__

    def __xor__(self, other: _Other):
        if not self._is_operand(other):
            return NotImplemented
        return self.symmetric_difference(other)

    __rxor__ = __xor__

    def __sub__(self, other: _Other):
        if not self._is_operand(other):
            return NotImplemented
        return self.difference(other)

    def __add__(self, other: _Other):
        if not self._is_operand(other):
            return NotImplemented
        return self.combine(other)

    __radd__ = __add__

    def __mul__(self, factor: int):
        if not isinstance(factor, int):
            return NotImplemented
        return self.times(factor)

    __rmul__ = __mul__

    def __floordiv__(self, other: _Other) -> int:
        if not self._is_operand(other):
            return NotImplemented
        return self.count_contains(other)
