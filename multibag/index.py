from dataclasses import dataclass
from functools import total_ordering


@total_ordering
@dataclass(frozen=True, eq=False)
class MultisetIndex:
    """A position in the flattened sequence of a multiset's elements.

    A multiset with ``{'A': 2, 'B': 3}`` is addressed as if it were the sequence ``A A B B B``
    without ever materializing it. An index is made of:

    - ``bucket``: the position of a distinct element in the iteration order of the multiset's storage.
    - ``offset``: the position inside the run of repeated copies of that element.
    - ``maximum``: the total number of elements of the multiset when the index was created.

    Two indices with different buckets can still denote the same logical position:
    an offset that overflows its bucket by exactly the total count lands on the end of the sequence,
    so they compare equal whenever their offsets differ by ``maximum``.

    Indices are only meaningful for the multiset that created them and become stale when it is mutated.
    """
    bucket: int
    offset: int
    maximum: int

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultisetIndex):
            return NotImplemented
        if self.bucket == other.bucket:
            return self.offset == other.offset and self.maximum == other.maximum
        return self.maximum == other.maximum and abs(self.offset - other.offset) == self.maximum

    def __lt__(self, other: 'MultisetIndex') -> bool:
        if not isinstance(other, MultisetIndex):
            return NotImplemented
        if self.bucket == other.bucket:
            return self.offset < other.offset
        if self.bucket < other.bucket:
            return self.offset - other.offset < self.maximum
        return False

    def __hash__(self) -> int:
        # buckets and offsets can differ between equal indices
        return hash(self.maximum)

    def next_in_bucket(self) -> 'MultisetIndex':
        return MultisetIndex(self.bucket, self.offset + 1, self.maximum)

    def __str__(self) -> str:
        return f'MultisetIndex(bucket: {self.bucket}, offset: {self.offset}, max: {self.maximum})'
