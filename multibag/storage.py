import logging
from typing import Generic, TypeVar, Hashable, Optional, Mapping, ItemsView, KeysView, ValuesView

_T = TypeVar('_T', bound=Hashable)

logger = logging.getLogger(__name__)


class Storage(Generic[_T]):
    """Backing store of a multiset: a mapping from distinct elements to strictly positive multiplicities.

    Copies made with :meth:`share` point at the same dictionary until one of them is written to,
    at which point the writer detaches with its own copy (copy-on-write).
    The total number of elements is maintained incrementally.
    """

    __slots__ = ('_counts', '_total', '_shared', '_buckets', '_positions')
    _counts: dict[_T, int]
    _total: int
    _shared: bool
    _buckets: Optional[tuple[tuple[_T, int], ...]]
    _positions: Optional[dict[_T, int]]

    def __init__(self, counts: Optional[Mapping[_T, int]] = None):
        self._counts = {element: count for element, count in counts.items() if count > 0} if counts else {}
        self._total = sum(self._counts.values())
        self._shared = False
        self._buckets = None
        self._positions = None

    def share(self) -> 'Storage[_T]':
        other = Storage[_T]()
        other._counts = self._counts
        other._total = self._total
        other._buckets = self._buckets
        other._positions = self._positions
        other._shared = self._shared = True
        return other

    @property
    def shared(self) -> bool:
        return self._shared

    def __prepare_write(self):
        if self._shared:
            logger.debug('Detaching shared storage of %d distinct elements', len(self._counts))
            self._counts = self._counts.copy()
            self._shared = False
        self._buckets = None
        self._positions = None

    @property
    def total(self) -> int:
        return self._total

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, element: object) -> bool:
        return element in self._counts

    def get(self, element: _T) -> int:
        return self._counts.get(element, 0)

    def set(self, element: _T, count: int) -> None:
        # callers guarantee count >= 0
        current = self._counts.get(element, 0)
        if count == current:
            return
        self.__prepare_write()
        if count:
            self._counts[element] = count
        else:
            del self._counts[element]
        self._total += count - current

    def add(self, element: _T, count: int) -> None:
        if count > 0:
            self.set(element, self.get(element) + count)

    def pop(self, element: _T) -> int:
        current = self.get(element)
        if current:
            self.set(element, 0)
        return current

    def clear(self) -> None:
        if self._shared:
            self._counts = {}
            self._shared = False
        else:
            self._counts.clear()
        self._total = 0
        self._buckets = None
        self._positions = None

    def items(self) -> ItemsView[_T, int]:
        return self._counts.items()

    def keys(self) -> KeysView[_T]:
        return self._counts.keys()

    def values(self) -> ValuesView[int]:
        return self._counts.values()

    def __build_buckets(self):
        self._buckets = tuple(self._counts.items())
        self._positions = {element: position for position, (element, _) in enumerate(self._buckets)}

    def bucket(self, position: int) -> tuple[_T, int]:
        'Returns the (element, count) entry at the given position of the iteration order.'
        if self._buckets is None:
            self.__build_buckets()
        if not 0 <= position < len(self._buckets):
            raise IndexError(f'Bucket position {position} is out of range for {len(self._buckets)} distinct elements')
        return self._buckets[position]

    def position(self, element: _T) -> Optional[int]:
        if self._positions is None:
            self.__build_buckets()
        return self._positions.get(element)
