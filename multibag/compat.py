import logging
from typing import TypeVar, Hashable
import multiset
from .multiset import BaseMultiset, Multiset, FrozenMultiset

_T = TypeVar('_T', bound=Hashable)

logger = logging.getLogger(__name__)


def from_multiset(source: multiset.BaseMultiset, frozen: bool = False) -> BaseMultiset:
    'Converts a multiset of the multiset package into a multibag multiset.'
    logger.debug('Converting %s with %d distinct elements', type(source).__name__, len(source.distinct_elements()))
    cls = FrozenMultiset if frozen else Multiset
    return cls.from_pairs(source.items())


def to_multiset(bag: BaseMultiset[_T]) -> multiset.Multiset:
    logger.debug('Converting %s with %d distinct elements', type(bag).__name__, bag.distinct_count)
    return multiset.Multiset(dict(bag.items()))


def to_frozen_multiset(bag: BaseMultiset[_T]) -> multiset.FrozenMultiset:
    logger.debug('Converting %s with %d distinct elements', type(bag).__name__, bag.distinct_count)
    return multiset.FrozenMultiset(dict(bag.items()))
