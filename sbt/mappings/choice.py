'''
Choice primitives for inverting injections: given a mapping and a target element,
select SOME preimage of that element when one exists, or an arbitrary fallback otherwise
'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

import logging
LOGGER = logging.getLogger(__name__)

from typing import (
    Callable,
    Generic,
    Hashable,
    Iterator,
    Optional,
    TypeVar,
)
X = TypeVar('X', bound=Hashable)
Y = TypeVar('Y', bound=Hashable)

from abc import ABC, abstractmethod

from .domains import Domain
from .injections import NonInjectiveError
from ..sbutils.iteration import bounded


# Custom Exceptions
class PreimageSearchExhausted(Exception):
    '''Raised when a capped preimage search runs out before settling whether a preimage exists at all'''
    pass

class ChoiceInverse(ABC, Generic[X, Y]):
    '''
    Abstract base for choice-backed inverses of a mapping "func" : X -> Y

    Calling an instance on y returns some x in the source domain with func(x) == y if such an x exists,
    otherwise an arbitrary element of the source domain (which must therefore be inhabited)

    The Option-returning "find()" exposes the lookup without the fallback, for callers
    which would rather handle the "no witness" case explicitly; None from "find()" always means
    that no preimage exists, and searches which are capped before they can establish this raise PreimageSearchExhausted
    '''
    def __init__(self, func : Callable[[X], Y], source : Domain[X]) -> None:
        if not callable(func):
            raise TypeError(f'Can only invert callable mappings, not {type(func)}')
        self.func = func
        self.source = source

    @abstractmethod
    def find(self, y : Y) -> Optional[X]:
        '''Return the preimage of y under "func", or None if there is none; raises PreimageSearchExhausted if a capped search cannot tell which'''
        ...

    def has_preimage(self, y : Y) -> bool:
        '''Whether some element of the source domain is mapped onto y'''
        return self.find(y) is not None

    def fallback(self) -> X:
        '''An arbitrary element of the source domain; raises EmptyDomainError if there is none'''
        return self.source.some_element()

    def __call__(self, y : Y) -> X:
        try:
            if (x := self.find(y)) is not None:
                return x
        except PreimageSearchExhausted as err:
            LOGGER.debug(str(err))

        x = self.fallback()
        LOGGER.debug(f'No preimage of {y!r} found; falling back to arbitrary element {x!r}')
        return x

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(func={getattr(self.func, "__name__", self.func)!r}, source={self.source!r})'


class EnumerativeInverse(ChoiceInverse[X, Y]):
    '''Finds preimages by a linear search over the source domain, optionally capped at "search_bound" elements'''
    def __init__(
        self,
        func : Callable[[X], Y],
        source : Domain[X],
        search_bound : Optional[int]=None,
    ) -> None:
        super().__init__(func, source)
        self.search_bound = search_bound

    def find(self, y : Y) -> Optional[X]:
        num_searched = 0
        for x in bounded(self.source, self.search_bound):
            num_searched += 1
            if self.func(x) == y:
                return x

        if (self.search_bound is not None) and (num_searched >= self.search_bound):
            raise PreimageSearchExhausted(f'No preimage of {y!r} among the first {self.search_bound} elements of {self.source!r}')
        return None


class MemoizedInverse(ChoiceInverse[X, Y]):
    '''
    Finds preimages by searching the source domain, tabulating every image encountered along the way
    so that no element of the source is ever evaluated twice

    Since the table doubles as a record of the mapping's outputs, any two elements found to share an image
    are reported via NonInjectiveError, rather than having one of them silently chosen over the other
    '''
    def __init__(
        self,
        func : Callable[[X], Y],
        source : Domain[X],
        search_bound : Optional[int]=None,
    ) -> None:
        super().__init__(func, source)
        self.search_bound = search_bound
        self._table : dict[Y, X] = {}
        self._enumeration : Optional[Iterator[X]] = None
        self._num_searched : int = 0
        self._exhausted : bool = False
        self._truncated : bool = False

    @property
    def num_searched(self) -> int:
        '''Number of elements of the source domain tabulated so far'''
        return self._num_searched

    @property
    def exhausted(self) -> bool:
        '''Whether the search can proceed no further (either the source was fully enumerated or the search bound was reached)'''
        return self._exhausted

    @property
    def truncated(self) -> bool:
        '''Whether the search was cut short by the search bound, leaving the remainder of the source unexamined'''
        return self._truncated

    def _tabulate_next(self) -> bool:
        '''Tabulate the image of the next element of the source domain; returns False once the search is exhausted'''
        if self._exhausted:
            return False

        if (self.search_bound is not None) and (self._num_searched >= self.search_bound):
            LOGGER.debug(f'Search bound of {self.search_bound} elements reached while inverting {self.func!r}')
            self._exhausted = self._truncated = True
            return False

        if self._enumeration is None:
            self._enumeration = iter(self.source)
        try:
            x = next(self._enumeration)
        except StopIteration:
            self._exhausted = True
            return False

        y = self.func(x)
        if (seen := self._table.setdefault(y, x)) != x:
            raise NonInjectiveError(f'Mapping {self.func!r} is not injective: {seen!r} and {x!r} both map to {y!r}')
        self._num_searched += 1

        return True

    def find(self, y : Y) -> Optional[X]:
        while y not in self._table:
            if not self._tabulate_next():
                if self._truncated:
                    raise PreimageSearchExhausted(f'No preimage of {y!r} among the first {self.search_bound} elements of {self.source!r}')
                return None
        return self._table[y]


class ExplicitInverse(ChoiceInverse[X, Y]):
    '''
    Wraps a caller-supplied partial inverse, which returns None for elements outside the image of "func"

    Every preimage reported by the supplied inverse is checked against "func" and the source domain,
    so that an inconsistent inverse cannot silently corrupt a construction
    '''
    def __init__(
        self,
        func : Callable[[X], Y],
        source : Domain[X],
        inverse : Callable[[Y], Optional[X]],
    ) -> None:
        super().__init__(func, source)
        if not callable(inverse):
            raise TypeError(f'Explicit inverse must be callable, not {type(inverse)}')
        self.inverse = inverse

    def find(self, y : Y) -> Optional[X]:
        x = self.inverse(y)
        if x is None:
            return None

        if x not in self.source:
            raise ValueError(f'Supplied inverse maps {y!r} to {x!r}, which lies outside of {self.source!r}')
        if (image := self.func(x)) != y:
            raise ValueError(f'Supplied inverse is inconsistent: maps {y!r} to {x!r}, but {x!r} is mapped to {image!r}')

        return x
