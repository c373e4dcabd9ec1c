'''Opaque collections which serve as the domains and codomains of injections, whether empty, finite, or infinite'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

import logging
LOGGER = logging.getLogger(__name__)

from typing import (
    Any,
    Callable,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    Optional,
    TypeVar,
)
ElementT = TypeVar('ElementT', bound=Hashable)

from abc import ABC, abstractmethod
from itertools import islice

from ..sbutils.iteration import bounded


# Custom Exceptions
class EmptyDomainError(Exception):
    '''Raised when an element is demanded from a domain which has none'''
    pass

# Domain classes
class Domain(ABC, Generic[ElementT]):
    '''
    A collection of elements over which a mapping is defined

    Makes no structural assumptions about elements beyond equality (and hashability);
    the only capabilities required are enumeration (possibly without end) and membership testing
    '''
    label : str = ''

    @property
    @abstractmethod
    def is_finite(self) -> bool:
        '''Whether the domain is known to contain finitely many elements'''
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[ElementT]:
        '''Enumerate the elements of the domain; may never terminate for infinite domains'''
        ...

    @abstractmethod
    def __contains__(self, element : Any) -> bool:
        ...

    @property
    def is_inhabited(self) -> bool:
        '''Whether the domain has at least one element'''
        for _ in self:
            return True
        return False

    @property
    def is_empty(self) -> bool:
        return not self.is_inhabited

    def some_element(self) -> ElementT:
        '''
        Return an arbitrary (but deterministic) element of the domain,
        serving as evidence that the domain is inhabited

        Raises EmptyDomainError if the domain has no elements
        '''
        for element in self:
            return element
        raise EmptyDomainError(f'Cannot select an element from empty domain {self!r}')

    def sample(self, n : int) -> tuple[ElementT, ...]:
        '''The first n elements of the domain, in order of enumeration'''
        return tuple(bounded(self, n))

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(label={self.label!r}, finite={self.is_finite})'


class FiniteDomain(Domain[ElementT]):
    '''A domain comprising a fixed, finite collection of elements'''
    def __init__(self, elements : Iterable[ElementT]=(), label : str='') -> None:
        self.elements : frozenset[ElementT] = frozenset(elements)
        self.label = label
        try:
            self._ordering = tuple(sorted(self.elements))
        except TypeError: # DEV: elements needn't be mutually orderable; fall back to a repr-based ordering for determinism
            self._ordering = tuple(sorted(self.elements, key=repr))

    @property
    def is_finite(self) -> bool:
        return True

    @property
    def is_inhabited(self) -> bool:
        return len(self.elements) > 0

    def __iter__(self) -> Iterator[ElementT]:
        return iter(self._ordering)

    def __contains__(self, element : Any) -> bool:
        return element in self.elements

    def __len__(self) -> int:
        return len(self.elements)

    def __eq__(self, other : object) -> bool:
        if not isinstance(other, FiniteDomain):
            return NotImplemented
        return self.elements == other.elements

    def __hash__(self) -> int:
        return hash(self.elements)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(label={self.label!r}, size={len(self)})'


class EnumerableDomain(Domain[ElementT]):
    '''
    A domain whose elements are produced by an enumeration, which may be infinite

    Parameters
    ----------
    enumeration : Callable[[], Iterable[ElementT]]
        Factory returning a FRESH iterable over the elements of the domain on each call
    contains : Callable[[Any], bool], optional
        Membership predicate; required to test membership without enumeration
        If not provided, membership is decided by enumeration, capped by "search_bound"
    finite : bool, default False
        Whether the enumeration is known to terminate
    search_bound : int, optional
        Maximum number of elements enumerated when testing membership without a predicate
    '''
    def __init__(
        self,
        enumeration : Callable[[], Iterable[ElementT]],
        contains : Optional[Callable[[Any], bool]]=None,
        finite : bool=False,
        search_bound : Optional[int]=None,
        label : str='',
    ) -> None:
        if not callable(enumeration):
            raise TypeError(f'Domain enumeration must be a callable returning an iterable, not {type(enumeration)}')
        self._enumerate = enumeration
        self._contains = contains
        self._finite = finite
        self.search_bound = search_bound
        self.label = label

    @property
    def is_finite(self) -> bool:
        return self._finite

    def __iter__(self) -> Iterator[ElementT]:
        return iter(self._enumerate())

    def __contains__(self, element : Any) -> bool:
        if self._contains is not None:
            return self._contains(element)

        if not (self.is_finite or (self.search_bound is not None)):
            LOGGER.warning(f'Testing membership in {self!r} by unbounded enumeration; this will not terminate for absent elements')
        return any(element == member for member in bounded(self, self.search_bound))

    def materialize(self, limit : Optional[int]=None) -> FiniteDomain[ElementT]:
        '''
        Collect the domain (or its first "limit" elements) into a FiniteDomain
        Refuses to materialize a domain not known to be finite without an explicit limit
        '''
        if (limit is None) and not self.is_finite:
            raise ValueError(f'Refusing to eagerly materialize potentially infinite domain {self!r}; supply a limit')
        return FiniteDomain(islice(self, limit), label=self.label)


EMPTY : FiniteDomain = FiniteDomain((), label='∅')

def as_domain(collection : Any, label : str='') -> Domain:
    '''Interpret a Domain, a finite collection, or a zero-argument enumeration factory as a Domain'''
    if isinstance(collection, Domain):
        return collection
    elif callable(collection):
        return EnumerableDomain(collection, label=label)
    elif isinstance(collection, Iterable):
        return FiniteDomain(collection, label=label)
    else:
        raise TypeError(f'Cannot interpret object of type {type(collection)} as a Domain')
