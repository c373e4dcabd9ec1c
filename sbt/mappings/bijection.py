'''Descriptor for a constructed bijection, bundling the mapping with its inverse and the evidence of its bijectivity'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

import logging
LOGGER = logging.getLogger(__name__)

from typing import (
    Callable,
    Generic,
    Hashable,
    Iterable,
    Optional,
    TypeVar,
)
X = TypeVar('X', bound=Hashable)
Y = TypeVar('Y', bound=Hashable)

from .domains import Domain
from .partition import PartitionUnion
from .correctness import BijectionReport, NotBijectiveError, certify


DEFAULT_SAMPLE_SIZE : int = 32

class Bijection(Generic[X, Y]):
    '''
    A bijection h : A -> B constructed from a pair of injections f : A -> B and g : B -> A

    Parameters
    ----------
    forward : Callable[[X], Y]
        The bijection h itself
    backward : Callable[[Y], X]
        The two-sided inverse of h
    f : Callable[[X], Y]
        The injection from A into B from which h was constructed
    g : Callable[[Y], X]
        The injection from B into A from which h was constructed
    domain : Domain[X]
        The domain A
    codomain : Domain[Y]
        The codomain B
    partition : PartitionUnion, optional
        The subset of A on which h agrees with f
        None when no partition was needed (i.e. for the empty bijection)
    '''
    def __init__(
        self,
        forward : Callable[[X], Y],
        backward : Callable[[Y], X],
        f : Callable[[X], Y],
        g : Callable[[Y], X],
        domain : Domain[X],
        codomain : Domain[Y],
        partition : Optional[PartitionUnion]=None,
    ) -> None:
        self.forward = forward
        self.backward = backward
        self.f = f
        self.g = g
        self.domain = domain
        self.codomain = codomain
        self.partition = partition

    def __call__(self, x : X) -> Y:
        return self.forward(x)

    def inverse(self, y : Y) -> X:
        '''The unique element of the domain which is mapped onto y'''
        return self.backward(y)

    @property
    def is_empty(self) -> bool:
        '''Whether this is the empty bijection between two empty domains'''
        return self.partition is None

    def agrees_with_f(self, x : X) -> bool:
        '''Whether x lies on the "f-side" of the domain, where the bijection is given by f (rather than by inverting g)'''
        return (self.partition is not None) and (x in self.partition)

    def table(self, elements : Iterable[X]) -> dict[X, Y]:
        '''Tabulate the bijection over a finite collection of elements of the domain'''
        return {x : self(x) for x in elements}

    # evidence of bijectivity
    def _samples(
        self,
        domain_sample : Optional[Iterable[X]],
        codomain_sample : Optional[Iterable[Y]],
        sample_size : int,
    ) -> tuple[tuple[X, ...], tuple[Y, ...]]:
        '''Default to the entire (co)domain if finite, or else the first few enumerated elements'''
        if domain_sample is None:
            domain_sample = tuple(self.domain) if self.domain.is_finite else self.domain.sample(sample_size)
        if codomain_sample is None:
            codomain_sample = tuple(self.codomain) if self.codomain.is_finite else self.codomain.sample(sample_size)

        return tuple(domain_sample), tuple(codomain_sample)

    def certify(
        self,
        domain_sample : Optional[Iterable[X]]=None,
        codomain_sample : Optional[Iterable[Y]]=None,
        sample_size : int=DEFAULT_SAMPLE_SIZE,
    ) -> BijectionReport:
        '''
        Check that the mapping is injective and surjective (among other invariants of the construction) over samples of its domains

        By default, checks over the entirety of finite domains, and over the first "sample_size" elements of infinite ones
        '''
        return certify(self, *self._samples(domain_sample, codomain_sample, sample_size))

    def assert_bijective(
        self,
        domain_sample : Optional[Iterable[X]]=None,
        codomain_sample : Optional[Iterable[Y]]=None,
        sample_size : int=DEFAULT_SAMPLE_SIZE,
    ) -> None:
        '''Raise NotBijectiveError if the mapping is found not to be a bijection over the given samples'''
        report = self.certify(domain_sample, codomain_sample, sample_size=sample_size)
        if not report.is_bijective:
            raise NotBijectiveError(report.summary())

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self.domain!r} -> {self.codomain!r}, partition={self.partition!r})'
