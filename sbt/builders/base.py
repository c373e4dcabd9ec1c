'''Generic, base contract for all bijection builders'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

import logging
LOGGER = logging.getLogger(__name__)

from typing import Callable, Hashable, TypeVar
X = TypeVar('X', bound=Hashable)
Y = TypeVar('Y', bound=Hashable)

from abc import ABC, abstractmethod

from ..mappings.domains import Domain
from ..mappings.bijection import Bijection


class BijectionBuilder(ABC):
    '''
    Abstract base class for all bijection builders

    Defines interface for assembling a Bijection between two domains
    out of a pair of injections f : A -> B and g : B -> A
    '''
    @abstractmethod
    def __init__(self) -> None:
        '''
        Implementation-specific parameters (e.g. search depths, preimage lookups, etc.) should be bound here
        '''
        ...

    def check_preconditions(
        self,
        f : Callable[[X], Y],
        g : Callable[[Y], X],
        domain : Domain[X],
        codomain : Domain[Y],
    ) -> None:
        # DEV: deliberately NOT abstract, as some builders may opt to simply not check anything (establish this as the default behavior)
        '''
        Check that the given injections and domains meet any preconditions for this builder
        E.g. a builder which relies on choosing elements of the codomain might check that the codomain is inhabited

        Implementation provided (if any) should raise detailed Exceptions if
        preconditions are not met and pass without Exception/return otherwise
        '''
        ...

    @abstractmethod
    def _build(
        self,
        f : Callable[[X], Y],
        g : Callable[[Y], X],
        domain : Domain[X],
        codomain : Domain[Y],
    ) -> Bijection[X, Y]:
        '''Implement assembly of the bijection here'''
        ...

    def build(
        self,
        f : Callable[[X], Y],
        g : Callable[[Y], X],
        domain : Domain[X],
        codomain : Domain[Y],
    ) -> Bijection[X, Y]:
        '''
        Accepts a pair of injections (f from the domain into the codomain, g from the codomain back into the domain)
        and should return a Bijection between the domain and codomain
        '''
        self.check_preconditions(f, g, domain, codomain)
        bijection = self._build(f, g, domain, codomain)
        LOGGER.info(f'Constructed bijection {domain!r} -> {codomain!r} via {self.__class__.__name__}')

        return bijection
