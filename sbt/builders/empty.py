'''Builder for the (unique) bijection between two empty domains'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

from typing import Any, Callable, Hashable, NoReturn, TypeVar
X = TypeVar('X', bound=Hashable)
Y = TypeVar('Y', bound=Hashable)

from .base import BijectionBuilder
from ..mappings.domains import Domain, EmptyDomainError
from ..mappings.bijection import Bijection


def empty_function(element : Any) -> NoReturn:
    '''The unique function out of an empty domain; there is nothing it can ever be validly applied to'''
    raise EmptyDomainError(f'The empty function has no value at {element!r}, as its domain has no elements')

class EmptyBijectionBuilder(BijectionBuilder):
    '''
    Produces the empty function between two uninhabited domains, which is trivially total,
    and vacuously both injective and surjective; requires no choice of preimages whatsoever
    '''
    def __init__(self) -> None:
        pass

    def check_preconditions(
        self,
        f : Callable[[X], Y],
        g : Callable[[Y], X],
        domain : Domain[X],
        codomain : Domain[Y],
    ) -> None:
        for dom in (domain, codomain):
            if dom.is_inhabited:
                raise EmptyDomainError(f'Empty bijection requires both domains to be empty, but {dom!r} contains {dom.some_element()!r}')

    def _build(
        self,
        f : Callable[[X], Y],
        g : Callable[[Y], X],
        domain : Domain[X],
        codomain : Domain[Y],
    ) -> Bijection[X, Y]:
        return Bijection(
            forward=empty_function,
            backward=empty_function,
            f=f,
            g=g,
            domain=domain,
            codomain=codomain,
            partition=None,
        )
