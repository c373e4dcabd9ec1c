'''Single entry point for constructing a bijection from a pair of opposing injections, whatever the (non-)emptiness of their domains'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

import logging
LOGGER = logging.getLogger(__name__)

from typing import (
    Any,
    Callable,
    Hashable,
    Optional,
    TypeVar,
)
X = TypeVar('X', bound=Hashable)
Y = TypeVar('Y', bound=Hashable)

from .domains import Domain, as_domain, EmptyDomainError
from .partition import SearchSettings
from .bijection import Bijection
from ..builders.base import BijectionBuilder
from ..builders.empty import EmptyBijectionBuilder
from ..builders.schroeder_bernstein import SchroederBernsteinBuilder, InverseLike


def select_builder(
    domain : Domain,
    codomain : Domain,
    settings : Optional[SearchSettings]=None,
    f_inverse : Optional[InverseLike]=None,
    g_inverse : Optional[InverseLike]=None,
    search_bound : Optional[int]=None,
    strict : bool=False,
) -> BijectionBuilder:
    '''
    Choose the builder appropriate to a pair of domains:
    * Inhabited codomain : the Schroeder-Bernstein construction, whose choice inverse can fall back on some element of the codomain
    * Empty codomain : the empty bijection, since an injection from the domain into an empty codomain forces the domain to be empty too
    '''
    if codomain.is_inhabited:
        return SchroederBernsteinBuilder(
            settings=settings,
            f_inverse=f_inverse,
            g_inverse=g_inverse,
            search_bound=search_bound,
            strict=strict,
        )

    if domain.is_inhabited: # f would have to send this element somewhere in the (empty) codomain
        raise EmptyDomainError(
            f'No mapping from {domain!r} into empty codomain {codomain!r} can exist, '
            f'since {domain.some_element()!r} would have no image; f cannot be an injection'
        )
    LOGGER.debug('Domain and codomain both empty; constructing empty bijection')

    return EmptyBijectionBuilder()

def construct_bijection(
    f : Callable[[X], Y],
    g : Callable[[Y], X],
    domain : Any,
    codomain : Any,
    *,
    f_inverse : Optional[InverseLike]=None,
    g_inverse : Optional[InverseLike]=None,
    settings : Optional[SearchSettings]=None,
    search_bound : Optional[int]=None,
    strict : bool=False,
) -> Bijection[X, Y]:
    '''
    Construct a bijection between two domains from an injection f : A -> B and an injection g : B -> A

    Parameters
    ----------
    f : Callable[[X], Y]
        Injection from the domain A into the codomain B
    g : Callable[[Y], X]
        Injection from the codomain B into the domain A
    domain : Domain, Iterable, or Callable
        The domain A; finite collections and enumeration factories are converted to Domains
    codomain : Domain, Iterable, or Callable
        The codomain B; finite collections and enumeration factories are converted to Domains
    f_inverse : ChoiceInverse or Callable, optional
        Preimage lookup for f, e.g. a partial inverse returning None outside the image of f
    g_inverse : ChoiceInverse or Callable, optional
        Preimage lookup for g, e.g. a partial inverse returning None outside the image of g
    settings : SearchSettings, optional
        How membership in the partition union is decided
        Defaults to fixpoint closure over finite domains and a depth-bounded search otherwise
    search_bound : int, optional
        Cap on the number of elements searched by default (memoized) preimage lookups
    strict : bool, default False
        Whether to raise NotBijectiveError upon evidence that f or g is not injective

    Returns
    -------
    bijection : Bijection
        The bijection h : A -> B, along with its inverse and means of certifying its bijectivity

    Raises
    ------
    EmptyDomainError
        If the codomain is empty while the domain is not, in which case f cannot exist
    '''
    domain = as_domain(domain, label='A')
    codomain = as_domain(codomain, label='B')
    builder = select_builder(
        domain,
        codomain,
        settings=settings,
        f_inverse=f_inverse,
        g_inverse=g_inverse,
        search_bound=search_bound,
        strict=strict,
    )

    return builder.build(f, g, domain, codomain)
