'''Builder realizing the Schroeder-Bernstein construction of a bijection from a pair of opposing injections'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

import logging
LOGGER = logging.getLogger(__name__)

from typing import (
    Callable,
    Hashable,
    Optional,
    TypeVar,
    Union,
)
X = TypeVar('X', bound=Hashable)
Y = TypeVar('Y', bound=Hashable)

from .base import BijectionBuilder
from ..mappings.domains import Domain, EmptyDomainError
from ..mappings.choice import ChoiceInverse, ExplicitInverse, MemoizedInverse, PreimageSearchExhausted
from ..mappings.partition import PartitionSequence, PartitionUnion, SearchSettings
from ..mappings.bijection import Bijection
from ..mappings.correctness import NotBijectiveError


DEFAULT_INVERSE_SEARCH_BOUND : int = 1024
InverseLike = Union[ChoiceInverse, Callable[[Hashable], Optional[Hashable]]]

def make_inverse(
    func : Callable[[X], Y],
    source : Domain[X],
    inverse : Optional[InverseLike]=None,
    search_bound : Optional[int]=None,
) -> ChoiceInverse[X, Y]:
    '''
    Produce a preimage lookup for "func", searching over its domain "source"

    Accepts an existing ChoiceInverse (returned as-is), a partial inverse function
    (returning None outside the image of "func"), or nothing, in which case preimages are found
    by memoized search - capped at "search_bound" elements of the source, which defaults to
    DEFAULT_INVERSE_SEARCH_BOUND when the source is not known to be finite
    '''
    if isinstance(inverse, ChoiceInverse):
        return inverse
    elif inverse is not None:
        return ExplicitInverse(func, source, inverse=inverse)

    if (search_bound is None) and not source.is_finite:
        LOGGER.warning(
            f'No explicit inverse supplied for mapping out of infinite domain {source!r}; '
            f'preimages will be sought among its first {DEFAULT_INVERSE_SEARCH_BOUND} elements only'
        )
        search_bound = DEFAULT_INVERSE_SEARCH_BOUND
    return MemoizedInverse(func, source, search_bound=search_bound)

class SchroederBernsteinBuilder(BijectionBuilder):
    '''
    Constructs a bijection h : A -> B from injections f : A -> B and g : B -> A by setting
        h(x) = f(x)       if x lies in the union U of the partition sequence of A
        h(x) = g^-1(x)    otherwise

    Off the union every element has a genuine preimage under g (anything g misses is in the first term of the sequence),
    so the fallback of the choice inverse is never needed; reaching it indicates a violated precondition
    (or an approximated union membership), which raises NotBijectiveError under "strict" and is logged otherwise

    Parameters
    ----------
    settings : SearchSettings, optional
        How membership in the partition union is decided
    f_inverse : ChoiceInverse or Callable, optional
        Preimage lookup for f; memoized search over the domain if not provided
    g_inverse : ChoiceInverse or Callable, optional
        Preimage lookup for g; memoized search over the codomain if not provided
    search_bound : int, optional
        Cap on the number of elements searched by default preimage lookups
    strict : bool, default False
        Whether to raise (rather than log) when the fallback of a choice inverse is reached
    '''
    def __init__(
        self,
        settings : Optional[SearchSettings]=None,
        f_inverse : Optional[InverseLike]=None,
        g_inverse : Optional[InverseLike]=None,
        search_bound : Optional[int]=None,
        strict : bool=False,
    ) -> None:
        self.settings = settings if (settings is not None) else SearchSettings()
        self.f_inverse = f_inverse
        self.g_inverse = g_inverse
        self.search_bound = search_bound
        self.strict = strict

    def check_preconditions(
        self,
        f : Callable[[X], Y],
        g : Callable[[Y], X],
        domain : Domain[X],
        codomain : Domain[Y],
    ) -> None:
        if not (callable(f) and callable(g)):
            raise TypeError(f'Injections must be callable, not {type(f)} and {type(g)}')
        if not codomain.is_inhabited: # the fallback of the choice inverse for g needs some element of B to fall back on
            raise EmptyDomainError(f'Schroeder-Bernstein construction requires an inhabited codomain, but {codomain!r} is empty')

    def _invert(self, choice : ChoiceInverse, element : Hashable, side : str) -> Hashable:
        '''Preimage of an element which ought to have one, falling back on an arbitrary element when none is found'''
        try:
            if (preimage := choice.find(element)) is not None:
                return preimage
            message = f'{element!r} unexpectedly has no preimage on the {side}; f and g may not both be injective'
        except PreimageSearchExhausted as err:
            message = f'Preimage of {element!r} on the {side} is beyond the reach of a capped search ({err}); partition membership is approximate'

        if self.strict:
            raise NotBijectiveError(message)
        LOGGER.warning(message)

        return choice.fallback()

    def _build(
        self,
        f : Callable[[X], Y],
        g : Callable[[Y], X],
        domain : Domain[X],
        codomain : Domain[Y],
    ) -> Bijection[X, Y]:
        f_inverse = make_inverse(f, domain, inverse=self.f_inverse, search_bound=self.search_bound)
        g_inverse = make_inverse(g, codomain, inverse=self.g_inverse, search_bound=self.search_bound)
        union = PartitionUnion(
            PartitionSequence(f, g, domain, codomain, f_inverse=f_inverse, g_inverse=g_inverse),
            settings=self.settings,
        )

        def forward(x : X) -> Y:
            if x in union:
                return f(x)
            return self._invert(g_inverse, x, side='codomain')

        def backward(y : Y) -> X:
            if (x := g(y)) not in union:
                return x
            # g(y) in U must lie in some term S(n+1) = g(f(S(n))), so y = f(a) for some a in S(n)
            return self._invert(f_inverse, y, side='domain')

        return Bijection(
            forward=forward,
            backward=backward,
            f=f,
            g=g,
            domain=domain,
            codomain=codomain,
            partition=union,
        )
