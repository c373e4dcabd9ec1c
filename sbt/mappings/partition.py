'''
The recursive partition of a domain A underlying the Schroeder-Bernstein construction

Given injections f : A -> B and g : B -> A, the partition sequence is defined by
    S(0)   = A \\ g(B)       (elements of A which g never reaches)
    S(n+1) = g(f(S(n)))
and its union U = S(0) ∪ S(1) ∪ ... is the "f-side" of A, on which the constructed bijection agrees with f
'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

import logging
LOGGER = logging.getLogger(__name__)

from typing import (
    Callable,
    Generator,
    Hashable,
    Optional,
    TypeVar,
)
X = TypeVar('X', bound=Hashable)
Y = TypeVar('Y', bound=Hashable)

import time
from enum import Enum
from dataclasses import dataclass
from functools import cached_property
from itertools import count

from .domains import Domain
from .choice import ChoiceInverse, PreimageSearchExhausted
from ..sbutils.setutils import image


DEFAULT_MAX_DEPTH : int = 64

# Custom Exceptions
class MembershipSearchTimeout(Exception):
    '''Raised when a search for a partition index witnessing union membership runs past its allotted time'''
    pass

# Search configuration
class MembershipPolicy(Enum):
    '''How membership in the (possibly infinite) union of the partition sequence is decided'''
    AUTO = 'auto'
    CLOSURE = 'closure' # iterate the sequence to a fixpoint; exact, but only for finite domains
    BOUNDED_SEARCH = 'bounded' # search for a witness index up to a maximum depth; exhaustion counts as non-membership
    UNBOUNDED_SEARCH = 'unbounded' # search without limit; may not terminate on infinite domains

@dataclass(frozen=True)
class SearchSettings:
    '''Parameters governing how union membership is decided'''
    policy : MembershipPolicy = MembershipPolicy.AUTO
    max_depth : Optional[int] = DEFAULT_MAX_DEPTH
    timeout : Optional[float] = None # seconds

    def __post_init__(self) -> None:
        if not isinstance(self.policy, MembershipPolicy):
            raise TypeError(f'Membership policy must be a MembershipPolicy, not {type(self.policy)}')
        if (self.max_depth is not None) and (self.max_depth < 0):
            raise ValueError(f'Maximum search depth must be non-negative, not {self.max_depth}')
        if (self.timeout is not None) and (self.timeout <= 0):
            raise ValueError(f'Search timeout must be positive, not {self.timeout}')
        if (self.policy == MembershipPolicy.BOUNDED_SEARCH) and (self.max_depth is None):
            raise ValueError('Bounded membership search requires a maximum depth')

    def resolve_policy(self, domain : Domain, codomain : Domain) -> MembershipPolicy:
        '''Determine the concrete policy to use for a given pair of domains'''
        if self.policy != MembershipPolicy.AUTO:
            if (self.policy == MembershipPolicy.CLOSURE) and not (domain.is_finite and codomain.is_finite):
                raise ValueError('Fixpoint closure of the partition sequence is only possible over finite domains')
            return self.policy

        if domain.is_finite and codomain.is_finite:
            return MembershipPolicy.CLOSURE
        elif self.max_depth is None:
            return MembershipPolicy.UNBOUNDED_SEARCH
        return MembershipPolicy.BOUNDED_SEARCH

# Membership results
class MembershipReason(Enum):
    '''Why an element was or was not classified as belonging to the partition union'''
    WITNESS = 'witness' # belongs to some term of the sequence
    B_STOPPER = 'b_stopper' # ancestry leaves A through an element of B which f never reaches
    CYCLE = 'cycle' # ancestry loops back onto the element itself
    OUTSIDE_CLOSURE = 'outside_closure' # not reached by the fixpoint closure of the sequence
    EXHAUSTED = 'exhausted' # no witness found within the maximum search depth or the reach of capped lookups (an approximation)

@dataclass(frozen=True)
class Membership:
    '''The outcome of deciding membership of an element in the partition union'''
    element : Hashable
    reason : MembershipReason
    index : Optional[int] = None # index of the term of the sequence containing the element, if a member

    @property
    def is_member(self) -> bool:
        return self.reason == MembershipReason.WITNESS

    @property
    def is_exact(self) -> bool:
        '''Whether the outcome is certain, rather than a consequence of capping the search'''
        return self.reason != MembershipReason.EXHAUSTED

    def __bool__(self) -> bool:
        return self.is_member


class PartitionSequence:
    '''
    The sequence of subsets S(0), S(1), ... of a domain A induced by a pair of injections f : A -> B and g : B -> A

    Terms are never materialized unless explicitly requested (and only then for finite domains);
    membership is evaluated directly from the defining set-builder expression of each term

    Parameters
    ----------
    f : Callable[[X], Y]
        Injection from the domain into the codomain
    g : Callable[[Y], X]
        Injection from the codomain back into the domain
    domain : Domain[X]
        The domain A
    codomain : Domain[Y]
        The codomain B
    f_inverse : ChoiceInverse[X, Y]
        Preimage lookup for f (searching over A)
    g_inverse : ChoiceInverse[Y, X]
        Preimage lookup for g (searching over B)
    '''
    def __init__(
        self,
        f : Callable[[X], Y],
        g : Callable[[Y], X],
        domain : Domain[X],
        codomain : Domain[Y],
        f_inverse : ChoiceInverse[X, Y],
        g_inverse : ChoiceInverse[Y, X],
    ) -> None:
        self.f = f
        self.g = g
        self.domain = domain
        self.codomain = codomain
        self.f_inverse = f_inverse
        self.g_inverse = g_inverse

    def ancestor(self, x : X) -> Optional[X]:
        '''The unique element a of A with g(f(a)) == x, or None if there is no such element'''
        if (y := self.g_inverse.find(x)) is None:
            return None
        return self.f_inverse.find(y)

    def contains(self, x : X, n : int) -> bool:
        '''
        Whether x belongs to the n-th term of the sequence

        Raises PreimageSearchExhausted if a capped preimage lookup cannot settle membership,
        rather than mistaking an unfinished search for an element which g never reaches
        '''
        if n < 0:
            raise ValueError(f'Partition sequence is indexed by natural numbers, cannot access term {n}')

        # x ∈ S(k+1) iff x = g(f(a)) for some a ∈ S(k); by injectivity of g∘f, "a" can only be the ancestor of x
        for _ in range(n):
            if (x := self.ancestor(x)) is None:
                return False
        return not self.g_inverse.has_preimage(x) # x ∈ S(0) iff g never reaches x

    def members(self, n : int) -> Generator[X, None, None]:
        '''
        Generate the elements of the n-th term of the sequence, in order of the enumeration of the domain

        Lazy, and so safe to call on infinite domains, though generation will then proceed indefinitely
        Raises PreimageSearchExhausted upon reaching an element whose membership of S(0) a capped lookup cannot settle
        '''
        if n < 0:
            raise ValueError(f'Partition sequence is indexed by natural numbers, cannot access term {n}')

        if n == 0:
            yield from (x for x in self.domain if not self.g_inverse.has_preimage(x))
        else:
            yield from (self.g(self.f(a)) for a in self.members(n - 1))

    def terms(self) -> Generator[frozenset[X], None, None]:
        '''Generate the successive terms S(0), S(1), ... of the sequence as sets; never terminates'''
        if not self.domain.is_finite:
            raise ValueError(f'Cannot materialize the terms of the partition sequence over infinite domain {self.domain!r}')

        term = frozenset(self.members(0))
        while True:
            yield term
            term = image(self.g, image(self.f, term))


class PartitionUnion:
    '''
    The union of all terms of a PartitionSequence, i.e. the subset of A on which the constructed bijection agrees with f

    Over finite domains membership is decided exactly, by iterating the sequence until the accumulated union stops growing
    Over infinite domains membership is decided by searching for a term containing the element, in order of increasing index;
    this search cannot be guaranteed to terminate, and so is (by default) capped at a maximum depth beyond which an element
    is deemed NOT to be a member - a deliberate approximation of the true union, flagged as such in each Membership result
    '''
    def __init__(
        self,
        sequence : PartitionSequence,
        settings : Optional[SearchSettings]=None,
    ) -> None:
        if settings is None:
            settings = SearchSettings()
        self.sequence = sequence
        self.settings = settings
        self.policy = settings.resolve_policy(sequence.domain, sequence.codomain)
        self._memberships : dict[Hashable, Membership] = {}
        LOGGER.debug(f'Deciding partition union membership by {self.policy.name} policy')

    @cached_property
    def witness_indices(self) -> dict[X, int]:
        '''
        Mapping from each element of the (finite) union to the index of the first term containing it

        Computed by fixpoint-to-closure: terms are accumulated until one contributes no new elements,
        after which every subsequent term is guaranteed to already lie within the union
        '''
        if self.policy != MembershipPolicy.CLOSURE:
            raise ValueError(f'Union can only be enumerated under {MembershipPolicy.CLOSURE.name} policy, not {self.policy.name}')

        indices : dict[X, int] = {}
        for n, term in enumerate(self.sequence.terms()):
            novel = term.difference(indices.keys())
            if not novel:
                LOGGER.debug(f'Partition sequence closed after {n} terms, with {len(indices)} elements in union')
                break
            indices.update((x, n) for x in novel)

        return indices

    def closure(self) -> frozenset[X]:
        '''The (finite) union of all terms of the partition sequence'''
        return frozenset(self.witness_indices.keys())

    def _search(self, x : X) -> Membership:
        '''Search terms of the sequence in order of increasing index for one containing x'''
        max_depth = None if (self.policy == MembershipPolicy.UNBOUNDED_SEARCH) else self.settings.max_depth
        deadline = None if (self.settings.timeout is None) else time.monotonic() + self.settings.timeout

        # each step extends the ancestry of x by one application of (g∘f)^-1, so that
        # x ∈ S(n) exactly when its n-th ancestor exists and is not reached by g
        current = x
        for n in count():
            if (deadline is not None) and (time.monotonic() > deadline):
                raise MembershipSearchTimeout(f'No partition index for {x!r} determined within {self.settings.timeout}s (searched {n} terms)')

            try:
                if (y := self.sequence.g_inverse.find(current)) is None:
                    return Membership(x, MembershipReason.WITNESS, index=n)

                if (max_depth is not None) and (n >= max_depth):
                    LOGGER.debug(f'No partition index for {x!r} found within maximum depth {max_depth}; treating as non-member')
                    return Membership(x, MembershipReason.EXHAUSTED)

                current = self.sequence.f_inverse.find(y)
            except PreimageSearchExhausted as err:
                LOGGER.debug(f'Ancestry of {x!r} could not be traced past term {n} ({err}); treating as non-member')
                return Membership(x, MembershipReason.EXHAUSTED)

            if current is None:
                return Membership(x, MembershipReason.B_STOPPER)

            if current == x:
                return Membership(x, MembershipReason.CYCLE)

    def witness(self, x : X) -> Membership:
        '''Decide whether x belongs to the union, along with the index of the witnessing term (if any)'''
        if x in self._memberships:
            return self._memberships[x]

        if self.policy == MembershipPolicy.CLOSURE:
            if (index := self.witness_indices.get(x, None)) is not None:
                membership = Membership(x, MembershipReason.WITNESS, index=index)
            else:
                membership = Membership(x, MembershipReason.OUTSIDE_CLOSURE)
        else:
            membership = self._search(x)
        self._memberships[x] = membership

        return membership

    def contains(self, x : X) -> bool:
        return self.witness(x).is_member

    def __contains__(self, x : X) -> bool:
        return self.contains(x)

    def index_of(self, x : X) -> Optional[int]:
        '''Index of the term of the partition sequence containing x, or None if x lies outside of the union'''
        return self.witness(x).index

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(policy={self.policy.name}, max_depth={self.settings.max_depth})'
