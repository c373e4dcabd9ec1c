'''
Executable checks of the properties which make a constructed mapping a bijection,
following the case analysis by which each property is established for the Schroeder-Bernstein construction
'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

import logging
LOGGER = logging.getLogger(__name__)

from typing import (
    TYPE_CHECKING,
    Any,
    Hashable,
    Iterable,
    Optional,
)
if TYPE_CHECKING:
    from .bijection import Bijection

from enum import Enum
from dataclasses import dataclass, field

from .choice import PreimageSearchExhausted
from .partition import PartitionUnion
from ..sbutils.setutils import distinct_pairs


# Custom Exceptions
class NotBijectiveError(Exception):
    '''Raised when a mapping which ought to be a bijection is found not to be one'''
    pass

# Case analysis
class CollisionCase(Enum):
    '''Which side(s) of the partition a pair of elements with coincident images fall on'''
    BOTH_IN = 'both_in' # both in the union, where the bijection agrees with f
    BOTH_OUT = 'both_out' # both outside the union, where the bijection inverts g
    MIXED = 'mixed' # one on either side

def collision_case(union : PartitionUnion, x1 : Hashable, x2 : Hashable) -> CollisionCase:
    '''Classify a pair of elements by their membership in the partition union'''
    in1, in2 = union.contains(x1), union.contains(x2)
    if in1 and in2:
        return CollisionCase.BOTH_IN
    elif not (in1 or in2):
        return CollisionCase.BOTH_OUT
    return CollisionCase.MIXED

def refute_mixed_collision(bijection : 'Bijection', x_in : Hashable, x_out : Hashable) -> Optional[str]:
    '''
    Attempt to rule out a collision h(x_in) == h(x_out) between an element of the union and one outside of it

    If x_in lies in the n-th term of the partition sequence, then h(x_in) = f(x_in), and (since g inverts h off the union)
    x_out = g(h(x_out)) = g(f(x_in)), placing x_out in the (n+1)-th term and therefore IN the union - a contradiction

    Callers invoke this for both orderings of a pair, so that only one copy of the argument exists;
    returns None when there is no collision to explain (or the ordering is not the relevant one),
    and otherwise a description of which step of the argument failed
    '''
    union = bijection.partition
    if not (union.contains(x_in) and not union.contains(x_out)):
        return None # vacuous for this ordering

    n = union.index_of(x_in)
    if bijection(x_in) != bijection(x_out):
        return None

    if (reentry := bijection.g(bijection.f(x_in))) != x_out:
        return f'g(f({x_in!r})) = {reentry!r} != {x_out!r}; g does not invert h at {x_out!r} (is g injective?)'

    try:
        in_next_term = union.sequence.contains(x_out, n + 1)
    except PreimageSearchExhausted as err:
        return f'membership of {x_out!r} in partition term {n + 1} cannot be settled by capped preimage lookups ({err})'

    if in_next_term:
        return f'{x_out!r} lies in partition term {n + 1}, yet was classified as {union.witness(x_out).reason.name}'

    return f'{x_out!r} = g(f({x_in!r})) is not in partition term {n + 1} despite {x_in!r} lying in term {n}'

# Reports
@dataclass
class BijectionReport:
    '''Outcome of checking bijectivity of a mapping over finite samples of its domain and codomain'''
    domain_sample : tuple = field(default_factory=tuple)
    codomain_sample : tuple = field(default_factory=tuple)
    collisions : list[tuple[Any, Any, CollisionCase, str]] = field(default_factory=list)
    unattained : list[Any] = field(default_factory=list)
    right_inverse_failures : list[Any] = field(default_factory=list)
    unstable : list[Any] = field(default_factory=list)
    approximate : list[Any] = field(default_factory=list) # elements whose membership was decided by an exhausted search

    @property
    def is_injective(self) -> bool:
        return not self.collisions

    @property
    def is_surjective(self) -> bool:
        return not self.unattained

    @property
    def is_bijective(self) -> bool:
        return self.is_injective and self.is_surjective and not (self.right_inverse_failures or self.unstable)

    def summary(self) -> str:
        '''Human-readable account of any failures found'''
        if self.is_bijective:
            return f'Bijective over {len(self.domain_sample)} domain and {len(self.codomain_sample)} codomain elements sampled'

        lines = []
        for x1, x2, case, reason in self.collisions:
            lines.append(f'Collision ({case.name}) between {x1!r} and {x2!r}: {reason}')
        if self.unattained:
            lines.append(f'No preimage found for {self.unattained!r}')
        if self.right_inverse_failures:
            lines.append(f'g(h(x)) != x off the partition union for {self.right_inverse_failures!r}')
        if self.unstable:
            lines.append(f'Inconsistent partition membership for {self.unstable!r}')

        return '\n'.join(lines)

# Property checks
def check_injectivity(bijection : 'Bijection', domain_sample : Iterable[Hashable], report : BijectionReport) -> None:
    '''Record every pair of distinct sampled elements sharing an image, along with an explanation of the collision'''
    for x1, x2 in distinct_pairs(domain_sample):
        if bijection(x1) != bijection(x2):
            continue

        if bijection.partition is None:
            report.collisions.append((x1, x2, CollisionCase.BOTH_OUT, 'mapping has no partition'))
            continue

        case = collision_case(bijection.partition, x1, x2)
        if case == CollisionCase.BOTH_IN:
            reason = f'f({x1!r}) == f({x2!r}); f is not injective'
        elif case == CollisionCase.BOTH_OUT:
            reason = f'g(h(x)) cannot return both {x1!r} and {x2!r}; g does not invert h (is g injective?)'
        else:
            reason = refute_mixed_collision(bijection, x1, x2) or refute_mixed_collision(bijection, x2, x1)
        report.collisions.append((x1, x2, case, reason))

def check_surjectivity(
    bijection : 'Bijection',
    codomain_sample : Iterable[Hashable],
    report : BijectionReport,
    domain_sample : Optional[Iterable[Hashable]]=None,
) -> None:
    '''
    Record every sampled element of the codomain which is not attained

    Candidate preimages are those given by the inverse of the construction
    (f^-1(y) when g(y) lies in the union, g(y) otherwise), falling back to
    an exhaustive search over the domain sample, if one is provided
    '''
    domain_sample = tuple(domain_sample) if (domain_sample is not None) else ()
    for y in codomain_sample:
        if bijection.partition is not None:
            membership = bijection.partition.witness(bijection.g(y))
            if membership.is_member and membership.index == 0: # S(0) excludes every image of g
                report.unstable.append(bijection.g(y))

        try:
            if bijection(bijection.inverse(y)) == y:
                continue
        except NotBijectiveError as err:
            LOGGER.debug(f'Constructive inverse failed for {y!r}: {err}')

        if not any(bijection(x) == y for x in domain_sample):
            report.unattained.append(y)

def check_right_inverse(bijection : 'Bijection', domain_sample : Iterable[Hashable], report : BijectionReport) -> None:
    '''Record every sampled element outside of the union at which g fails to undo the constructed mapping'''
    if bijection.partition is None:
        return

    for x in domain_sample:
        if (x not in bijection.partition) and (bijection.g(bijection(x)) != x):
            report.right_inverse_failures.append(x)

def check_membership_stability(union : PartitionUnion, domain_sample : Iterable[Hashable], report : BijectionReport) -> None:
    '''
    Record every sampled element whose union membership is inconsistent, namely when
    re-querying gives a different answer, or the witnessing term index doesn't actually contain the element,
    or an element classified as entering the union at a later term is also found in the initial term
    '''
    for x in domain_sample:
        membership = union.witness(x)
        if not membership.is_exact:
            report.approximate.append(x)

        if union.witness(x) != membership:
            report.unstable.append(x)
        elif membership.is_member and not (
            union.sequence.contains(x, membership.index)
            and ((membership.index == 0) or not union.sequence.contains(x, 0))
        ):
            report.unstable.append(x)

def certify(
    bijection : 'Bijection',
    domain_sample : Iterable[Hashable],
    codomain_sample : Iterable[Hashable],
) -> BijectionReport:
    '''Check injectivity, surjectivity, the right-inverse property, and membership stability over finite samples'''
    domain_sample, codomain_sample = tuple(domain_sample), tuple(codomain_sample)
    report = BijectionReport(domain_sample=domain_sample, codomain_sample=codomain_sample)

    check_injectivity(bijection, domain_sample, report)
    check_surjectivity(bijection, codomain_sample, report, domain_sample=domain_sample)
    check_right_inverse(bijection, domain_sample, report)
    if bijection.partition is not None:
        check_membership_stability(bijection.partition, domain_sample, report)

    if report.approximate:
        LOGGER.warning(f'Partition membership of {len(report.approximate)} sampled element(s) decided by exhausted search; results are approximate')
    LOGGER.info(report.summary())

    return report
