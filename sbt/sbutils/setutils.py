'''
Utilities related to generic set-theoretic operations,
including images, collisions, and checks on mappings between sets
'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

from typing import (
    Callable,
    Hashable,
    Iterable,
    Optional,
    TypeVar,
)
X = TypeVar('X', bound=Hashable)
Y = TypeVar('Y', bound=Hashable)

from itertools import combinations


def image(func : Callable[[X], Y], subset : Iterable[X]) -> frozenset[Y]:
    '''The set of outputs obtained by applying a function to every element of a (finite) subset'''
    return frozenset(func(x) for x in subset)

def find_collision(func : Callable[[X], Y], domain : Iterable[X]) -> Optional[tuple[X, X]]:
    '''
    Find a pair of distinct elements of a (finite) domain which are mapped to the same output,
    or return None if there is no such pair (i.e. if the function is injective on the domain)
    '''
    first_seen : dict[Y, X] = {}
    for x in domain:
        y = func(x)
        if (y in first_seen) and (first_seen[y] != x):
            return first_seen[y], x
        first_seen.setdefault(y, x)

    return None

def distinct_pairs(domain : Iterable[X]) -> Iterable[tuple[X, X]]:
    '''All unordered pairs of distinct elements drawn from a finite collection'''
    return combinations(frozenset(domain), 2)

def check_bijection(func : Callable[[X], Y], domain : Iterable[X], codomain : Iterable[Y]) -> None:
    '''
    Check that two finite collections of objects have been put into 1-to-1 correspondence with one another by a function
    Raises ValueError detailing the first violation found, and returns None otherwise
    '''
    domain, codomain = frozenset(domain), frozenset(codomain)
    if (collision := find_collision(func, domain)) is not None:
        x1, x2 = collision
        raise ValueError(f'Mapping is not injective: distinct elements {x1!r} and {x2!r} both map to {func(x1)!r}')

    outputs = image(func, domain)
    if (strays := outputs - codomain):
        raise ValueError(f'Mapping sends elements outside of the codomain, namely to {set(strays)!r}')

    if (missed := codomain - outputs):
        raise ValueError(f'Mapping is not surjective: elements {set(missed)!r} are never attained')
