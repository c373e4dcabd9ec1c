'''Tools for simplifying iteration over (possibly infinite) collections of items'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

from typing import (
    Generator,
    Iterable,
    Optional,
    TypeVar,
)
T = TypeVar('T')

from itertools import count, islice


def bounded(items : Iterable[T], limit : Optional[int]=None) -> Iterable[T]:
    '''Cap iteration over a collection at "limit" items; a limit of None leaves the collection unbounded'''
    if limit is None:
        return items
    if limit < 0:
        raise ValueError(f'Iteration limit must be non-negative, not {limit}')
    return islice(items, limit)

def naturals(start : int=0) -> Generator[int, None, None]:
    '''Generates the natural numbers (non-negative integers) in ascending order, indefinitely'''
    if start < 0:
        raise ValueError(f'Natural numbers begin at 0, cannot start from {start}')
    yield from count(start=start, step=1)

def integers() -> Generator[int, None, None]:
    '''
    Generates every integer exactly once, alternating in sign by increasing magnitude
    E.g. : integers() --> 0, 1, -1, 2, -2, 3, -3, ...
    '''
    yield 0
    for magnitude in count(start=1, step=1):
        yield magnitude
        yield -magnitude
