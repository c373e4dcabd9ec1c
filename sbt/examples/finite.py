'''A small finite instance of the construction, in which the resulting bijection coincides with f'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

from typing import Any

from ..mappings.domains import FiniteDomain
from ..mappings.bijection import Bijection
from ..mappings.construct import construct_bijection


OFFSET : int = 10
DIGITS = FiniteDomain(range(4), label='A')
SHIFTED_DIGITS = FiniteDomain(range(OFFSET, OFFSET + 4), label='B')

def shift_up(n : int) -> int:
    '''Injection from A = {0, 1, 2, 3} into B'''
    return n + OFFSET

def shift_down(m : int) -> int:
    '''Injection from B = {10, 11, 12, 13} back into A'''
    return m - OFFSET

def shifted_digits_bijection(**kwargs : Any) -> Bijection[int, int]:
    '''Construct the bijection between A and B from the shift injections in either direction'''
    return construct_bijection(shift_up, shift_down, DIGITS, SHIFTED_DIGITS, **kwargs)
