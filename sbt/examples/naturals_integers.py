'''
An explicit bijection between the natural numbers and the integers,
constructed from the inclusion of the naturals into the integers and an injective "folding" of the integers into the naturals
'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

import logging
LOGGER = logging.getLogger(__name__)

import argparse
from typing import Any, Optional, Sequence

from ..sbutils.iteration import naturals, integers
from ..mappings.domains import EnumerableDomain
from ..mappings.partition import SearchSettings, DEFAULT_MAX_DEPTH
from ..mappings.bijection import Bijection
from ..mappings.construct import construct_bijection


def is_integer(value : Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)

def is_natural(value : Any) -> bool:
    return is_integer(value) and (value >= 0)

NATURALS = EnumerableDomain(naturals, contains=is_natural, label='N')
INTEGERS = EnumerableDomain(integers, contains=is_integer, label='Z')

# injections
def embed(n : int) -> int:
    '''Inclusion of the naturals into the integers'''
    return n

def fold(z : int) -> int:
    '''
    Injection of the integers into the naturals, sending non-negative integers to multiples of 4
    and negative integers to naturals which are 2 mod 4 (odd naturals are never reached)
    '''
    if z >= 0:
        return 4*z
    return -4*z - 2

# partial inverses, which return None outside the image of their respective injection
def unembed(z : int) -> Optional[int]:
    return z if z >= 0 else None

def unfold(n : int) -> Optional[int]:
    if n % 4 == 0:
        return n // 4
    elif n % 4 == 2:
        return -(n + 2) // 4
    return None

def naturals_integers_bijection(max_depth : int=DEFAULT_MAX_DEPTH, **kwargs : Any) -> Bijection[int, int]:
    '''Construct a bijection N -> Z from the inclusion and folding injections'''
    return construct_bijection(
        embed,
        fold,
        NATURALS,
        INTEGERS,
        f_inverse=unembed,
        g_inverse=unfold,
        settings=SearchSettings(max_depth=max_depth),
        **kwargs,
    )

# command-line interface
def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Tabulate an explicit bijection between the natural numbers and the integers')
    parser.add_argument('-n', '--num-values', type=int, default=16, help='Number of naturals (and integers) to tabulate')
    parser.add_argument('-d', '--max-depth', type=int, default=DEFAULT_MAX_DEPTH, help='Maximum depth of partition membership searches')
    parser.add_argument('--inverse', action='store_true', help='Also tabulate the inverse bijection over the first few integers')
    parser.add_argument('--certify', action='store_true', help='Check bijectivity over the tabulated values')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    return parser

def main(argv : Optional[Sequence[str]]=None) -> int:
    args = create_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    if args.num_values < 0:
        LOGGER.error(f'Number of values to tabulate must be non-negative, not {args.num_values}')
        return 1

    bijection = naturals_integers_bijection(max_depth=args.max_depth)
    print(f'{"n":>8} {"h(n)":>8}  side')
    for n, z in bijection.table(NATURALS.sample(args.num_values)).items():
        print(f'{n:>8} {z:>8}  {"f" if bijection.agrees_with_f(n) else "g^-1"}')

    if args.inverse:
        print(f'\n{"z":>8} {"h^-1(z)":>8}')
        for z in INTEGERS.sample(args.num_values):
            print(f'{z:>8} {bijection.inverse(z):>8}')

    if args.certify:
        report = bijection.certify(sample_size=args.num_values)
        print(f'\n{report.summary()}')
        if not report.is_bijective:
            return 1

    return 0

if __name__ == '__main__':
    raise SystemExit(main())
