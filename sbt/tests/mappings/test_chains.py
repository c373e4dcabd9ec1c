'''Unit tests for chain decompositions of opposing injections'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

import pytest

import matplotlib
matplotlib.use('Agg') # headless backend, to allow drawing without a display
import matplotlib.pyplot as plt

from sbt.mappings.chains import ChainGraph, ChainKind
from sbt.mappings.choice import ExplicitInverse, MemoizedInverse
from sbt.mappings.partition import PartitionSequence, PartitionUnion
from sbt.examples.naturals_integers import NATURALS, INTEGERS, embed, fold, unembed, unfold
from sbt.examples.finite import DIGITS, SHIFTED_DIGITS, shift_up, shift_down, shifted_digits_bijection


def naturals_integers_chains() -> ChainGraph:
    return ChainGraph.from_injections(
        embed,
        fold,
        domain_elements=range(20),
        codomain_elements=range(-5, 6),
        f_inverse=ExplicitInverse(embed, NATURALS, inverse=unembed),
        g_inverse=ExplicitInverse(fold, INTEGERS, inverse=unfold),
    )

def naturals_integers_sequence() -> PartitionSequence:
    return PartitionSequence(
        embed,
        fold,
        NATURALS,
        INTEGERS,
        f_inverse=ExplicitInverse(embed, NATURALS, inverse=unembed),
        g_inverse=ExplicitInverse(fold, INTEGERS, inverse=unfold),
    )

def test_finite_chains_are_cycles() -> None:
    '''Test that opposing injections between finite domains decompose entirely into cycles'''
    graph = ChainGraph.from_injections(shift_up, shift_down, DIGITS, SHIFTED_DIGITS)
    assert graph.graph['complete']
    assert graph.num_chains == 4
    assert all(graph.classify(node) == ChainKind.CYCLE for node in graph.nodes)

def test_finite_chains_agree_with_union() -> None:
    '''Test that the A-elements on A-stopping chains are exactly the partition union (here empty)'''
    graph = ChainGraph.from_injections(shift_up, shift_down, DIGITS, SHIFTED_DIGITS)
    bijection = shifted_digits_bijection()
    assert graph.domain_nodes_of_kind(ChainKind.A_STOPPER) == bijection.partition.closure() == frozenset()

@pytest.mark.parametrize(
    'node, expected_kind',
    [
        (('A', 1), ChainKind.A_STOPPER),
        (('A', 12), ChainKind.A_STOPPER),
        (('B', 3), ChainKind.A_STOPPER),
        (('A', 0), ChainKind.CYCLE),
        (('B', 0), ChainKind.CYCLE),
        (('A', 8), ChainKind.B_STOPPER),
        (('B', -1), ChainKind.B_STOPPER),
        (('B', -3), ChainKind.B_STOPPER),
    ]
)
def test_infinite_chain_classification(node : tuple, expected_kind : ChainKind) -> None:
    '''Test classification of chains over samples of infinite domains, with ancestries traced by preimage lookups'''
    assert naturals_integers_chains().classify(node) == expected_kind

def test_infinite_chains_agree_with_union() -> None:
    '''Test that chain classification and partition union membership coincide on sampled elements'''
    graph = naturals_integers_chains()
    union = PartitionUnion(naturals_integers_sequence())
    a_stoppers = graph.domain_nodes_of_kind(ChainKind.A_STOPPER)

    assert all((n in a_stoppers) == (n in union) for n in range(20))

def test_unresolved_without_lookups() -> None:
    '''Test that chains are left unresolved when the ancestry of a node cannot be traced'''
    graph = ChainGraph.from_injections(
        embed,
        fold,
        domain_elements=[16],
        codomain_elements=[],
        f_inverse=ExplicitInverse(embed, NATURALS, inverse=unembed),
        g_inverse=ExplicitInverse(fold, INTEGERS, inverse=unfold),
        max_depth=1,
    )
    assert graph.classify(('A', 16)) == ChainKind.UNRESOLVED

def test_unresolved_beyond_capped_lookups() -> None:
    '''Test that a stopping point is not confirmed by a capped lookup which ran out before settling it'''
    graph = ChainGraph.from_injections(
        embed,
        fold,
        domain_elements=[3],
        codomain_elements=[],
        f_inverse=MemoizedInverse(embed, NATURALS, search_bound=8),
        g_inverse=MemoizedInverse(fold, INTEGERS, search_bound=8),
    )
    assert graph.classify(('A', 3)) == ChainKind.UNRESOLVED

def test_chains_generator() -> None:
    '''Test that each chain is yielded as its own ChainGraph'''
    graph = ChainGraph.from_injections(shift_up, shift_down, DIGITS, SHIFTED_DIGITS)
    chains = list(graph.chains)
    assert len(chains) == 4 and all(isinstance(chain, ChainGraph) and chain.number_of_nodes() == 2 for chain in chains)

@pytest.mark.xfail(
    reason='Non-injective mappings produce nodes with multiple predecessors',
    raises=ValueError,
    strict=True,
)
def test_chain_non_injective() -> None:
    graph = ChainGraph.from_injections(lambda n : 0, lambda m : m, [0, 1], [0])
    graph.classify(('B', 0))

def test_visualize() -> None:
    '''Test that chain graphs can be drawn'''
    fig, ax = plt.subplots()
    naturals_integers_chains().visualize(ax=ax)
    plt.close(fig)
