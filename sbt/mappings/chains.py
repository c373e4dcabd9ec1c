'''
Chain decomposition of a pair of opposing injections, for inspecting (and depicting) how a constructed bijection
arises: following f and g alternately from any element traces out a chain, and which kind of chain an element of A
lies on determines whether the bijection agrees with f there or inverts g
'''

__author__ = 'Timotej Bernat'
__email__ = 'timotej.bernat@colorado.edu'

import logging
LOGGER = logging.getLogger(__name__)

from typing import (
    Callable,
    Generator,
    Hashable,
    Iterable,
    Literal,
    Optional,
    TypeAlias,
)
from enum import Enum

from numpy import ndarray
import networkx as nx
from matplotlib.axes import Axes

from .choice import ChoiceInverse, PreimageSearchExhausted
from .partition import DEFAULT_MAX_DEPTH


Side : TypeAlias = Literal['A', 'B']
ChainNode : TypeAlias = tuple[Side, Hashable] # elements tagged by the domain they belong to, as A and B may share elements
GraphLayout : TypeAlias = Callable[[nx.Graph], dict[Hashable, ndarray]]

SIDE_COLORS : dict[Side, str] = {
    'A' : 'tab:blue',
    'B' : 'tab:orange',
}

class ChainKind(Enum):
    '''The kinds of chains traced out by alternately applying a pair of opposing injections'''
    A_STOPPER = 'a_stopper' # begins at an element of A which g never reaches; its A-elements form the partition union
    B_STOPPER = 'b_stopper' # begins at an element of B which f never reaches
    CYCLE = 'cycle' # closes back on itself
    UNRESOLVED = 'unresolved' # origin lies beyond what has been explored (e.g. an infinite ancestry)


class ChainGraph(nx.DiGraph):
    '''
    A directed graph over the (tagged) elements of A and B, with an edge a -> f(a) for each explored element a of A
    and an edge b -> g(b) for each explored element b of B

    Since f and g are injective, every node has at most one successor and one predecessor,
    so weakly-connected components are exactly the chains of the Schroeder-Bernstein decomposition
    '''
    @classmethod
    def from_injections(
        cls,
        f : Callable[[Hashable], Hashable],
        g : Callable[[Hashable], Hashable],
        domain_elements : Iterable[Hashable],
        codomain_elements : Iterable[Hashable],
        f_inverse : Optional[ChoiceInverse]=None,
        g_inverse : Optional[ChoiceInverse]=None,
        max_depth : int=DEFAULT_MAX_DEPTH,
    ) -> 'ChainGraph':
        '''
        Build the chain graph over (samples of) a domain and codomain

        If preimage lookups are provided, the ancestry of each sampled element is traced backwards
        (up to "max_depth" steps) and stopping points are confirmed by the lookups;
        if not, the samples provided are taken to be the ENTIRE domain and codomain,
        so that any element without a predecessor in the graph is deemed a stopping point
        '''
        graph = cls()
        graph.graph['complete'] = (f_inverse is None) and (g_inverse is None)

        for a in domain_elements:
            graph.add_edge(('A', a), ('B', f(a)))
        for b in codomain_elements:
            graph.add_edge(('B', b), ('A', g(b)))
        for node in graph.nodes:
            graph.nodes[node]['side'] = node[0]

        if not graph.graph['complete']:
            lookups = {'A' : g_inverse, 'B' : f_inverse} # preimages of elements of A lie in B, and vice versa
            for node in list(graph.nodes):
                graph._trace_ancestry(node, lookups, max_depth=max_depth)

        return graph

    def _trace_ancestry(
        self,
        node : ChainNode,
        lookups : dict[Side, Optional[ChoiceInverse]],
        max_depth : int,
    ) -> None:
        '''Extend the graph backwards from a node, marking confirmed stopping points along the way'''
        for _ in range(max_depth):
            if self.in_degree(node) > 0:
                return # ancestry already explored from here

            side, element = node
            if (lookup := lookups[side]) is None:
                return

            try:
                parent = lookup.find(element)
            except PreimageSearchExhausted:
                return # origin left unresolved

            if parent is None:
                self.nodes[node]['stopper'] = True
                return

            parent_node = ('B' if side == 'A' else 'A', parent)
            self.add_edge(parent_node, node)
            self.nodes[parent_node]['side'] = parent_node[0]
            node = parent_node

    # chain properties
    def is_stopper(self, node : ChainNode) -> bool:
        '''Whether a node is known to have no preimage at all'''
        if self.in_degree(node) > 0:
            return False
        return self.graph.get('complete', False) or self.nodes[node].get('stopper', False)

    def origin(self, node : ChainNode) -> tuple[ChainKind, Optional[ChainNode]]:
        '''Follow a node's ancestry back to the start of its chain, returning the kind of chain and its first node (if any)'''
        current, visited = node, {node}
        while True:
            predecessors = list(self.predecessors(current))
            if not predecessors:
                if not self.is_stopper(current):
                    return ChainKind.UNRESOLVED, None
                return (ChainKind.A_STOPPER if current[0] == 'A' else ChainKind.B_STOPPER), current

            if len(predecessors) > 1:
                raise ValueError(f'Node {current!r} has multiple predecessors {predecessors!r}; f or g is not injective')

            current = predecessors[0]
            if current in visited:
                return ChainKind.CYCLE, None
            visited.add(current)

    def classify(self, node : ChainNode) -> ChainKind:
        '''The kind of chain a node lies on'''
        kind, _ = self.origin(node)
        return kind

    @property
    def chains(self) -> Generator['ChainGraph', None, None]:
        '''Generates all disconnected chains in the graph sequentially'''
        for cc_nodes in nx.weakly_connected_components(self):
            yield ChainGraph(self.subgraph(cc_nodes))

    @property
    def num_chains(self) -> int:
        '''The number of disconnected chains represented within the graph'''
        return nx.number_weakly_connected_components(self)

    def domain_nodes_of_kind(self, kind : ChainKind) -> frozenset[Hashable]:
        '''Elements of A lying on chains of the given kind'''
        return frozenset(
            element
                for (side, element) in self.nodes
                    if (side == 'A') and (self.classify((side, element)) == kind)
        )

    # depiction
    def __repr__(self) -> str:
        return f'{self.__class__.__name__}(num_nodes={self.number_of_nodes()}, num_chains={self.num_chains})'

    def visualize(
        self,
        ax : Optional[Axes]=None,
        layout : GraphLayout=nx.circular_layout,
        **draw_kwargs,
    ) -> None:
        '''
        Draw the chain graph, coloring elements of A and B distinctly
        '''
        if 'with_labels' not in draw_kwargs:
            draw_kwargs['with_labels'] = True
        if 'node_color' not in draw_kwargs:
            draw_kwargs['node_color'] = [SIDE_COLORS[side] for side, _ in self.nodes]

        nx.draw(
            self,
            ax=ax,
            pos=layout(self),
            labels={node : str(node[1]) for node in self.nodes},
            **draw_kwargs,
        )
