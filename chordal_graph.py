"""
Graphs and chordal graphs

This module holds the undirected graph container consumed by the
triangulation algorithms, and the chordal-graph utilities used to check and
decompose their output.

High level flow:
1) Build a `Graph` from an edge list or a dense adjacency matrix.
2) Triangulate it (see `minimal_triangulator`) into a `ChordalGraph`.
3) Check chordality and list the maximal cliques through networkx.

Key terms
---------
Saturate
    Add every missing edge among a set of nodes (make it a clique).
Separator
    A frozenset of nodes whose removal disconnects the graph.
Clique
    A frozenset of pairwise adjacent nodes.

Notes
-----
- Adjacency is a dense boolean matrix of shape (N, N) with a zero diagonal.
- Node ids are the integers ``0 .. N-1``.
"""

from typing import FrozenSet, Iterable, List, Tuple

import networkx as nx
import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import connected_components

# -----------------------------------------------------------------------------
# Type aliases
# -----------------------------------------------------------------------------
Node = int
Edge = Tuple[int, int]
Clique = FrozenSet[int]
Separator = FrozenSet[int]


def format_frozenset(fs: Iterable[int]) -> str:
    """Convert a frozenset (or any iterable) to readable, sorted list format."""
    try:
        return str(sorted(int(x) for x in fs)) if fs else "[]"
    except (ValueError, TypeError):
        return str(sorted(list(fs))) if fs else "[]"


# =============================================================================
# Graph
# =============================================================================
class Graph:
    """Undirected simple graph over nodes ``0 .. n_nodes-1``."""

    def __init__(self, n_nodes: int = 0, edges: Iterable[Edge] = ()) -> None:
        self._adj = np.zeros((n_nodes, n_nodes), dtype=bool)
        for u, v in edges:
            self.add_edge(u, v)

    @classmethod
    def from_adjacency(cls, matrix) -> "Graph":
        """
        Build a graph from a square matrix; non-zero entries are edges.

        The diagonal is ignored and the pattern is symmetrised, so a
        triangular matrix is enough.
        """
        A = np.asarray(matrix) != 0
        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise ValueError(f"Adjacency matrix must be square, got shape {A.shape}")
        A = A | A.T
        np.fill_diagonal(A, False)
        g = cls(A.shape[0])
        g._adj = A
        return g

    def copy(self) -> "Graph":
        """Independent graph of the same class with the same edges."""
        g = type(self)(0)
        g._adj = self._adj.copy()
        return g

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------
    def number_of_nodes(self) -> int:
        return self._adj.shape[0]

    def number_of_edges(self) -> int:
        return int(np.count_nonzero(self._adj)) // 2

    def nodes(self) -> FrozenSet[Node]:
        return frozenset(range(self.number_of_nodes()))

    def neighbors(self, v: Node) -> FrozenSet[Node]:
        return frozenset(np.flatnonzero(self._adj[v]).tolist())

    def degree(self, v: Node) -> int:
        return int(np.count_nonzero(self._adj[v]))

    def neighbors_of_set(self, nodes: Iterable[Node]) -> FrozenSet[Node]:
        """Nodes outside `nodes` adjacent to at least one node of `nodes`."""
        idx = list(nodes)
        if not idx:
            return frozenset()
        mask = self._adj[idx].any(axis=0)
        mask[idx] = False
        return frozenset(np.flatnonzero(mask).tolist())

    def has_edge(self, u: Node, v: Node) -> bool:
        return bool(self._adj[u, v])

    def edges(self) -> List[Edge]:
        rows, cols = np.nonzero(np.triu(self._adj, k=1))
        return list(zip(rows.tolist(), cols.tolist()))

    @property
    def adjacency_matrix(self) -> np.ndarray:
        A = self._adj.copy()
        A.setflags(write=False)
        return A

    def components_excluding(self, removed: Iterable[Node]) -> List[FrozenSet[Node]]:
        """Connected components of the subgraph induced on all nodes but `removed`."""
        keep_mask = np.ones(self.number_of_nodes(), dtype=bool)
        keep_mask[list(removed)] = False
        kept = np.flatnonzero(keep_mask)
        if kept.size == 0:
            return []

        sub = csr_matrix(self._adj[np.ix_(kept, kept)])
        n_components, labels = connected_components(sub, directed=False)
        return [
            frozenset(kept[labels == label].tolist()) for label in range(n_components)
        ]

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------
    def add_edge(self, u: Node, v: Node) -> None:
        if u == v:
            return
        self._adj[u, v] = True
        self._adj[v, u] = True

    def saturate(self, node_sets: Iterable[Iterable[Node]]) -> None:
        """Make every set in `node_sets` a clique."""
        for nodes in node_sets:
            idx = np.fromiter(nodes, dtype=int)
            if idx.size < 2:
                continue
            self._adj[np.ix_(idx, idx)] = True
            self._adj[idx, idx] = False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Graph):
            return self._adj.shape == other._adj.shape and bool(
                np.array_equal(self._adj, other._adj)
            )
        return NotImplemented

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n_nodes={self.number_of_nodes()}, "
            f"n_edges={self.number_of_edges()})"
        )


# =============================================================================
# ChordalGraph
# =============================================================================
class ChordalGraph(Graph):
    """
    Triangulation of a graph.

    Built as an independent copy of the input graph and only ever gains
    edges. Chordal once a triangulation algorithm has finished with it.
    """

    @classmethod
    def from_graph(cls, g: Graph) -> "ChordalGraph":
        cg = cls(0)
        cg._adj = g.adjacency_matrix.copy()
        return cg

    def fill_edges(self, original: Graph) -> List[Edge]:
        """Edges present here but absent from `original`, sorted."""
        added = self._adj & ~original.adjacency_matrix
        rows, cols = np.nonzero(np.triu(added, k=1))
        return list(zip(rows.tolist(), cols.tolist()))

    def is_chordal(self) -> bool:
        return is_chordal(self)

    def maximal_cliques(self) -> List[Clique]:
        return maximal_cliques(self)


# =============================================================================
# Chordality
# =============================================================================
def to_networkx(g: Graph) -> nx.Graph:
    """networkx view of `g`, isolated nodes included."""
    G = nx.Graph()
    G.add_nodes_from(range(g.number_of_nodes()))
    G.add_edges_from(g.edges())
    return G


def is_chordal(g: Graph) -> bool:
    return nx.is_chordal(to_networkx(g))


def maximal_cliques(g: Graph) -> List[Clique]:
    """
    Maximal cliques of a chordal graph, ordered by their smallest node.

    Raises
    ------
    networkx.NetworkXError
        If `g` is not chordal.
    """
    return sorted(nx.chordal_graph_cliques(to_networkx(g)), key=sorted)
