"""
Minimal triangulation of undirected graphs

A triangulation of a graph is a chordal supergraph of it (every cycle of
length at least four has a chord). This module offers two families of
algorithms:

MCS-M
    Exact minimal triangulation: no single fill edge can be removed while
    keeping the result chordal. A maximum cardinality search in which a
    popped vertex also raises the weight of every vertex it reaches through
    paths of strictly lighter vertices.
LB-Triang
    Saturates, for each vertex in turn, the minimal separators of the input
    graph contained in that vertex's current neighbourhood. The vertex order
    is the natural one, or picked greedily by minimum degree or minimum fill.

High level flow:
1) `MinimalTriangulator(heuristic=...)` fixes the algorithm.
2) `triangulate(g)` copies `g` into a `ChordalGraph` and adds fill edges.
3) The result is returned to the caller; `g` is never modified.

Notes
-----
- The MCS-M queue pops the smallest node id among equal weights, so on a
  chordless 4-cycle ``0-1-2-3`` the added chord is ``(1, 3)``.
- Fill costs are recomputed from scratch for every selection.
"""

import logging
from typing import Iterable, List, Set, Tuple

import numpy as np

from chordal_graph import ChordalGraph, Edge, Graph, Node, Separator, format_frozenset
from weighted_node_queue import IncreasingWeightNodeQueue

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


HEURISTICS = (
    "mcs_m",
    "lb_triang",
    "min_degree_lb_triang",
    "min_fill_lb_triang",
)

# LB-Triang heuristic -> vertex ordering policy
_LB_ORDERINGS = {
    "lb_triang": "natural",
    "min_degree_lb_triang": "min_degree",
    "min_fill_lb_triang": "min_fill",
}


# =============================================================================
# Fill estimation and vertex selection
# =============================================================================
def fill_cost(g: Graph, v: Node) -> int:
    """Number of edges missing for the neighbourhood of `v` to be a clique."""
    nbrs = g.neighbors(v)
    if len(nbrs) < 2:
        return 0
    # every missing pair is seen from both of its endpoints
    twice_fill = sum(len(nbrs - g.neighbors(u)) - 1 for u in nbrs)
    return twice_fill // 2


def min_degree_node(g: Graph, candidates: Iterable[Node]) -> Node:
    """Candidate of smallest degree; the smallest id wins ties."""
    return min(sorted(candidates), key=g.degree)


def min_fill_node(g: Graph, candidates: Iterable[Node]) -> Node:
    """Candidate of smallest fill cost; the smallest id wins ties."""
    return min(sorted(candidates), key=lambda v: fill_cost(g, v))


# =============================================================================
# Separator saturation
# =============================================================================
def substars(g: Graph, working: Graph, v: Node) -> Set[Separator]:
    """
    Minimal separators of `g` included in the neighbourhood of `v`.

    Removes the closed neighbourhood of `v` in `working` from `g`; the
    neighbourhood in `g` of every remaining component is such a separator.
    Identical separators coming from different components are collapsed.
    """
    removed = working.neighbors(v) | {v}
    separators = set()
    for component in g.components_excluding(removed):
        sep = g.neighbors_of_set(component)
        if sep:
            separators.add(sep)
    return separators


def make_vertex_lb_simplicial(g: Graph, working: Graph, v: Node) -> None:
    """Saturate in `working` every substar of `v`."""
    separators = substars(g, working, v)
    working.saturate(separators)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "  Vertex %d: saturated %s",
            v,
            ", ".join(format_frozenset(s) for s in separators) or "nothing",
        )


# =============================================================================
# Triangulation engines
# =============================================================================
def mcs_m_triangulation(g: Graph) -> ChordalGraph:
    """Minimal triangulation of `g` with MCS-M."""
    n = g.number_of_nodes()
    triangulation = ChordalGraph.from_graph(g)
    queue = IncreasingWeightNodeQueue(n)
    handled_mask = np.zeros(n, dtype=bool)

    while not queue.is_empty():
        v = queue.pop()
        handled_mask[v] = True
        logger.debug("  Popped vertex %d (weight %d)", v, queue.get_weight(v))

        nodes_to_update: List[Node] = []
        reached_mask = np.zeros(n, dtype=bool)
        reached_by_max_weight: List[List[Node]] = [[] for _ in range(n)]

        for u in sorted(g.neighbors(v)):
            if not handled_mask[u]:
                nodes_to_update.append(u)
                reached_mask[u] = True
                reached_by_max_weight[queue.get_weight(u)].append(u)

        for max_weight in range(n):
            bucket = reached_by_max_weight[max_weight]
            while bucket:
                w = bucket.pop()
                for u in sorted(g.neighbors(w)):
                    if handled_mask[u] or reached_mask[u]:
                        continue
                    weight = queue.get_weight(u)
                    if weight > max_weight:
                        nodes_to_update.append(u)
                    reached_mask[u] = True
                    reached_by_max_weight[max(weight, max_weight)].append(u)

        for u in nodes_to_update:
            queue.increase_weight(u)
            triangulation.add_edge(u, v)

    return triangulation


def lb_triang_triangulation(g: Graph, ordering: str = "natural") -> ChordalGraph:
    """
    Triangulation of `g` with LB-Triang.

    Parameters
    ----------
    g : Graph
        Input graph; left untouched.
    ordering : {'natural', 'min_degree', 'min_fill'}, default='natural'
        Vertex processing order. 'natural' goes through ids ``0 .. n-1``;
        the greedy policies pick among the unprocessed vertices using the
        partially triangulated graph, so each choice depends on the
        saturations done before it.
    """
    if ordering == "natural":
        select = None
    elif ordering == "min_degree":
        select = min_degree_node
    elif ordering == "min_fill":
        select = min_fill_node
    else:
        raise ValueError(f"Unknown LB-Triang ordering: {ordering}")

    result = ChordalGraph.from_graph(g)
    unhandled = set(g.nodes())
    for i in range(g.number_of_nodes()):
        v = i if select is None else select(result, unhandled)
        make_vertex_lb_simplicial(g, result, v)
        unhandled.discard(v)
    return result


# =============================================================================
# Facade
# =============================================================================
class MinimalTriangulator:
    """
    Graph triangulator with a fixed heuristic.

    Parameters
    ----------
    heuristic : {'mcs_m', 'lb_triang', 'min_degree_lb_triang', 'min_fill_lb_triang'}, default='mcs_m'
        'mcs_m' computes a minimal triangulation. The LB-Triang variants
        differ in the vertex order: natural, minimum degree or minimum fill.
    """

    def __init__(self, *, heuristic: str = "mcs_m") -> None:
        if heuristic not in HEURISTICS:
            raise ValueError(f"Unknown triangulation heuristic: {heuristic}")
        self._heuristic = heuristic

    @property
    def heuristic(self) -> str:
        return self._heuristic

    def triangulate(self, g: Graph) -> ChordalGraph:
        if self._heuristic == "mcs_m":
            triangulation = mcs_m_triangulation(g)
        else:
            triangulation = lb_triang_triangulation(
                g, _LB_ORDERINGS[self._heuristic]
            )
        self._log_result(g, triangulation)
        return triangulation

    def run(self, g: Graph) -> Tuple[ChordalGraph, List[Edge]]:
        """Triangulate `g` and return the triangulation and its fill edges."""
        triangulation = self.triangulate(g)
        return triangulation, triangulation.fill_edges(g)

    def __repr__(self) -> str:
        return f"MinimalTriangulator(heuristic={self._heuristic!r})"

    # -------------------------------------------------------------------------
    # Debug logging
    # -------------------------------------------------------------------------
    def _log_result(self, g: Graph, triangulation: ChordalGraph) -> None:
        logger.info(
            "Triangulated %d nodes with %s: %d edges -> %d edges",
            g.number_of_nodes(),
            self._heuristic,
            g.number_of_edges(),
            triangulation.number_of_edges(),
        )
