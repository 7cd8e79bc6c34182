"""
Graph builders and brute-force checks shared by the tests.
"""

import itertools

import numpy as np

from chordal_graph import Graph


def cycle_graph(n, offset=0):
    return Graph(n + offset, [(offset + i, offset + (i + 1) % n) for i in range(n)])


def complete_graph(n):
    return Graph(n, itertools.combinations(range(n), 2))


def star_graph(k):
    """Center 0, leaves 1..k."""
    return Graph(k + 1, [(0, leaf) for leaf in range(1, k + 1)])


def grid_graph(rows, cols):
    edges = []
    for r in range(rows):
        for c in range(cols):
            v = r * cols + c
            if c + 1 < cols:
                edges.append((v, v + 1))
            if r + 1 < rows:
                edges.append((v, v + cols))
    return Graph(rows * cols, edges)


def random_graph(n, p, seed):
    rng = np.random.default_rng(seed)
    return Graph.from_adjacency(np.triu(rng.random((n, n)) < p, k=1))


def random_graphs():
    """Small corpus of random graphs of varied size and density."""
    return [
        random_graph(n, p, seed)
        for seed, (n, p) in enumerate(
            [(6, 0.3), (7, 0.5), (8, 0.25), (9, 0.4), (10, 0.2), (10, 0.35), (12, 0.3)]
        )
    ]


def is_chordal_by_elimination(g):
    """A graph is chordal iff simplicial vertices can be removed until none is left."""
    adj = {v: set(g.neighbors(v)) for v in range(g.number_of_nodes())}
    while adj:
        for v, nbrs in adj.items():
            if all(b in adj[a] for a, b in itertools.combinations(nbrs, 2)):
                break
        else:
            return False
        for u in adj.pop(v):
            adj[u].discard(v)
    return True


def without_edge(g, edge):
    return Graph(g.number_of_nodes(), [e for e in g.edges() if e != edge])
