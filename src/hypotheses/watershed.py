"""Hierarchical (Kruskal-order) watershed over a component's adjacency edges."""
from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from src.hypotheses.segment import Segment
from src.hypotheses.union_find import UnionFind


def hierarchical_watershed(
    visited: Sequence[int],
    edges: np.ndarray,
    weights: np.ndarray,
    shape: Tuple[int, int, int],
    min_num_pixels: int,
    max_num_pixels: int,
    min_frontier: float,
) -> List[Segment]:
    """Merge regions along increasing frontier and emit the accepted merges.

    Edges are replayed in ascending (stable) weight order through a
    :class:`UnionFind` seeded with ``visited``. Whenever an edge joins two
    distinct sets and its weight is strictly above ``min_frontier``, the
    merged set containing ``u`` is sized right after the union; if
    ``min_num_pixels < size < max_num_pixels`` a :class:`Segment` of that
    merged set is emitted. Segments come out in merge order.

    Returns an empty list when the component has no edges or no merge passes
    both thresholds; the caller is responsible for the fallback.
    """
    segments: List[Segment] = []
    if len(edges) == 0:
        return segments

    order = np.argsort(weights, kind="stable")
    threshold = np.float32(min_frontier)
    uf = UnionFind(visited)

    edge_list = edges.tolist()
    for i in order.tolist():
        u, v = edge_list[i]
        if not uf.unite(u, v):
            continue  # cycle edge
        if not weights[i] > threshold:
            continue

        size = uf.size(u)
        if min_num_pixels < size < max_num_pixels:
            segments.append(Segment.from_visited(uf.component_members(u), shape))

    return segments


__all__ = ["hierarchical_watershed"]
