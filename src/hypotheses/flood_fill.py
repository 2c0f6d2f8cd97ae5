"""6-connected flood fill that collects voxels and frontier-weighted edges."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

# (dz, dy, dx) face neighbours
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int, int], ...] = (
    (0, 0, 1),
    (0, 1, 0),
    (1, 0, 0),
    (0, -1, 0),
    (0, 0, -1),
    (-1, 0, 0),
)


@dataclass(slots=True)
class FloodFillResult:
    """Voxels, adjacency edges and bounding box of one connected component.

    ``edges`` has shape ``(n_edges, 2)`` holding ``(u, v)`` flattened voxel
    indices in discovery order; ``weights[i]`` is the mean frontier value of
    the two endpoints of ``edges[i]``.
    """

    visited: List[int]
    edges: np.ndarray
    weights: np.ndarray
    bbox: Tuple[int, int, int, int, int, int]

    @property
    def num_pixels(self) -> int:
        return len(self.visited)


def flood_fill(
    foreground: np.ndarray,
    frontier: np.ndarray,
    seen: np.ndarray,
    shape: Tuple[int, int, int],
    start: int,
) -> FloodFillResult:
    """Collect the foreground component reachable from ``start``.

    Parameters
    ----------
    foreground, frontier, seen:
        Flattened (C-order) views of the volume. ``seen`` is updated in place:
        every voxel is marked when it is pushed, so it is never pushed twice
        and never claimed by a later component.
    shape:
        ``(depth, height, width)`` of the volume.
    start:
        Flattened index of an unseen foreground voxel.
    """
    depth, height, width = shape
    plane = height * width

    stack = [start]
    seen[start] = True

    visited: List[int] = []
    edges: List[Tuple[int, int]] = []
    weights: List[float] = []

    min_z, min_y, min_x = depth - 1, height - 1, width - 1
    max_z = max_y = max_x = 0

    while stack:
        idx = stack.pop()
        visited.append(idx)

        cur_z = idx // plane
        cur_y = (idx % plane) // width
        cur_x = idx % width

        min_z = min(min_z, cur_z)
        min_y = min(min_y, cur_y)
        min_x = min(min_x, cur_x)
        max_z = max(max_z, cur_z)
        max_y = max(max_y, cur_y)
        max_x = max(max_x, cur_x)

        for dz, dy, dx in NEIGHBOR_OFFSETS:
            nz = cur_z + dz
            ny = cur_y + dy
            nx = cur_x + dx
            if not (0 <= nz < depth and 0 <= ny < height and 0 <= nx < width):
                continue
            nidx = nz * plane + ny * width + nx
            if foreground[nidx] and not seen[nidx]:
                seen[nidx] = True
                stack.append(nidx)
                edges.append((idx, nidx))
                weights.append(0.5 * (float(frontier[idx]) + float(frontier[nidx])))

    return FloodFillResult(
        visited=visited,
        edges=np.asarray(edges, dtype=np.int64).reshape(-1, 2),
        weights=np.asarray(weights, dtype=np.float32),
        bbox=(min_z, min_y, min_x, max_z, max_y, max_x),
    )


__all__ = ["NEIGHBOR_OFFSETS", "FloodFillResult", "flood_fill"]
