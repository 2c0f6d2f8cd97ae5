"""Segmentation hypothesis records and their construction from voxel indices."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np


def unravel_indices(indices: Sequence[int] | np.ndarray, height: int, width: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Decode flattened ``z * H * W + y * W + x`` indices into ``(z, y, x)``."""
    idx = np.asarray(indices, dtype=np.int64)
    plane = height * width
    return idx // plane, (idx % plane) // width, idx % width


@dataclass(frozen=True, slots=True)
class Segment:
    """One candidate segmentation.

    Attributes
    ----------
    mask:
        Boolean array cropped to the bounding box (no padding). ``mask`` and
        ``bbox`` are read-only.
    bbox:
        ``(min_z, min_y, min_x, max_z, max_y, max_x)`` in volume coordinates,
        max inclusive.
    num_pixels:
        Number of voxels in the hypothesis.
    z, y, x:
        Box origin, duplicated from ``bbox[:3]``.
    """

    mask: np.ndarray
    bbox: np.ndarray
    num_pixels: int
    z: int
    y: int
    x: int

    @classmethod
    def from_visited_and_bbox(
        cls,
        visited: Sequence[int] | np.ndarray,
        bbox: Sequence[int],
        shape: Tuple[int, int, int],
    ) -> "Segment":
        """Stamp ``visited`` into a mask sized to a precomputed ``bbox``."""
        _, height, width = shape
        min_z, min_y, min_x, max_z, max_y, max_x = (int(v) for v in bbox)

        mask = np.zeros(
            (max_z - min_z + 1, max_y - min_y + 1, max_x - min_x + 1),
            dtype=bool,
        )
        zs, ys, xs = unravel_indices(visited, height, width)
        mask[zs - min_z, ys - min_y, xs - min_x] = True
        mask.flags.writeable = False

        box = np.array([min_z, min_y, min_x, max_z, max_y, max_x], dtype=np.int32)
        box.flags.writeable = False

        return cls(
            mask=mask,
            bbox=box,
            num_pixels=len(visited),
            z=min_z,
            y=min_y,
            x=min_x,
        )

    @classmethod
    def from_visited(
        cls,
        visited: Sequence[int] | np.ndarray,
        shape: Tuple[int, int, int],
    ) -> "Segment":
        """Build a segment, computing the tight bounding box of ``visited``."""
        if len(visited) == 0:
            raise ValueError("Cannot build a segment from an empty voxel set")

        _, height, width = shape
        zs, ys, xs = unravel_indices(visited, height, width)
        bbox = (zs.min(), ys.min(), xs.min(), zs.max(), ys.max(), xs.max())
        return cls.from_visited_and_bbox(visited, bbox, shape)

    @property
    def slices(self) -> Tuple[slice, slice, slice]:
        """Slices selecting the bounding box in the full volume."""
        min_z, min_y, min_x, max_z, max_y, max_x = (int(v) for v in self.bbox)
        return slice(min_z, max_z + 1), slice(min_y, max_y + 1), slice(min_x, max_x + 1)


__all__ = ["Segment", "unravel_indices"]
