"""Segmentation hypotheses from a foreground mask and a frontier field.

Each 6-connected foreground component is flood filled, its internal edges are
weighted by the mean frontier of their endpoints, and a hierarchical
watershed over those edges yields candidate sub-segmentations. Components
that produce no accepted merge are returned whole, so every foreground
component contributes at least one hypothesis.
"""
from __future__ import annotations

import logging
import time
from typing import List

import numpy as np

from src.hypotheses.config import HypothesisConfig, check_size_window, check_volumes
from src.hypotheses.flood_fill import flood_fill
from src.hypotheses.segment import Segment
from src.hypotheses.watershed import hierarchical_watershed

LOGGER = logging.getLogger(__name__)


def compute_segmentation_hypotheses(
    foreground: np.ndarray,
    frontier: np.ndarray,
    min_num_pixels: int,
    max_num_pixels: int,
    min_frontier: float,
) -> List[Segment]:
    """Generate hypotheses for every foreground component of a ZYX volume.

    Parameters
    ----------
    foreground:
        ``(Z, Y, X)`` array, non-zero marks foreground.
    frontier:
        ``(Z, Y, X)`` real-valued boundary strength, same shape as ``foreground``.
    min_num_pixels, max_num_pixels:
        Exclusive size window for hypotheses taken from the merge hierarchy.
    min_frontier:
        Merges along edges at or below this weight are never emitted.

    Returns
    -------
    list[Segment]
        Hypotheses ordered by the raster position of each component's first
        voxel, then by merge order within the component. Hypotheses may
        overlap.

    Raises
    ------
    ShapeMismatchError
        If the volumes are not 3D, differ in shape or have an empty axis.
    InvalidSizeWindowError
        If ``max_num_pixels <= min_num_pixels`` or ``min_num_pixels < 0``.
    """
    foreground = np.asarray(foreground)
    frontier = np.asarray(frontier)
    shape = check_volumes(foreground, frontier)
    check_size_window(min_num_pixels, max_num_pixels)

    start = time.perf_counter()

    fg_flat = np.ascontiguousarray(foreground, dtype=bool).ravel()
    ctr_flat = np.ascontiguousarray(frontier, dtype=np.float32).ravel()
    seen = np.zeros(fg_flat.size, dtype=bool)

    segments: List[Segment] = []
    n_components = 0

    # raster order over foreground voxels; seen is re-checked since fills claim voxels ahead
    for idx in np.flatnonzero(fg_flat).tolist():
        if seen[idx]:
            continue

        component = flood_fill(fg_flat, ctr_flat, seen, shape, idx)
        n_components += 1

        merged = hierarchical_watershed(
            component.visited,
            component.edges,
            component.weights,
            shape,
            min_num_pixels,
            max_num_pixels,
            min_frontier,
        )
        if merged:
            segments.extend(merged)
        else:
            segments.append(Segment.from_visited_and_bbox(component.visited, component.bbox, shape))

        LOGGER.debug(
            "component %d | start: %d | size: %d | edges: %d | hypotheses: %d | fallback: %s",
            n_components,
            idx,
            component.num_pixels,
            len(component.edges),
            len(merged),
            not merged,
        )

    LOGGER.info(
        "Generated %d hypotheses from %d components | shape: %s | elapsed: %.4fs",
        len(segments),
        n_components,
        shape,
        time.perf_counter() - start,
    )
    return segments


def generate_hypotheses(
    foreground: np.ndarray,
    frontier: np.ndarray,
    config: HypothesisConfig | None = None,
) -> List[Segment]:
    """Config-based wrapper around :func:`compute_segmentation_hypotheses`."""
    if config is None:
        config = HypothesisConfig()
    config.validate()
    return compute_segmentation_hypotheses(
        foreground,
        frontier,
        min_num_pixels=config.min_num_pixels,
        max_num_pixels=config.max_num_pixels,
        min_frontier=config.min_frontier,
    )


__all__ = ["compute_segmentation_hypotheses", "generate_hypotheses"]
