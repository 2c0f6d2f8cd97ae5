"""Frame-wise hypothesis generation over (T, Z, Y, X) stacks and result helpers."""
from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np
import pandas as pd
import zarr
from tqdm import tqdm
from tqdm.contrib.concurrent import process_map

from src.hypotheses.config import HypothesisConfig, ShapeMismatchError
from src.hypotheses.generator import generate_hypotheses
from src.hypotheses.segment import Segment

LOGGER = logging.getLogger(__name__)

BBOX_COLUMNS: Tuple[str, ...] = ("min_z", "min_y", "min_x", "max_z", "max_y", "max_x")


def frame_hypotheses(t_int: int, foreground_stack, frontier_stack, config: HypothesisConfig) -> List[Segment]:
    """Generate hypotheses for frame ``t_int`` of a pair of 4D stacks."""
    foreground = np.asarray(foreground_stack[t_int])
    frontier = np.asarray(frontier_stack[t_int])
    return generate_hypotheses(foreground, frontier, config)


def hypotheses_for_frames(
    foreground_stack,
    frontier_stack,
    config: HypothesisConfig | None = None,
    frames: Iterable[int] | None = None,
    n_workers: int = 1,
) -> Dict[int, List[Segment]]:
    """Run the generator independently on each requested frame.

    Parameters
    ----------
    foreground_stack, frontier_stack:
        Array-likes (numpy or zarr) shaped ``(T, Z, Y, X)``, or paths to zarr
        arrays, which are opened read-only.
    config:
        Thresholds; defaults to :class:`HypothesisConfig`.
    frames:
        Frame indices to process; all frames when ``None``.
    n_workers:
        Number of worker processes; ``1`` runs serially.

    Returns
    -------
    dict[int, list[Segment]]
        Hypotheses keyed by frame index. Frames are not linked to each other.
    """
    if isinstance(foreground_stack, (str, Path)):
        foreground_stack = zarr.open(Path(foreground_stack).as_posix(), mode="r")
    if isinstance(frontier_stack, (str, Path)):
        frontier_stack = zarr.open(Path(frontier_stack).as_posix(), mode="r")

    if tuple(foreground_stack.shape) != tuple(frontier_stack.shape):
        raise ShapeMismatchError(
            f"Foreground stack {foreground_stack.shape} does not match frontier stack {frontier_stack.shape}"
        )
    if len(foreground_stack.shape) != 4:
        raise ShapeMismatchError(f"Expected (T, Z, Y, X) stacks, got {foreground_stack.shape}")

    if config is None:
        config = HypothesisConfig()
    config.validate()

    n_frames = foreground_stack.shape[0]
    frames = list(range(n_frames)) if frames is None else [int(t) for t in frames]
    out_of_range = [t for t in frames if t < 0 or t >= n_frames]
    if out_of_range:
        raise ValueError(f"Frames {out_of_range} out of range for stack with {n_frames} frames")

    run = partial(
        frame_hypotheses,
        foreground_stack=foreground_stack,
        frontier_stack=frontier_stack,
        config=config,
    )

    desc_text = "Generating segmentation hypotheses..."
    if n_workers > 1:
        results = process_map(run, frames, max_workers=n_workers, chunksize=1, desc=desc_text)
    else:
        results = [run(t) for t in tqdm(frames, desc=desc_text)]

    LOGGER.info(
        "Generated %d hypotheses over %d frames",
        sum(len(r) for r in results),
        len(frames),
    )
    return dict(zip(frames, results))


def hypotheses_to_frame(segments: Sequence[Segment]) -> pd.DataFrame:
    """Tabulate hypothesis sizes, origins and bounding boxes, one row each."""
    columns = ["hypothesis_id", "num_pixels", "z", "y", "x", *BBOX_COLUMNS]
    rows = [
        [i, seg.num_pixels, seg.z, seg.y, seg.x, *(int(v) for v in seg.bbox)]
        for i, seg in enumerate(segments)
    ]
    return pd.DataFrame(rows, columns=columns).astype(int)


def paint_hypotheses(segments: Sequence[Segment], shape: Tuple[int, int, int]) -> np.ndarray:
    """Count, for every voxel, how many hypotheses cover it."""
    coverage = np.zeros(shape, dtype=np.int64)
    for seg in segments:
        coverage[seg.slices] += seg.mask
    return coverage


__all__ = [
    "BBOX_COLUMNS",
    "frame_hypotheses",
    "hypotheses_for_frames",
    "hypotheses_to_frame",
    "paint_hypotheses",
]
