"""Parameters and input validation for segmentation hypothesis generation."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Tuple

import numpy as np

# names used by the tracker's segmentation config
_TRACKER_ALIASES = {"min_area": "min_num_pixels", "max_area": "max_num_pixels"}


class ShapeMismatchError(ValueError):
    """Foreground and frontier volumes are not matching non-empty 3D arrays."""


class InvalidSizeWindowError(ValueError):
    """The accepted hypothesis size window is empty or negative."""


@dataclass(slots=True)
class HypothesisConfig:
    """Thresholds applied when emitting hypotheses from the merge hierarchy.

    A merge is emitted when its edge weight is strictly above
    ``min_frontier`` and the merged size lies strictly inside
    ``(min_num_pixels, max_num_pixels)``.
    """

    min_num_pixels: int = 100
    max_num_pixels: int = 1_000_000
    min_frontier: float = 0.0

    def validate(self) -> "HypothesisConfig":
        check_size_window(self.min_num_pixels, self.max_num_pixels)
        return self

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "HypothesisConfig":
        """Build a config from a dict, accepting ``min_area``/``max_area`` aliases.

        Keys that are not config fields are ignored.
        """
        names = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in mapping.items():
            key = _TRACKER_ALIASES.get(key, key)
            if key in names:
                kwargs[key] = value

        cfg = cls(**kwargs)
        cfg.min_num_pixels = int(cfg.min_num_pixels)
        cfg.max_num_pixels = int(cfg.max_num_pixels)
        cfg.min_frontier = float(cfg.min_frontier)
        return cfg.validate()


def check_size_window(min_num_pixels: int, max_num_pixels: int) -> None:
    if min_num_pixels < 0:
        raise InvalidSizeWindowError(f"min_num_pixels must be >= 0, got {min_num_pixels}")
    if max_num_pixels <= min_num_pixels:
        raise InvalidSizeWindowError(
            f"max_num_pixels ({max_num_pixels}) must be greater than min_num_pixels ({min_num_pixels})"
        )


def check_volumes(foreground: np.ndarray, frontier: np.ndarray) -> Tuple[int, int, int]:
    """Return ``(depth, height, width)`` or raise :class:`ShapeMismatchError`."""
    if foreground.ndim != 3 or frontier.ndim != 3:
        raise ShapeMismatchError(
            f"Expected 3D (Z, Y, X) volumes, got foreground {foreground.shape} and frontier {frontier.shape}"
        )
    if foreground.shape != frontier.shape:
        raise ShapeMismatchError(
            f"Foreground shape {foreground.shape} does not match frontier shape {frontier.shape}"
        )
    if min(foreground.shape) < 1:
        raise ShapeMismatchError(f"Volume has an empty axis: {foreground.shape}")
    depth, height, width = (int(s) for s in foreground.shape)
    return depth, height, width


__all__ = [
    "ShapeMismatchError",
    "InvalidSizeWindowError",
    "HypothesisConfig",
    "check_size_window",
    "check_volumes",
]
