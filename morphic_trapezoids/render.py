"""Drawing trapezoid chains to PNG with matplotlib."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.collections import LineCollection  # noqa: E402

from .logging_utils import apply_debug_logging  # noqa: E402
from .sequence import TrapezoidSequence  # noqa: E402

logger = logging.getLogger(__name__)

IMAGE_WIDTH = 1400
IMAGE_HEIGHT = 600
BORDER = 50
DPI = 100
# Each level of the recursive view keeps 1/7 of the chain at 4 times the scale.
RECURSION_SHRINK = 7
RECURSION_SCALE = 4.0


def chain_segments(sequence: TrapezoidSequence) -> np.ndarray:
    """Side endpoints of every trapezoid as an ``(n_sides, 2, 2)`` float array."""
    segments = [
        [[side.p1.x.to_double(), side.p1.y.to_double()], [side.p2.x.to_double(), side.p2.y.to_double()]]
        for trapezoid in sequence.trapezoids
        for side in trapezoid.sides
    ]
    return np.asarray(segments, dtype=float).reshape(-1, 2, 2)


def draw_trapezoids(sequence: TrapezoidSequence, path: Union[str, Path], recursive: bool = False) -> Path:
    """Write the chain as a ``IMAGE_WIDTH`` x ``IMAGE_HEIGHT`` PNG, scaled to fit inside the border."""
    path = Path(path)
    segments = chain_segments(sequence)
    if segments.size == 0:
        raise ValueError("Cannot draw an empty trapezoid chain")

    x_min, y_min, x_max, y_max = (value.to_double() for value in sequence.get_bounds())
    x_scale = (IMAGE_WIDTH - 2 * BORDER) / (x_max - x_min)
    y_scale = (IMAGE_HEIGHT - 2 * BORDER) / (y_max - y_min)
    scale = min(x_scale, y_scale)
    # The chain starts at the origin; scaled copies are anchored there too.
    offset = np.array([BORDER - x_min * scale, BORDER - y_min * scale])

    fig = plt.figure(figsize=(IMAGE_WIDTH / DPI, IMAGE_HEIGHT / DPI), dpi=DPI)
    ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    ax.set_xlim(0, IMAGE_WIDTH)
    ax.set_ylim(0, IMAGE_HEIGHT)
    ax.set_aspect("equal", adjustable="box")
    ax.axis("off")

    count = len(sequence)
    level_scale = 1.0
    levels = 0
    while count > 0:
        pixels = segments[: 4 * count] * (scale * level_scale) + offset
        ax.add_collection(LineCollection(pixels, colors="black", linewidths=0.6))
        levels += 1
        if not recursive:
            break
        count //= RECURSION_SHRINK
        level_scale *= RECURSION_SCALE

    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=DPI, facecolor="white")
    plt.close(fig)
    logger.info("Saved %d trapezoids in %d level(s) to %s", len(sequence), levels, path)
    return path


apply_debug_logging(globals(), logger=logger)
