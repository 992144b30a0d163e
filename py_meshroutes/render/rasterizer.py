"""
PNG rendering of extracted routes.

Draws in canvas coordinates: one image pixel per unit, origin at the top
left, y growing downwards.
"""

from pathlib import Path
from typing import Iterable, Mapping, Tuple, Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.collections import LineCollection  # noqa: E402
from matplotlib.patches import Circle  # noqa: E402
import structlog  # noqa: E402

logger = structlog.get_logger()

BACKGROUND = "#764abc"
NODE_COLORS = {"start": "blue", "goal": "red"}
NODE_RADIUS = 5
SEGMENT_COLOR = "white"
SEGMENT_WIDTH = 2
DPI = 100


def _px_to_points(px: float) -> float:
    return px * 72.0 / DPI


def render_route_map(width: int, height: int,
                     nodes: Mapping[Tuple[float, float], str],
                     segments: Iterable[Tuple[float, float, float, float]],
                     output_path: Union[str, Path]) -> Path:
    """
    Rasterize visited nodes and route segments to a PNG file.

    Start and goal nodes are drawn as filled circles (blue and red), other
    nodes as outlined circles, segments as white lines on top.

    Args:
        width: Canvas width in pixels
        height: Canvas height in pixels
        nodes: Mapping of (x, y) to "start", "goal" or "other"
        segments: (x1, y1, x2, y2) tuples; duplicates are drawn once
        output_path: Destination PNG path

    Returns:
        Path of the written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    segments = set(segments)

    fig = plt.figure(figsize=(width / DPI, height / DPI), dpi=DPI)
    try:
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_aspect("auto")
        ax.axis("off")
        fig.patch.set_facecolor(BACKGROUND)
        ax.set_facecolor(BACKGROUND)

        for (x, y), tag in nodes.items():
            color = NODE_COLORS.get(tag)
            if color is not None:
                patch = Circle((x, y), NODE_RADIUS, facecolor=color, edgecolor="none")
            else:
                patch = Circle((x, y), NODE_RADIUS, facecolor="none", edgecolor="black",
                               linewidth=_px_to_points(1))
            ax.add_patch(patch)

        if segments:
            lines = [[(x1, y1), (x2, y2)] for x1, y1, x2, y2 in sorted(segments)]
            ax.add_collection(LineCollection(lines, colors=SEGMENT_COLOR,
                                             linewidths=_px_to_points(SEGMENT_WIDTH)))

        fig.savefig(output_path, dpi=DPI, facecolor=BACKGROUND, format="png")
    finally:
        plt.close(fig)

    logger.info("Route map rendered", path=str(output_path),
                nodes=len(nodes), segments=len(segments))
    return output_path
