"""Point records of a decoded frame and a frame recorder callback."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Sequence

DEFAULT_CSV_PATH = "./cloudpoints.csv"
DEFAULT_FRAME_INDEX = 10


@dataclass
class PointXYZIT:
    """One lidar return: position in metres, intensity, time and laser ring."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    intensity: float = 0.0
    timestamp: float = 0.0
    ring: int = 0


def _number(value: float) -> str:
    # Six significant digits, the default formatting of a C++ output stream.
    return f"{value:g}"


def format_point(point: PointXYZIT) -> str:
    """Render a point as ``x,y,z,intensity,timestamp,ring``."""
    return ",".join(
        (
            _number(point.x),
            _number(point.y),
            _number(point.z),
            _number(point.intensity),
            _number(point.timestamp),
            str(int(point.ring)),
        )
    )


def write_points_csv(points: Iterable[PointXYZIT], path: str | os.PathLike[str]) -> int:
    """Write one line per point to ``path`` and return the number of lines."""
    count = 0
    with open(path, "w", encoding="ascii", newline="\n") as out:
        for point in points:
            out.write(format_point(point))
            out.write("\n")
            count += 1
    return count


class FrameRecorder:
    """Point-cloud callback that reports frames and saves one of them as CSV.

    Every call prints the frame timestamp and size when ``verbose`` is set.
    When ``path`` is given, the ``frame_index``-th frame (counting from 1)
    is written to it; with ``path`` None nothing is saved.
    """

    def __init__(
        self,
        path: str | os.PathLike[str] | None = DEFAULT_CSV_PATH,
        frame_index: int = DEFAULT_FRAME_INDEX,
        verbose: bool = True,
    ) -> None:
        self.path = path
        self.frame_index = frame_index
        self.verbose = verbose
        self.frames = 0

    def __call__(self, points: Sequence[PointXYZIT], timestamp: float) -> bool:
        """Handle one frame; return True if it was written to the file."""
        if self.verbose:
            print(f"timestamp: {timestamp:f},point_size: {len(points)}")
        if self.path is None:
            return False
        self.frames += 1
        if self.frames != self.frame_index:
            return False
        write_points_csv(points, self.path)
        return True