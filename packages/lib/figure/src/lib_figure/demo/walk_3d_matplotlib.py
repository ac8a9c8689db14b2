"""Play the procedural walk cycle in a 3D matplotlib viewer."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np
from lib_figure.data import GaitParameters
from lib_figure.errors import InvalidFrameCap
from lib_figure.geometry import figure_primitives, floor_lines, world_lines
from lib_figure.skeleton import Skeleton
from matplotlib import pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.artist import Artist
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401 (required for 3D projection)

logger = logging.getLogger(__name__)


@dataclass
class FigureVisualsMatplotlib:
    """Container for matplotlib artists representing the figure."""

    segments: Dict[str, Artist]


def _to_plot_coords(points: np.ndarray) -> np.ndarray:
    # figure is y-up; matplotlib's 3D axes are z-up: (X=x, Y=z, Z=y)
    return points[:, [0, 2, 1]]


def _segment_polyline(lines: np.ndarray) -> np.ndarray:
    """Join line pairs into one polyline, separated by NaN breaks."""
    pairs = lines.reshape(-1, 2, 3)
    breaks = np.full((pairs.shape[0], 1, 3), np.nan)
    return np.concatenate([pairs, breaks], axis=1).reshape(-1, 3)


def create_figure_3d_matplotlib(
    skeleton: Skeleton, primitives: Dict[str, np.ndarray], *, ax
) -> FigureVisualsMatplotlib:
    segments: Dict[str, Artist] = {}
    for name, lines in world_lines(skeleton, primitives).items():
        coords = _to_plot_coords(_segment_polyline(lines))
        segments[name] = ax.plot(
            coords[:, 0], coords[:, 1], coords[:, 2], c="b", linewidth=0.8
        )[0]
    return FigureVisualsMatplotlib(segments=segments)


def update_figure_3d_matplotlib(
    visuals: FigureVisualsMatplotlib,
    skeleton: Skeleton,
    primitives: Dict[str, np.ndarray],
) -> List[Artist]:
    for name, lines in world_lines(skeleton, primitives).items():
        coords = _to_plot_coords(_segment_polyline(lines))
        line = visuals.segments[name]
        line.set_data_3d(coords[:, 0], coords[:, 1], coords[:, 2])
    return list(visuals.segments.values())


class WalkPlayback:
    """Advance the figure forward one step per animation frame."""

    def __init__(
        self,
        *,
        skeleton: Skeleton,
        speed: float,
        frames: int,
        interval_ms: int,
    ) -> None:
        self.skeleton = skeleton
        self._speed = speed
        self._primitives = figure_primitives(skeleton.shape, sphere_segments=12)

        self.fig = plt.figure(figsize=(8, 8))
        self.ax = self.fig.add_subplot(111, projection="3d")
        self.ax.set_box_aspect((1.0, 1.0, 1.0))
        self.ax.set_xlim(-4.0, 4.0)
        self.ax.set_ylim(-2.0, 6.0)
        self.ax.set_zlim(0.0, 8.0)
        self.ax.view_init(elev=15, azim=-45)
        self.ax.set_xlabel("x")
        self.ax.set_ylabel("z (walk direction)")
        self.ax.set_zlabel("y (vertical)")
        self.fig.suptitle("Walk cycle playback (press 'q' to quit)")

        floor = _to_plot_coords(_segment_polyline(floor_lines(8.0, 8)))
        self.ax.plot(floor[:, 0], floor[:, 1], floor[:, 2], c="0.7", linewidth=0.5)

        self.visuals = create_figure_3d_matplotlib(
            skeleton, self._primitives, ax=self.ax
        )
        self.fig.canvas.mpl_connect("key_press_event", self._on_key_press)
        self._animation = FuncAnimation(
            self.fig,
            self._step,
            frames=frames,
            interval=interval_ms,
            blit=False,
            repeat=False,
        )

    def _step(self, _index: int) -> List[Artist]:
        self.skeleton.move_torso(self._speed, True)
        state = self.skeleton.walk_state
        logger.debug(
            "frame=%d torso_y=%.4f", state.frame, self.skeleton.torso.world[1, 3]
        )
        return update_figure_3d_matplotlib(self.visuals, self.skeleton, self._primitives)

    def _on_key_press(self, event) -> None:
        if not event.key:
            return
        if event.key.lower() in {"q", "escape"}:
            plt.close(self.fig)

    def run(self) -> None:
        plt.show()


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--frames",
        type=int,
        default=160,
        help="Number of forward steps to play (default: 160).",
    )
    parser.add_argument(
        "--frame-cap",
        type=int,
        default=80,
        help="Frames per walk cycle, a multiple of 4 (default: 80).",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=0.03,
        help="Forward distance per step (default: 0.03).",
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=33,
        help="Delay between frames in milliseconds (default: 33).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        gait = GaitParameters(frame_cap=args.frame_cap)
    except InvalidFrameCap as exc:
        parser.error(str(exc))

    playback = WalkPlayback(
        skeleton=Skeleton(gait=gait),
        speed=args.speed,
        frames=args.frames,
        interval_ms=args.interval,
    )
    playback.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
