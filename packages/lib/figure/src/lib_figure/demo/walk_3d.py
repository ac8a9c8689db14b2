"""キーボードで人形を操作し、pyglet で 3D 表示するデモ。

W/S/A/D: 選択中のセグメントを操作 (胴体なら前進/後退/回転)
E/Q: 次/前のセグメントを選択
左ドラッグ: カメラを回転, ホイール: ズーム
Esc: 終了
"""

from __future__ import annotations

import argparse
import logging
import math
from typing import Optional

import numpy as np
import pyglet
from lib_figure import (
    CommandDispatcher,
    FigureVisuals,
    GaitParameters,
    InvalidFrameCap,
    Skeleton,
    UnsupportedCommand,
    create_figure_batch,
    create_floor_batch,
    dispose_figure_visuals,
    highlight_segment,
    update_figure_visuals,
)
from lib_figure.geometry import orbit_eye
from pyglet import clock, graphics, window
from pyglet.math import Mat4, Vec3
from pyglet.window import key, mouse

logger = logging.getLogger(__name__)

# 押している間ずっと効くキー
HELD_KEYS = (
    (key.W, "up"),
    (key.S, "down"),
    (key.A, "left"),
    (key.D, "right"),
)

# マウスでのカメラ操作 (度/ピクセル)
ORBIT_SPEED = 0.4
# 仰角はこの範囲内 (look_at の up ベクトルと平行にしない)
ELEV_LIMIT = 89.0
MIN_DISTANCE = 2.0
MAX_DISTANCE = 100.0


class Walk3DDemo:
    """Interactive viewer that polls the keyboard once per tick."""

    def __init__(
        self,
        *,
        skeleton: Skeleton,
        step: float = 0.1,
        update_rate: float = 60.0,
    ) -> None:
        if update_rate <= 0:
            raise ValueError("update_rate must be positive")

        self.skeleton = skeleton
        self.dispatcher = CommandDispatcher(skeleton, step=step)

        self.window = window.Window(
            width=960,
            height=720,
            caption="Figure Walk Demo",
            resizable=True,
        )
        self._set_projection(self.window.width, self.window.height)
        # (10, 5, 10) を原点から見下ろす初期カメラ
        self._camera_distance = 15.0
        self._camera_azim = 45.0
        self._camera_elev = math.degrees(math.asin(5.0 / 15.0))
        self._update_view()

        self._keys = key.KeyStateHandler()
        self.window.push_handlers(self._keys)

        self.batch = graphics.Batch()
        self._floor = create_floor_batch(batch=self.batch)
        self.figure_visuals: Optional[FigureVisuals] = create_figure_batch(
            skeleton, batch=self.batch
        )
        highlight_segment(self.figure_visuals, self.dispatcher.selected)
        self._update_rate = update_rate
        self._closed = False

        self._register_handlers()
        clock.schedule_interval(self.update, 1.0 / self._update_rate)

    def _set_projection(self, width: int, height: int) -> None:
        self.window.projection = Mat4.perspective_projection(
            fov=30.0,
            aspect=width / max(height, 1),
            z_near=0.1,
            z_far=1000.0,
        )

    def _update_view(self) -> None:
        eye = orbit_eye(
            np.zeros(3), self._camera_distance, self._camera_azim, self._camera_elev
        )
        self.window.view = Mat4.look_at(
            Vec3(*(float(v) for v in eye)),
            Vec3(0.0, 0.0, 0.0),
            Vec3(0.0, 1.0, 0.0),
        )

    def _register_handlers(self) -> None:
        @self.window.event
        def on_draw() -> None:
            self.window.clear()
            self.batch.draw()

        @self.window.event
        def on_resize(width: int, height: int):
            self.window.viewport = (0, 0, *self.window.get_framebuffer_size())
            self._set_projection(width, height)
            return pyglet.event.EVENT_HANDLED

        @self.window.event
        def on_key_press(symbol: int, modifiers: int) -> None:
            if symbol == key.ESCAPE:
                pyglet.app.exit()
            elif symbol == key.E:
                self.dispatcher.select_next()
                self._refresh_highlight()
            elif symbol == key.Q:
                self.dispatcher.select_previous()
                self._refresh_highlight()

        @self.window.event
        def on_mouse_drag(x: int, y: int, dx: int, dy: int, buttons: int, modifiers: int) -> None:
            if not buttons & mouse.LEFT:
                return
            self._camera_azim = math.fmod(self._camera_azim - dx * ORBIT_SPEED, 360.0)
            self._camera_elev = min(
                max(self._camera_elev - dy * ORBIT_SPEED, -ELEV_LIMIT), ELEV_LIMIT
            )
            self._update_view()

        @self.window.event
        def on_mouse_scroll(x: int, y: int, scroll_x: float, scroll_y: float) -> None:
            self._camera_distance = min(
                max(self._camera_distance * 0.9**scroll_y, MIN_DISTANCE), MAX_DISTANCE
            )
            self._update_view()

    def _refresh_highlight(self) -> None:
        if self.figure_visuals:
            highlight_segment(self.figure_visuals, self.dispatcher.selected)

    def update(self, dt: float) -> None:
        for symbol, command in HELD_KEYS:
            if not self._keys[symbol]:
                continue
            try:
                self.dispatcher.dispatch(command)
            except UnsupportedCommand as exc:
                logger.warning("%s", exc)

        if self.figure_visuals:
            update_figure_visuals(self.figure_visuals, self.skeleton)

    def close(self) -> None:
        if self._closed:
            return

        clock.unschedule(self.update)
        if self.figure_visuals:
            dispose_figure_visuals(self.figure_visuals)
            self.figure_visuals = None
        self._floor.delete()
        self._closed = True

    def run(self) -> None:
        try:
            pyglet.app.run()
        finally:
            self.close()


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--frame-cap",
        type=int,
        default=80,
        help="Frames per walk cycle, a multiple of 4 (default: 80).",
    )
    parser.add_argument(
        "--step",
        type=float,
        default=0.1,
        help="Distance / angle applied per command (default: 0.1).",
    )
    parser.add_argument(
        "--update-rate",
        type=float,
        default=60.0,
        help="Keyboard polling frequency in Hz (default: 60).",
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

    skeleton = Skeleton(gait=gait)
    demo = Walk3DDemo(
        skeleton=skeleton,
        step=args.step,
        update_rate=args.update_rate,
    )
    demo.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
