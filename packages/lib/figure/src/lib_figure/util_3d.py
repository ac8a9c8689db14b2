"""Utilities for rendering the figure with pyglet."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, cast

import numpy as np
import pyglet

from .geometry import figure_primitives, floor_lines, world_lines
from .skeleton import Skeleton


@dataclass
class FigureVisuals:
    """Container returned by :func:`create_figure_batch`.

    batch: The pyglet batch that owns the vertex lists.
    entries: Mapping of segment names to their ``GL_LINES`` vertex lists.
    primitives: Local line geometry of each segment, reused on every update.
    """

    batch: "pyglet.graphics.Batch"
    entries: Dict[str, Any]
    primitives: Dict[str, np.ndarray]


def _color_floats(color: Tuple[int, int, int, int], count: int) -> list:
    color_vec = [component / 255.0 for component in color]
    return color_vec * count


def create_figure_batch(
    skeleton: Skeleton,
    *,
    batch: Optional["pyglet.graphics.Batch"] = None,
    group: Optional["pyglet.graphics.Group"] = None,
    color: Tuple[int, int, int, int] = (80, 160, 255, 255),
    sphere_segments: int = 20,
) -> FigureVisuals:
    """Create one line vertex list per segment from the current world matrices.

    Callers add the batch to their window's draw routine via ``batch.draw()``
    and call :func:`update_figure_visuals` after manipulating the skeleton.
    """

    working_batch = batch or pyglet.graphics.Batch()
    shader = pyglet.graphics.get_default_shader()
    primitives = figure_primitives(skeleton.shape, sphere_segments)
    entries: Dict[str, Any] = {}

    for name, lines in world_lines(skeleton, primitives).items():
        vertex_count = len(lines)
        entries[name] = shader.vertex_list(
            vertex_count,
            pyglet.gl.GL_LINES,
            batch=working_batch,
            group=cast(Any, group),
            position=("f", lines.astype(np.float32).flatten().tolist()),
            colors=("f", _color_floats(color, vertex_count)),
        )

    return FigureVisuals(batch=working_batch, entries=entries, primitives=primitives)


def update_figure_visuals(visuals: FigureVisuals, skeleton: Skeleton) -> None:
    """Rewrite vertex positions from the skeleton's latest world matrices."""

    for name, lines in world_lines(skeleton, visuals.primitives).items():
        vertex_list = visuals.entries.get(name)
        if vertex_list is None:
            continue
        vertex_list.position[:] = lines.astype(np.float32).flatten().tolist()


def highlight_segment(
    visuals: FigureVisuals,
    name: str,
    *,
    color: Tuple[int, int, int, int] = (80, 160, 255, 255),
    highlight: Tuple[int, int, int, int] = (255, 80, 80, 255),
) -> None:
    """Paint ``name`` in the highlight colour and every other segment normally."""

    for segment_name, vertex_list in visuals.entries.items():
        chosen = highlight if segment_name == name else color
        vertex_list.colors[:] = _color_floats(chosen, vertex_list.count)


def create_floor_batch(
    *,
    batch: Optional["pyglet.graphics.Batch"] = None,
    size: float = 15.0,
    divisions: int = 8,
    color: Tuple[int, int, int, int] = (160, 160, 160, 255),
) -> Any:
    """Line grid on the ground plane. Returns the vertex list."""

    shader = pyglet.graphics.get_default_shader()
    lines = floor_lines(size, divisions)
    return shader.vertex_list(
        len(lines),
        pyglet.gl.GL_LINES,
        batch=batch,
        position=("f", lines.astype(np.float32).flatten().tolist()),
        colors=("f", _color_floats(color, len(lines))),
    )


def dispose_figure_visuals(visuals: FigureVisuals) -> None:
    for vertex_list in visuals.entries.values():
        vertex_list.delete()
    visuals.entries.clear()


__all__ = [
    "FigureVisuals",
    "create_figure_batch",
    "update_figure_visuals",
    "highlight_segment",
    "create_floor_batch",
    "dispose_figure_visuals",
]
