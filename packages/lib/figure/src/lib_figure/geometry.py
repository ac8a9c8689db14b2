"""Wireframe primitives for drawing the figure.

Every primitive is an ``(N, 3)`` array of line endpoints in segment-local
coordinates (pairs of rows form one line). Renderers push them through the
segment world matrices with :func:`world_lines`.
"""

from __future__ import annotations

from typing import Dict, Mapping

import numpy as np

from .data import SIDES, BodyShape
from .skeleton import Skeleton


def box_lines(width: float, height: float, depth: float) -> np.ndarray:
    """The 12 edges of an axis-aligned box centred on the origin."""

    hx, hy, hz = width / 2.0, height / 2.0, depth / 2.0
    corners = np.array(
        [
            [sx * hx, sy * hy, sz * hz]
            for sx in (-1.0, 1.0)
            for sy in (-1.0, 1.0)
            for sz in (-1.0, 1.0)
        ],
        dtype=np.float64,
    )
    edges = []
    for a in range(8):
        for b in range(a + 1, 8):
            # corners that differ in exactly one coordinate share an edge
            if int(np.count_nonzero(corners[a] != corners[b])) == 1:
                edges.append(corners[a])
                edges.append(corners[b])
    return np.array(edges, dtype=np.float64)


def sphere_lines(radius: float, segments: int = 20) -> np.ndarray:
    """Latitude and longitude rings of a sphere."""

    if segments < 3:
        raise ValueError("segments must be at least 3.")
    theta = np.linspace(0.0, 2.0 * np.pi, segments + 1)
    lines = []

    # latitude rings, poles excluded
    for phi in np.linspace(0.0, np.pi, segments // 2 + 1)[1:-1]:
        y = radius * np.cos(phi)
        r = radius * np.sin(phi)
        ring = np.stack([r * np.cos(theta), np.full_like(theta, y), r * np.sin(theta)], axis=1)
        lines.append(_polyline_to_lines(ring))

    # longitude rings through both poles
    for angle in np.linspace(0.0, np.pi, segments // 4 + 1)[:-1]:
        ring = np.stack(
            [
                radius * np.sin(theta) * np.cos(angle),
                radius * np.cos(theta),
                radius * np.sin(theta) * np.sin(angle),
            ],
            axis=1,
        )
        lines.append(_polyline_to_lines(ring))

    return np.concatenate(lines, axis=0)


def _polyline_to_lines(points: np.ndarray) -> np.ndarray:
    starts = points[:-1]
    ends = points[1:]
    return np.stack([starts, ends], axis=1).reshape(-1, 3)


def floor_lines(size: float = 15.0, divisions: int = 8) -> np.ndarray:
    """Square grid on the ``y = 0`` plane."""

    half = size / 2.0
    ticks = np.linspace(-half, half, divisions + 1)
    lines = []
    for t in ticks:
        lines.append([t, 0.0, -half])
        lines.append([t, 0.0, half])
        lines.append([-half, 0.0, t])
        lines.append([half, 0.0, t])
    return np.array(lines, dtype=np.float64)


def figure_primitives(
    shape: BodyShape, sphere_segments: int = 20
) -> Dict[str, np.ndarray]:
    """Local geometry of each segment before its world transform."""

    primitives = {
        "torso": box_lines(2.0 * shape.torso_radius, shape.torso_height, shape.torso_radius),
        "head": box_lines(2.0 * shape.head_radius, shape.head_radius, shape.head_radius),
    }
    radii = {
        "arm": shape.arm_radius,
        "forearm": shape.forearm_radius,
        "thigh": shape.thigh_radius,
        "calf": shape.calf_radius,
    }
    for kind, radius in radii.items():
        sphere = sphere_lines(radius, sphere_segments)
        for side in SIDES:
            primitives[f"{side}_{kind}"] = sphere
    return primitives


def transform_points(matrix: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Apply an affine 4x4 matrix to an ``(N, 3)`` array of points."""

    pts = np.asarray(points, dtype=np.float64)
    homogeneous = np.hstack([pts, np.ones((pts.shape[0], 1), dtype=np.float64)])
    return (homogeneous @ np.asarray(matrix, dtype=np.float64).T)[:, :3]


def world_lines(
    skeleton: Skeleton, primitives: Mapping[str, np.ndarray]
) -> Dict[str, np.ndarray]:
    """Line endpoints of every segment in world space."""

    return {
        segment.name: transform_points(segment.world, primitives[segment.name])
        for segment in skeleton
    }


def orbit_eye(
    target: np.ndarray, distance: float, azim: float, elev: float
) -> np.ndarray:
    """Camera position orbiting ``target`` (y up, angles in degrees).

    ``azim`` is measured from +z towards +x, ``elev`` upwards from the floor.
    """
    if distance <= 0:
        raise ValueError("distance must be positive")
    azim_rad = np.radians(azim)
    elev_rad = np.radians(elev)
    offset = distance * np.array(
        [
            np.cos(elev_rad) * np.sin(azim_rad),
            np.sin(elev_rad),
            np.cos(elev_rad) * np.cos(azim_rad),
        ]
    )
    return np.asarray(target, dtype=np.float64) + offset
