"""Affine 4x4 and rotation 3x3 matrix helpers.

Matrices use the column-vector convention: a point ``p`` is mapped by
``m @ [x, y, z, 1]`` and translations live in the last column. Every helper
returns a new ``float64`` array and leaves its inputs untouched.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .errors import InvalidAxis, SingularMatrixError

AXES = ("x", "y", "z")

# Beyond this the inverse carries no significant digits
_MAX_CONDITION = 1.0 / np.finfo(np.float64).eps


def identity() -> np.ndarray:
    """Return a fresh 4x4 identity matrix."""

    return np.eye(4, dtype=np.float64)


def multiply(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Return ``a @ b``. Order matters: ``a`` is the outer (parent) transform."""

    return np.asarray(a, dtype=np.float64) @ np.asarray(b, dtype=np.float64)


def invert(m: np.ndarray) -> np.ndarray:
    """Return the inverse of ``m``.

    Raises:
            SingularMatrixError: ``m`` is rank deficient (e.g. after a zero
                    scale) or holds non-finite entries.
    """

    matrix = np.asarray(m, dtype=np.float64)
    if not np.all(np.isfinite(matrix)):
        raise SingularMatrixError("Matrix has non-finite entries.")
    condition = float(np.linalg.cond(matrix))
    if not np.isfinite(condition) or condition > _MAX_CONDITION:
        raise SingularMatrixError(
            f"Matrix is not invertible (condition number {condition:.3e})."
        )
    try:
        return np.linalg.inv(matrix)
    except np.linalg.LinAlgError as exc:
        raise SingularMatrixError(str(exc)) from exc


def rotation_3x3(angle: float, axis: str) -> np.ndarray:
    """Rotation matrix of ``angle`` radians around a principal axis."""

    c = float(np.cos(angle))
    s = float(np.sin(angle))
    if axis == "x":
        rows = [[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]]
    elif axis == "y":
        rows = [[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]]
    elif axis == "z":
        rows = [[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]]
    else:
        raise InvalidAxis(axis)
    return np.array(rows, dtype=np.float64)


def translation(x: float, y: float, z: float) -> np.ndarray:
    matrix = identity()
    matrix[:3, 3] = (x, y, z)
    return matrix


def rotation(angle: float, axis: str) -> np.ndarray:
    matrix = identity()
    matrix[:3, :3] = rotation_3x3(angle, axis)
    return matrix


def scaling(sx: float, sy: float, sz: float) -> np.ndarray:
    return np.diag([sx, sy, sz, 1.0]).astype(np.float64)


def translate(m: np.ndarray, x: float, y: float, z: float) -> np.ndarray:
    """Return ``m @ T(x, y, z)``."""

    return multiply(m, translation(x, y, z))


def rotate(m: np.ndarray, angle: float, axis: str) -> np.ndarray:
    """Return ``m @ R(angle, axis)``."""

    return multiply(m, rotation(angle, axis))


def scale(m: np.ndarray, sx: float, sy: float, sz: float) -> np.ndarray:
    """Return ``m @ S(sx, sy, sz)``."""

    return multiply(m, scaling(sx, sy, sz))


def rotate_vector(v: Sequence[float], angle: float, axis: str) -> np.ndarray:
    """Rotate a 3-vector around a principal axis."""

    vector = np.asarray(v, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {vector.shape}.")
    return rotation_3x3(angle, axis) @ vector


def rotation_part(m: np.ndarray) -> np.ndarray:
    """Upper-left 3x3 block of an affine matrix (copy)."""

    return np.array(m[:3, :3], dtype=np.float64, copy=True)


def translation_part(m: np.ndarray) -> np.ndarray:
    """Translation column of an affine matrix (copy)."""

    return np.array(m[:3, 3], dtype=np.float64, copy=True)


__all__ = [
    "AXES",
    "identity",
    "multiply",
    "invert",
    "rotation_3x3",
    "translation",
    "rotation",
    "scaling",
    "translate",
    "rotate",
    "scale",
    "rotate_vector",
    "rotation_part",
    "translation_part",
]
