"""Rigid segment nodes and world-matrix composition.

A segment keeps three matrices:

* ``rest_offset``: fixed placement relative to the parent, set once from the
  body shape and stored read-only.
* ``pose``: everything applied to the segment since its last reset. For limbs
  this includes the non-uniform stretch that turns a sphere into a limb.
* ``rotation``: the rotations alone. Children are carried by their parent's
  ``rotation`` rather than its ``pose`` so the parent's stretch never leaks
  into them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

import numpy as np

from . import transform


def _frozen_copy(matrix: np.ndarray) -> np.ndarray:
    array = np.array(matrix, dtype=np.float64, copy=True)
    if array.shape != (4, 4):
        raise ValueError(f"Expected a 4x4 matrix, got shape {array.shape}.")
    array.setflags(write=False)
    return array


@dataclass(eq=False)
class Segment:
    """A named node of the figure hierarchy.

    name: segment name (see :data:`lib_figure.data.SEGMENT_NAMES`).
    rest_offset: transform from the parent's frame to the rest placement.
    parent: parent segment, ``None`` for the root.
    pose: accumulated pose transform.
    rotation: accumulated rotation-only transform.
    world: last composed world matrix; renderers read this.
    """

    name: str
    rest_offset: np.ndarray
    parent: Optional["Segment"] = None
    pose: np.ndarray = field(default_factory=transform.identity)
    rotation: np.ndarray = field(default_factory=transform.identity)
    world: np.ndarray = field(default_factory=transform.identity)
    children: List["Segment"] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rest_offset", _frozen_copy(self.rest_offset))
        if self.parent is not None and self not in self.parent.children:
            self.parent.children.append(self)

    def __setattr__(self, name: str, value) -> None:
        if name == "rest_offset" and "rest_offset" in self.__dict__:
            raise AttributeError(f"rest_offset of {self.name!r} is immutable.")
        super().__setattr__(name, value)

    @property
    def order(self) -> int:
        """Number of ancestors: 0 for the root, 1 for torso children, 2 below."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    @property
    def root(self) -> "Segment":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def iter_branch(self) -> Iterator["Segment"]:
        """Yield this segment and then its descendants, parents first."""
        yield self
        for child in self.children:
            yield from child.iter_branch()


def compose_root(root: Segment) -> np.ndarray:
    return transform.multiply(root.rest_offset, root.pose)


def compose_first_order(torso: Segment, segment: Segment) -> np.ndarray:
    """``torsoRest . torsoPose . rest . pose``"""
    carrier = compose_root(torso)
    return transform.multiply(
        carrier, transform.multiply(segment.rest_offset, segment.pose)
    )


def compose_second_order(
    torso: Segment, parent: Segment, segment: Segment
) -> np.ndarray:
    """``torsoRest . torsoPose . parentRest . parentRotation . rest . pose``"""
    carrier = transform.multiply(
        compose_root(torso),
        transform.multiply(parent.rest_offset, parent.rotation),
    )
    return transform.multiply(
        carrier, transform.multiply(segment.rest_offset, segment.pose)
    )


def recompute_world(segment: Segment) -> np.ndarray:
    """Compose, store and return the world matrix of ``segment``."""

    parent = segment.parent
    if parent is None:
        world = compose_root(segment)
    elif parent.parent is None:
        world = compose_first_order(parent, segment)
    elif parent.parent.parent is None:
        world = compose_second_order(parent.parent, parent, segment)
    else:
        raise ValueError(
            f"Segment {segment.name!r} is {segment.order} levels deep; at most 2 supported."
        )
    segment.world = world
    return world


def recompute_branch(segment: Segment) -> None:
    """Recompute ``segment`` and every descendant, parents before children."""

    for node in segment.iter_branch():
        recompute_world(node)
