"""Ten-segment humanoid figure with manual posing and a walk cycle."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Mapping, Optional, Tuple

import numpy as np

from . import transform
from .data import (
    LIMB_KINDS,
    SEGMENT_NAMES,
    SEGMENT_PARENTS,
    SIDES,
    BodyShape,
    GaitParameters,
)
from .errors import UnknownSegment
from .segment import Segment, recompute_branch, recompute_world
from .walk import WalkState, gait_deltas, ground_stick_offset

logger = logging.getLogger(__name__)


def _side_offset(side: str, x: float, y: float, z: float) -> np.ndarray:
    """Rest offset mirrored across the x axis for the right side."""
    if side == "left":
        return transform.translation(x, y, z)
    return transform.translation(-x, y, z)


def _limb_stretch(offset: float, length_rescale: float) -> np.ndarray:
    """Hang a sphere below its joint and stretch it along y."""
    matrix = transform.translate(transform.identity(), 0.0, -offset, 0.0)
    return transform.scale(matrix, 1.0, length_rescale, 1.0)


def rest_offsets(shape: BodyShape) -> Dict[str, np.ndarray]:
    """Derive every segment's rest offset from the body measurements."""

    half_height = shape.torso_height / 2.0
    offsets = {
        "torso": transform.translation(0.0, half_height + shape.leg_length, 0.0),
        "head": transform.translation(0.0, half_height + shape.head_radius, 0.0),
    }
    for side in SIDES:
        offsets[f"{side}_arm"] = _side_offset(
            side, shape.torso_radius + shape.arm_radius, half_height, 0.0
        )
        offsets[f"{side}_forearm"] = transform.translation(
            0.0, -2.0 * shape.arm_radius * shape.arm_length_rescale - shape.gap, 0.0
        )
        offsets[f"{side}_thigh"] = _side_offset(
            side, shape.torso_radius / 2.0, -half_height, 0.0
        )
        offsets[f"{side}_calf"] = transform.translation(
            0.0, -shape.thigh_length - 2.0 * shape.gap, 0.0
        )
    return offsets


def limb_stretches(shape: BodyShape) -> Dict[str, np.ndarray]:
    """Initial pose of each limb: the stretch from sphere to limb."""

    per_kind = {
        "arm": _limb_stretch(
            shape.arm_radius * shape.arm_length_rescale, shape.arm_length_rescale
        ),
        "forearm": _limb_stretch(
            shape.forearm_radius * shape.forearm_length_rescale,
            shape.forearm_length_rescale,
        ),
        "thigh": _limb_stretch(
            shape.thigh_radius * shape.thigh_length_rescale + shape.gap,
            shape.thigh_length_rescale,
        ),
        "calf": _limb_stretch(
            shape.calf_radius * shape.calf_length_rescale, shape.calf_length_rescale
        ),
    }
    return {
        f"{side}_{kind}": per_kind[kind] for side in SIDES for kind in LIMB_KINDS
    }


class Skeleton:
    """Owns the ten segments of the figure and its walk state.

    Every manipulation updates the relevant accumulators and eagerly
    recomputes the world matrices that depend on them, so a renderer can read
    ``segment.world`` right after any call.
    """

    def __init__(
        self,
        shape: Optional[BodyShape] = None,
        gait: Optional[GaitParameters] = None,
    ) -> None:
        self.shape = shape or BodyShape()
        self.gait = gait or GaitParameters()
        self.walk_state = WalkState(frame_cap=self.gait.frame_cap)
        self._walk_direction = np.asarray(self.gait.walk_direction, dtype=np.float64)

        offsets = rest_offsets(self.shape)
        stretches = limb_stretches(self.shape)
        self._segments: Dict[str, Segment] = {}
        for name in SEGMENT_NAMES:
            parent_name = SEGMENT_PARENTS[name]
            parent = self._segments[parent_name] if parent_name else None
            segment = Segment(name=name, rest_offset=offsets[name], parent=parent)
            if name in stretches:
                segment.pose = stretches[name].copy()
            self._segments[name] = segment

        recompute_branch(self.torso)

    # ------------------------------------------------------------------
    # lookup

    @property
    def segments(self) -> Mapping[str, Segment]:
        return dict(self._segments)

    @property
    def torso(self) -> Segment:
        return self._segments["torso"]

    @property
    def head(self) -> Segment:
        return self._segments["head"]

    @property
    def leg_length(self) -> float:
        return self.shape.leg_length

    def segment(self, name: str) -> Segment:
        try:
            return self._segments[name]
        except KeyError:
            raise UnknownSegment(f"Unknown segment {name!r}.") from None

    def limb(self, kind: str, side: str) -> Segment:
        if side not in SIDES:
            raise UnknownSegment(f"Unknown side {side!r}; expected 'left' or 'right'.")
        if kind not in LIMB_KINDS:
            raise UnknownSegment(f"Unknown limb {kind!r}.")
        return self._segments[f"{side}_{kind}"]

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments[name] for name in SEGMENT_NAMES)

    def __len__(self) -> int:
        return len(self._segments)

    def world_matrices(self) -> Dict[str, np.ndarray]:
        """Snapshot of every world matrix, keyed by segment name."""
        return {name: seg.world.copy() for name, seg in self._segments.items()}

    def recompute_world(self, segment: Segment) -> np.ndarray:
        return recompute_world(segment)

    # ------------------------------------------------------------------
    # torso

    def rotate_torso(self, angle: float) -> None:
        """Turn the whole figure around its vertical axis."""
        rotation = transform.rotation(angle, "y")
        torso = self.torso
        torso.pose = transform.multiply(torso.pose, rotation)
        torso.rotation = transform.multiply(torso.rotation, rotation)
        recompute_branch(torso)

    def move_torso(self, speed: float, forward: bool) -> None:
        """Translate the figure along its walk direction.

        Forward moves drive the walk cycle: the first one straightens the
        legs and starts the cycle, each further one bobs the torso and plays
        one gait frame. Any other move stops the cycle.
        """
        step = speed * self._walk_direction
        torso = self.torso
        torso.pose = transform.translate(torso.pose, *step)

        if not forward:
            self.walk_state.reset()
        elif not self.walk_state.walking:
            self._reset_legs_for_walk()
            self.walk_state.start()
        else:
            self._stick_to_ground()
            self._walk()

        recompute_branch(torso)

    # ------------------------------------------------------------------
    # limbs

    def rotate_head(self, angle: float) -> None:
        head = self.head
        rotation = transform.rotation(angle, "y")
        head.pose = transform.multiply(head.pose, rotation)
        head.rotation = transform.multiply(head.rotation, rotation)
        recompute_world(head)
        self.walk_state.reset()

    def rotate_arm(self, side: str, angle: float, axis: str) -> None:
        self._rotate_joint(self.limb("arm", side), transform.rotation(angle, axis))
        self.walk_state.reset()

    def rotate_forearm(self, side: str, angle: float) -> None:
        forearm = self.limb("forearm", side)
        forearm.pose = transform.multiply(transform.rotation(angle, "x"), forearm.pose)
        recompute_world(forearm)
        self.walk_state.reset()

    def rotate_thigh(self, side: str, angle: float) -> None:
        self._rotate_joint(self.limb("thigh", side), transform.rotation(angle, "x"))
        self.walk_state.reset()

    def rotate_calf(self, side: str, angle: float) -> None:
        self._rotate_joint(self.limb("calf", side), transform.rotation(angle, "x"))
        self.walk_state.reset()

    def reset_walk(self) -> None:
        self.walk_state.reset()

    def _rotate_joint(self, segment: Segment, rotation: np.ndarray) -> None:
        # joint side of the stretch
        segment.rotation = transform.multiply(rotation, segment.rotation)
        segment.pose = transform.multiply(rotation, segment.pose)
        recompute_branch(segment)

    # ------------------------------------------------------------------
    # walk cycle

    def _leg_segments(self) -> Tuple[Segment, ...]:
        return tuple(self.limb(kind, side) for kind in ("thigh", "calf") for side in SIDES)

    def _reset_legs_for_walk(self) -> None:
        """Undo manual leg rotations, keeping each leg's stretch."""
        for segment in self._leg_segments():
            segment.pose = transform.multiply(
                transform.invert(segment.rotation), segment.pose
            )
            segment.rotation = transform.identity()
        for side in SIDES:
            recompute_branch(self.limb("thigh", side))
        logger.debug("Legs reset to rest for walking")

    def _stick_to_ground(self) -> None:
        arriving = (self.walk_state.frame + 1) % self.walk_state.frame_cap
        dy = ground_stick_offset(arriving, self.gait, self.leg_length)
        self.torso.pose = transform.translate(self.torso.pose, 0.0, dy, 0.0)

    def _walk(self) -> None:
        for name, angle in gait_deltas(self.walk_state.frame, self.gait).items():
            self._rotate_joint(self._segments[name], transform.rotation(angle, "x"))
        self.walk_state.advance()
