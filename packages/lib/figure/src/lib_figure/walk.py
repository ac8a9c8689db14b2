"""Procedural walk cycle.

The cycle is split into four equal quarters of ``Q = frame_cap / 4`` frames.
Each frame adds a fixed angle increment to both thighs and calves, and the
torso is bobbed vertically so the feet appear to stay on the floor.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict

from .data import GaitParameters, validate_frame_cap

logger = logging.getLogger(__name__)


@dataclass
class WalkState:
    """``walking`` flag plus the current frame in ``[0, frame_cap)``."""

    walking: bool = False
    frame: int = 0
    frame_cap: int = 80

    def __post_init__(self) -> None:
        self.frame_cap = validate_frame_cap(self.frame_cap)
        if not 0 <= self.frame < self.frame_cap:
            raise ValueError(
                f"frame must lie in [0, {self.frame_cap}), got {self.frame}."
            )

    @property
    def quarter(self) -> int:
        """Index (0-3) of the gait quarter the current frame belongs to."""
        return self.frame // (self.frame_cap // 4)

    def reset(self) -> None:
        if self.walking or self.frame:
            logger.debug("Walk cycle reset at frame %d", self.frame)
        self.walking = False
        self.frame = 0

    def start(self) -> None:
        logger.debug("Walk cycle started")
        self.walking = True
        self.frame = 0

    def advance(self) -> int:
        self.frame = (self.frame + 1) % self.frame_cap
        return self.frame


def gait_deltas(frame: int, gait: GaitParameters) -> Dict[str, float]:
    """Per-frame thigh/calf angle increments for ``frame``."""

    quarter = (frame % gait.frame_cap) // gait.quarter
    fwd_thigh = gait.fwd_thigh_angle_var
    bwd_thigh = gait.bwd_thigh_angle_var
    fwd_calf = gait.fwd_calf_angle_var
    bwd_calf = gait.bwd_calf_angle_var

    if quarter == 0:
        # left leg swings forward, right leg pushes back
        return {
            "left_thigh": -fwd_thigh,
            "right_thigh": bwd_thigh,
            "left_calf": fwd_calf,
            "right_calf": -bwd_calf,
        }
    if quarter == 1:
        return {
            "left_thigh": fwd_thigh,
            "right_thigh": -bwd_thigh,
            "left_calf": -fwd_calf,
            "right_calf": bwd_calf,
        }
    if quarter == 2:
        return {
            "left_thigh": bwd_thigh,
            "right_thigh": -fwd_thigh,
            "left_calf": -bwd_calf,
            "right_calf": fwd_calf,
        }
    return {
        "left_thigh": -bwd_thigh,
        "right_thigh": fwd_thigh,
        "left_calf": bwd_calf,
        "right_calf": -fwd_calf,
    }


def hip_phase(frame: int, frame_cap: int) -> int:
    """Position of ``frame`` inside its quarter, mirrored in quarters 2 and 4.

    The result rises 0..Q over the first quarter, falls back to 0 over the
    second, and repeats, so ``frame_cap`` itself maps to 0 again.
    """

    quarter = frame_cap // 4
    offset = frame % quarter
    if (frame // quarter) % 2 == 0:
        return offset
    return quarter - offset


def ground_stick_offset(frame: int, gait: GaitParameters, leg_length: float) -> float:
    """Vertical torso correction for arriving at ``frame`` from ``frame - 1``.

    Frame 0 is the arrival at the end of the previous cycle. Summed over a
    whole cycle the corrections cancel out.
    """

    cap = gait.frame_cap
    current = frame % cap or cap
    angle = gait.bwd_thigh_angle_var
    return leg_length * (
        math.cos(angle * hip_phase(current, cap))
        - math.cos(angle * hip_phase(current - 1, cap))
    )
