"""人形モデルの体型・歩行パラメータとセグメント構成の定義"""

from dataclasses import dataclass, fields
from typing import Dict, Optional, Tuple

import numpy as np

from .errors import InvalidBodyShape, InvalidFrameCap


@dataclass(frozen=True)
class BodyShape:
    """体型パラメータ。構築時に一度だけ使われ、以後は変更されない。

    attributes:
            torso_height, torso_radius: 胴体の箱の高さと半幅
            head_radius: 頭の箱の大きさ
            *_length_rescale: 球を y 方向に引き伸ばして四肢の形にする倍率
            *_radius: 四肢の球の半径
            gap: セグメント間の隙間
    """

    torso_height: float = 1.5
    torso_radius: float = 0.75
    head_radius: float = 0.32
    arm_length_rescale: float = 2.5
    arm_radius: float = 0.15
    forearm_length_rescale: float = 8.0
    forearm_radius: float = 0.075
    thigh_length_rescale: float = 3.0
    thigh_radius: float = 0.32
    calf_length_rescale: float = 5.0
    calf_radius: float = 0.1
    gap: float = 0.06

    def __post_init__(self) -> None:
        for item in fields(self):
            value = float(getattr(self, item.name))
            if not np.isfinite(value):
                raise InvalidBodyShape(f"{item.name} must be finite, got {value}.")
            if item.name == "gap":
                if value < 0.0:
                    raise InvalidBodyShape(f"gap must be non-negative, got {value}.")
            elif value <= 0.0:
                raise InvalidBodyShape(f"{item.name} must be positive, got {value}.")

    @property
    def thigh_length(self) -> float:
        return 2.0 * self.thigh_radius * self.thigh_length_rescale

    @property
    def calf_length(self) -> float:
        return 2.0 * self.calf_radius * self.calf_length_rescale

    @property
    def leg_length(self) -> float:
        """股関節から足先までの長さ (太もも + ふくらはぎ + 隙間 2 つ)。"""
        return self.thigh_length + self.calf_length + 2.0 * self.gap


@dataclass(frozen=True)
class GaitParameters:
    """歩行サイクルのパラメータ。

    角度の変化量はすべてフレームごとの増分 (ラジアン)。
    fwd_* は振り出し側、bwd_* は支持側で、fwd > bwd で前後非対称の歩容になる。
    """

    walk_direction: Tuple[float, float, float] = (0.0, 0.0, 1.0)
    frame_cap: int = 80
    fwd_thigh_angle_var: float = 0.04
    bwd_thigh_angle_var: float = 0.02
    fwd_calf_angle_var: float = 0.02
    bwd_calf_angle_var: float = 0.0

    def __post_init__(self) -> None:
        validate_frame_cap(self.frame_cap)
        if len(self.walk_direction) != 3:
            raise ValueError("walk_direction must have three components.")

    @property
    def quarter(self) -> int:
        return self.frame_cap // 4


def validate_frame_cap(frame_cap: int) -> int:
    """frame_cap が 4 の正の倍数であることを確認する。"""
    if (
        isinstance(frame_cap, bool)
        or not isinstance(frame_cap, (int, np.integer))
        or frame_cap <= 0
        or frame_cap % 4 != 0
    ):
        raise InvalidFrameCap(frame_cap)
    return int(frame_cap)


# セグメント名 (選択順)
SEGMENT_NAMES = (
    "torso",
    "head",
    "left_arm",
    "right_arm",
    "left_forearm",
    "right_forearm",
    "left_thigh",
    "right_thigh",
    "left_calf",
    "right_calf",
)

# セグメントの親子関係 (胴体がルート)
SEGMENT_PARENTS: Dict[str, Optional[str]] = {
    "torso": None,
    "head": "torso",
    "left_arm": "torso",
    "right_arm": "torso",
    "left_forearm": "left_arm",
    "right_forearm": "right_arm",
    "left_thigh": "torso",
    "right_thigh": "torso",
    "left_calf": "left_thigh",
    "right_calf": "right_thigh",
}

# 表示用ラベル
SEGMENT_LABELS = {
    "torso": "Torso",
    "head": "Head",
    "left_arm": "Left arm",
    "right_arm": "Right arm",
    "left_forearm": "Left forearm",
    "right_forearm": "Right forearm",
    "left_thigh": "Left thigh",
    "right_thigh": "Right thigh",
    "left_calf": "Left calf",
    "right_calf": "Right calf",
}

SIDES = ("left", "right")

# 左右対称な四肢の種類
LIMB_KINDS = ("arm", "forearm", "thigh", "calf")
