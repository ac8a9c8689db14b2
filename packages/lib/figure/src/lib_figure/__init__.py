from .commands import COMMANDS, CommandDispatcher, supported_commands
from .data import SEGMENT_LABELS, SEGMENT_NAMES, SEGMENT_PARENTS, BodyShape, GaitParameters
from .errors import (
    FigureError,
    InvalidAxis,
    InvalidBodyShape,
    InvalidFrameCap,
    SingularMatrixError,
    UnknownSegment,
    UnsupportedCommand,
)
from .segment import Segment, recompute_world
from .skeleton import Skeleton
from .util_3d import (
    FigureVisuals,
    create_figure_batch,
    create_floor_batch,
    dispose_figure_visuals,
    highlight_segment,
    update_figure_visuals,
)
from .walk import WalkState, gait_deltas, ground_stick_offset

__all__ = [
    "BodyShape",
    "GaitParameters",
    "SEGMENT_NAMES",
    "SEGMENT_PARENTS",
    "SEGMENT_LABELS",
    "Segment",
    "recompute_world",
    "Skeleton",
    "WalkState",
    "gait_deltas",
    "ground_stick_offset",
    "COMMANDS",
    "CommandDispatcher",
    "supported_commands",
    "FigureError",
    "InvalidAxis",
    "InvalidBodyShape",
    "InvalidFrameCap",
    "SingularMatrixError",
    "UnknownSegment",
    "UnsupportedCommand",
    "FigureVisuals",
    "create_figure_batch",
    "create_floor_batch",
    "update_figure_visuals",
    "highlight_segment",
    "dispose_figure_visuals",
]
