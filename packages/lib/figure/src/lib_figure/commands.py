"""Map discrete input commands onto skeleton manipulations.

The dispatcher keeps a selected segment and turns the four directional
commands (``up``, ``down``, ``left``, ``right``) into the manipulation that
makes sense for it. Selection cycles through :data:`SEGMENT_NAMES`.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Tuple

from .data import SEGMENT_LABELS, SEGMENT_NAMES
from .errors import UnknownSegment, UnsupportedCommand
from .skeleton import Skeleton

logger = logging.getLogger(__name__)

COMMANDS = ("up", "down", "left", "right")

Action = Callable[[Skeleton, float], None]


def _hinge(kind: str, side: str, sign: float) -> Action:
    def action(skeleton: Skeleton, step: float) -> None:
        getattr(skeleton, f"rotate_{kind}")(side, sign * step)

    return action


def _arm(side: str, sign: float, axis: str) -> Action:
    def action(skeleton: Skeleton, step: float) -> None:
        skeleton.rotate_arm(side, sign * step, axis)

    return action


_BINDINGS: Dict[Tuple[str, str], Action] = {
    ("torso", "up"): lambda s, step: s.move_torso(step, True),
    ("torso", "down"): lambda s, step: s.move_torso(-step, False),
    ("torso", "left"): lambda s, step: s.rotate_torso(step),
    ("torso", "right"): lambda s, step: s.rotate_torso(-step),
    ("head", "left"): lambda s, step: s.rotate_head(step),
    ("head", "right"): lambda s, step: s.rotate_head(-step),
    ("left_arm", "up"): _arm("left", 1.0, "z"),
    ("left_arm", "down"): _arm("left", -1.0, "z"),
    ("left_arm", "left"): _arm("left", -1.0, "y"),
    ("left_arm", "right"): _arm("left", 1.0, "y"),
    ("right_arm", "up"): _arm("right", -1.0, "z"),
    ("right_arm", "down"): _arm("right", 1.0, "z"),
    ("right_arm", "left"): _arm("right", -1.0, "y"),
    ("right_arm", "right"): _arm("right", 1.0, "y"),
}

for _kind in ("forearm", "thigh", "calf"):
    for _side in ("left", "right"):
        _BINDINGS[(f"{_side}_{_kind}", "up")] = _hinge(_kind, _side, -1.0)
        _BINDINGS[(f"{_side}_{_kind}", "down")] = _hinge(_kind, _side, 1.0)


def supported_commands(name: str) -> Tuple[str, ...]:
    """Commands bound for segment ``name``, in :data:`COMMANDS` order."""
    if name not in SEGMENT_NAMES:
        raise UnknownSegment(f"Unknown segment {name!r}.")
    return tuple(command for command in COMMANDS if (name, command) in _BINDINGS)


class CommandDispatcher:
    """Selected-segment state plus command dispatch for one skeleton."""

    def __init__(self, skeleton: Skeleton, *, step: float = 0.1) -> None:
        self.skeleton = skeleton
        self.step = step
        self._index = 0

    @property
    def selected(self) -> str:
        return SEGMENT_NAMES[self._index]

    @property
    def selected_label(self) -> str:
        return SEGMENT_LABELS[self.selected]

    def select(self, name: str) -> None:
        if name not in SEGMENT_NAMES:
            raise UnknownSegment(f"Unknown segment {name!r}.")
        self._index = SEGMENT_NAMES.index(name)
        logger.info("%s selected", self.selected_label)

    def select_next(self) -> str:
        self._index = (self._index + 1) % len(SEGMENT_NAMES)
        logger.info("%s selected", self.selected_label)
        return self.selected

    def select_previous(self) -> str:
        self._index = (self._index - 1) % len(SEGMENT_NAMES)
        logger.info("%s selected", self.selected_label)
        return self.selected

    def dispatch(self, command: str) -> None:
        """Apply ``command`` to the selected segment.

        Raises:
                UnsupportedCommand: the command is unknown or has no binding
                        for the selected segment.
        """
        action = _BINDINGS.get((self.selected, command))
        if action is None:
            raise UnsupportedCommand(self.selected, command)
        action(self.skeleton, self.step)
