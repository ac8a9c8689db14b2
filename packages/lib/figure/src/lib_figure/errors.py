"""Exceptions raised by the figure model."""


class FigureError(Exception):
    """Base class for every error raised by :mod:`lib_figure`."""


class InvalidAxis(FigureError, ValueError):
    """A rotation was requested around an axis other than x, y or z."""

    def __init__(self, axis: object) -> None:
        super().__init__(f"Unknown rotation axis {axis!r}; expected 'x', 'y' or 'z'.")
        self.axis = axis


class SingularMatrixError(FigureError, ArithmeticError):
    """A matrix could not be inverted."""


class InvalidFrameCap(FigureError, ValueError):
    """The walk-cycle frame cap is not a positive multiple of four."""

    def __init__(self, frame_cap: object) -> None:
        super().__init__(
            f"Walk frame cap must be a positive multiple of 4, got {frame_cap!r}."
        )
        self.frame_cap = frame_cap


class InvalidBodyShape(FigureError, ValueError):
    """A body measurement is out of range."""


class UnknownSegment(FigureError, KeyError):
    """No segment with the requested name or side exists."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0]) if self.args else ""


class UnsupportedCommand(FigureError, ValueError):
    """A command has no binding for the selected segment."""

    def __init__(self, segment: str, command: str) -> None:
        super().__init__(f"Command {command!r} is not supported by segment {segment!r}.")
        self.segment = segment
        self.command = command
