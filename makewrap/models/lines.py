"""Line classification models produced by the line interpreter."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class LineKind(str, Enum):
    """Category assigned to one line of build output."""

    ENTER = "enter"
    LEAVE = "leave"
    DIAGNOSTIC = "diagnostic"
    PASSTHROUGH = "passthrough"


class InterpretedLine(BaseModel):
    """One processed line of build output.

    ``text`` is the line to emit (without terminator), or ``None`` when the
    line is suppressed.  ``directory`` is the tracked directory after the
    line was processed.
    """

    model_config = ConfigDict(frozen=True)

    kind: LineKind
    text: str | None
    directory: str = ""
    severity: str | None = None  # error / warning / note for diagnostics
