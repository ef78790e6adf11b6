"""makewrap data models: Pydantic v2, frozen (immutable)."""

from makewrap.models.build import BuildCommand, BuildResult
from makewrap.models.lines import InterpretedLine, LineKind

__all__ = [
    # lines
    "LineKind",
    "InterpretedLine",
    # build
    "BuildCommand",
    "BuildResult",
]
