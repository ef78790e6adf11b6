"""Build invocation and outcome models."""

from __future__ import annotations

import shlex

from pydantic import BaseModel, ConfigDict, Field

from makewrap.models.lines import LineKind


class BuildCommand(BaseModel):
    """The build tool invocation: a fixed program plus forwarded arguments."""

    model_config = ConfigDict(frozen=True)

    program: str = "make"
    arguments: list[str] = []
    merge_stderr: bool = True  # fold the child's stderr into the filtered stream

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.arguments]

    def display(self) -> str:
        """Render the shell-style echo line printed before the build starts."""
        return "+ " + " ".join(shlex.quote(part) for part in self.argv)


class BuildResult(BaseModel):
    """Outcome of one filtered build run."""

    model_config = ConfigDict(frozen=True)

    returncode: int
    lines_read: int = 0
    lines_written: int = 0
    counts: dict[LineKind, int] = Field(default_factory=dict)
    severities: dict[str, int] = Field(default_factory=dict)

    @property
    def exit_status(self) -> int:
        """Exit status to report for the wrapped build.

        A child killed by signal N reports ``-N`` from ``Popen``; shells
        report that as ``128 + N``, and so does this.
        """
        if self.returncode < 0:
            return 128 - self.returncode
        return self.returncode

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0
