"""Line interpreter: the directory-tracking state machine.

Each line of make output is classified, first match wins:

1. ``make[N]: Entering directory '<path>'``: push ``<path>``.
2. ``make[N]: Leaving directory '<path>'``: pop, if ``<path>`` is the
   tracked directory.  A mismatched leave changes nothing and the line is
   treated as plain output.
3. ``<relative path>:<line>:<col>: error|warning|note:``: emit the line
   prefixed with ``<tracked directory>/``.
4. Anything else: emit unchanged.

Every line produces exactly one output line and order is preserved.
"""

from __future__ import annotations

import re

from makewrap.core.directory_stack import DirectoryStack
from makewrap.models.lines import InterpretedLine, LineKind

_LINE_TERMINATORS = "\r\n"


class LineInterpreter:
    """Classifies make output lines and annotates diagnostics.

    Parameters
    ----------
    directories:
        Directory state to drive.  A fresh ``DirectoryStack`` is created if
        not provided; the interpreter owns it either way.
    """

    ENTER_RE = re.compile(r"^make\[[1-9]\]: Entering directory '([^']+)'")
    LEAVE_RE = re.compile(r"^make\[[1-9]\]: Leaving directory '([^']+)'")
    DIAGNOSTIC_RE = re.compile(r"^[^/][^:]+:[0-9]+:[0-9]+: (error|warning|note):")

    def __init__(self, directories: DirectoryStack | None = None) -> None:
        self._directories = directories or DirectoryStack()

    @property
    def current_directory(self) -> str:
        return self._directories.current_directory

    @property
    def directories(self) -> DirectoryStack:
        return self._directories

    def process(self, line: str) -> str | None:
        """Return the line to emit for ``line``, or ``None`` to suppress it.

        The trailing line terminator is stripped; the caller re-adds one.
        """
        return self.interpret(line).text

    def interpret(self, line: str) -> InterpretedLine:
        """Classify ``line``, update directory state, and build its output.

        Raises
        ------
        DirectoryStateError
            If a matching leave announcement names a root directory.
        """
        text = line.rstrip(_LINE_TERMINATORS)

        match = self.ENTER_RE.match(text)
        if match:
            self._directories.enter(match.group(1))
            return self._result(LineKind.ENTER, text)

        match = self.LEAVE_RE.match(text)
        if match:
            if self._directories.leave(match.group(1)):
                return self._result(LineKind.LEAVE, text)
            return self._result(LineKind.PASSTHROUGH, text)

        match = self.DIAGNOSTIC_RE.match(text)
        if match:
            return self._result(
                LineKind.DIAGNOSTIC,
                f"{self.current_directory}/{text}",
                severity=match.group(1),
            )

        return self._result(LineKind.PASSTHROUGH, text)

    def _result(
        self, kind: LineKind, text: str | None, severity: str | None = None
    ) -> InterpretedLine:
        return InterpretedLine(
            kind=kind,
            text=text,
            directory=self.current_directory,
            severity=severity,
        )
