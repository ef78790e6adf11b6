"""Build runner: spawns make and streams its output through the interpreter.

The child is started without a shell, its stdout is piped (with stderr
merged in by default), and each line is interpreted and emitted as soon as
it is read.  Only ``\\n`` ends a line; a bare ``\\r`` (progress output) stays
inside the line it belongs to.  The ``Popen`` object is used as a context
manager so the pipe is closed and the child is reaped on every exit path.
"""

from __future__ import annotations

import io
import logging
import subprocess
import sys
from collections import Counter
from collections.abc import Callable, Iterator
from contextlib import closing

from makewrap.core.errors import BuildLaunchError, BuildWaitError, OutputReadError
from makewrap.core.interpreter import LineInterpreter
from makewrap.models.build import BuildCommand, BuildResult
from makewrap.models.lines import InterpretedLine, LineKind

logger = logging.getLogger(__name__)


def write_line(line: str) -> None:
    """Default emitter: one newline-terminated line on stdout, flushed."""
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


class BuildRunner:
    """Runs one build and forwards its interpreted output.

    Parameters
    ----------
    command:
        The build invocation.
    interpreter:
        Line interpreter to feed.  A fresh one is created if not provided.
    emit:
        Callable receiving each output line without terminator.  Defaults to
        writing to ``sys.stdout``.
    """

    def __init__(
        self,
        command: BuildCommand,
        interpreter: LineInterpreter | None = None,
        emit: Callable[[str], None] | None = None,
    ) -> None:
        self._command = command
        self._interpreter = interpreter or LineInterpreter()
        self._emit = emit or write_line
        self._returncode: int | None = None

    @property
    def command(self) -> BuildCommand:
        return self._command

    @property
    def interpreter(self) -> LineInterpreter:
        return self._interpreter

    # ------------------------------------------------------------------
    # Process lifecycle
    # ------------------------------------------------------------------

    def _spawn(self) -> subprocess.Popen[bytes]:
        argv = self._command.argv
        stderr = subprocess.STDOUT if self._command.merge_stderr else None
        try:
            process = subprocess.Popen(argv, stdout=subprocess.PIPE, stderr=stderr)
        except OSError as exc:
            raise BuildLaunchError(
                f"Failed to start {self._command.program!r}: {exc.strerror or exc}"
            ) from exc
        logger.info("Started %s (pid %d)", " ".join(argv), process.pid)
        return process

    def _reader(self, process: subprocess.Popen[bytes]) -> io.TextIOWrapper:
        if process.stdout is None:
            raise OutputReadError("Build output is not connected to a pipe")
        # newline="\n": split on LF only, keep CR characters in the text
        return io.TextIOWrapper(
            process.stdout, errors="replace", newline="\n"
        )

    def iter_lines(self) -> Iterator[InterpretedLine]:
        """Run the build, yielding each interpreted line as it is read.

        The child's return code is available from ``returncode`` once the
        generator is exhausted.

        Raises
        ------
        BuildLaunchError
            If the build program cannot be started.
        OutputReadError
            If reading the output pipe fails.
        BuildWaitError
            If waiting for the child fails.
        """
        self._returncode = None
        with self._spawn() as process:
            stream = self._reader(process)
            try:
                for line in stream:
                    yield self._interpreter.interpret(line)
            except (OSError, ValueError) as exc:
                raise OutputReadError(f"Failed to read build output: {exc}") from exc

            try:
                self._returncode = process.wait()
            except (OSError, subprocess.SubprocessError) as exc:
                raise BuildWaitError(
                    f"Failed to wait for {self._command.program!r}: {exc}"
                ) from exc

        logger.info("%s exited with status %d", self._command.program, self._returncode)

    @property
    def returncode(self) -> int | None:
        return self._returncode

    def run(self) -> BuildResult:
        """Run the build to completion, emitting every output line.

        Returns a ``BuildResult`` with the child's return code and line
        statistics.  If emitting fails (e.g. a closed stdout), the output
        pipe is closed and the child reaped before the error propagates.
        """
        counts: Counter[LineKind] = Counter()
        severities: Counter[str] = Counter()
        lines_read = 0
        lines_written = 0

        with closing(self.iter_lines()) as lines:
            for interpreted in lines:
                lines_read += 1
                counts[interpreted.kind] += 1
                if interpreted.severity:
                    severities[interpreted.severity] += 1
                if interpreted.text is not None:
                    self._emit(interpreted.text)
                    lines_written += 1

        if self._returncode is None:
            raise BuildWaitError(f"{self._command.program!r} finished without an exit status")
        return BuildResult(
            returncode=self._returncode,
            lines_read=lines_read,
            lines_written=lines_written,
            counts=dict(counts),
            severities=dict(severities),
        )
