"""Fatal error types raised while wrapping a build.

Every condition here terminates the run: nothing is retried and no partial
results are produced.
"""

from __future__ import annotations


class MakewrapError(RuntimeError):
    """Base class for all fatal makewrap errors."""


class BuildLaunchError(MakewrapError):
    """Raised when the build program cannot be started."""


class OutputReadError(MakewrapError):
    """Raised when reading the build's output stream fails mid-run."""


class BuildWaitError(MakewrapError):
    """Raised when waiting for the build process to terminate fails."""


class DirectoryStateError(MakewrapError):
    """Raised when a directory announcement leaves the tracked state inconsistent.

    Leaving a directory that has no parent (a filesystem root) means every
    later annotation would carry a wrong path.
    """
