"""Tracked working directory of a recursive make.

``make -C`` and recursive ``$(MAKE)`` calls announce each directory they
enter and leave.  The stack mirrors those announcements:

- ``enter`` pushes the announced path verbatim.
- ``leave`` is accepted only when the announced path equals the current
  directory exactly; it then pops the stack.
- When the stack runs empty, the effective directory falls back to the
  parent of the directory that was just left, so a single enter/leave pair
  ends one level above where it started.
"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath

from makewrap.core.errors import DirectoryStateError

logger = logging.getLogger(__name__)


def parent_directory(path: str) -> str:
    """Return ``path`` with its final segment removed.

    ``/a/b/c`` -> ``/a/b``, ``/a`` -> ``/``, ``a`` -> ``""``.

    Raises
    ------
    DirectoryStateError
        If ``path`` is a root and therefore has no parent.
    """
    pure = PurePosixPath(path)
    if pure.anchor and pure == PurePosixPath(pure.anchor):
        raise DirectoryStateError(f"Cannot leave '{path}': it has no parent directory")
    parent = str(pure.parent)
    return "" if parent == "." else parent


class DirectoryStack:
    """Ordered stack of entered directories with a fallback base directory."""

    def __init__(self) -> None:
        self._stack: list[str] = []
        self._base = ""

    @property
    def current_directory(self) -> str:
        """The effective directory: stack top, else the base (initially empty)."""
        if self._stack:
            return self._stack[-1]
        return self._base

    @property
    def depth(self) -> int:
        return len(self._stack)

    def enter(self, path: str) -> None:
        self._stack.append(path)
        logger.debug("Entered %s (depth %d)", path, len(self._stack))

    def leave(self, path: str) -> bool:
        """Leave ``path`` if it is the current directory.

        Returns ``True`` when the state changed, ``False`` when the announced
        path did not match and the announcement was ignored.
        """
        if path != self.current_directory:
            logger.debug(
                "Ignoring leave of %s; tracked directory is %r",
                path,
                self.current_directory,
            )
            return False

        parent = parent_directory(path)
        if self._stack:
            self._stack.pop()
        if not self._stack:
            self._base = parent
        logger.debug("Left %s, now in %r", path, self.current_directory)
        return True

    def reset(self) -> None:
        """Return to the initial, empty state."""
        self._stack.clear()
        self._base = ""

    def __repr__(self) -> str:
        return f"DirectoryStack(stack={self._stack!r}, base={self._base!r})"
