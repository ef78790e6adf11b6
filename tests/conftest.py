"""Shared test fixtures for makewrap."""

from __future__ import annotations

import errno
import io
import subprocess
import sys
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from makewrap.core.directory_stack import DirectoryStack
from makewrap.core.interpreter import LineInterpreter
from makewrap.models.build import BuildCommand


@pytest.fixture
def directories() -> DirectoryStack:
    """Provide a fresh, empty DirectoryStack."""
    return DirectoryStack()


@pytest.fixture
def interpreter() -> LineInterpreter:
    """Provide a LineInterpreter with empty directory state."""
    return LineInterpreter()


# ---------------------------------------------------------------------------
# Fake make: a Python script run by the current interpreter
# ---------------------------------------------------------------------------


@pytest.fixture
def make_script(tmp_path: Path) -> Callable[[str], Path]:
    """Factory fixture: write a Python script standing in for make."""
    counter = {"n": 0}

    def _factory(body: str) -> Path:
        counter["n"] += 1
        script = tmp_path / f"fake_make_{counter['n']}.py"
        header = "import os, sys\n\ndef out(text):\n    print(text, flush=True)\n\n"
        script.write_text(header + textwrap.dedent(body), encoding="utf-8")
        return script

    return _factory


@pytest.fixture
def fake_make(make_script: Callable[[str], Path]) -> Callable[..., BuildCommand]:
    """Factory fixture: build a BuildCommand that runs a fake make script."""

    def _factory(body: str, *extra_args: str, merge_stderr: bool = True) -> BuildCommand:
        script = make_script(body)
        return BuildCommand(
            program=sys.executable,
            arguments=[str(script), *extra_args],
            merge_stderr=merge_stderr,
        )

    return _factory


@pytest.fixture
def collected() -> list[str]:
    """A list to pass as an emitter via ``collected.append``."""
    return []


# ---------------------------------------------------------------------------
# Stand-in Popen for failures a real pipe cannot produce on demand
# ---------------------------------------------------------------------------


class FailingRawStream(io.RawIOBase):
    """Raw stream whose every read fails with EIO."""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Any) -> int:
        raise OSError(errno.EIO, "Input/output error")


class StubProcess:
    """Minimal ``Popen`` replacement recording how it was used."""

    def __init__(self, stdout: io.IOBase, wait_error: BaseException | None = None) -> None:
        self.stdout = stdout
        self.pid = 4242
        self.wait_error = wait_error
        self.waited = False
        self.exited = False

    def __enter__(self) -> StubProcess:
        return self

    def __exit__(self, *exc_info: Any) -> bool:
        self.exited = True
        self.stdout.close()
        return False

    def wait(self) -> int:
        self.waited = True
        if self.wait_error is not None:
            raise self.wait_error
        return 0


@pytest.fixture
def stub_popen(monkeypatch: pytest.MonkeyPatch) -> Callable[..., list[StubProcess]]:
    """Factory fixture: make ``subprocess.Popen`` return a StubProcess.

    Returns the list of created processes so tests can inspect them.
    """

    def _install(
        stdout: io.IOBase | None = None, wait_error: BaseException | None = None
    ) -> list[StubProcess]:
        created: list[StubProcess] = []

        def _popen(*args: Any, **kwargs: Any) -> StubProcess:
            stream = stdout if stdout is not None else io.BytesIO(b"")
            process = StubProcess(stream, wait_error)
            created.append(process)
            return process

        monkeypatch.setattr(subprocess, "Popen", _popen)
        return created

    return _install


@pytest.fixture
def failing_stdout() -> io.BufferedReader:
    """A buffered pipe stand-in whose reads raise ``OSError``."""
    return io.BufferedReader(FailingRawStream())
