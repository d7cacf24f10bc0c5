"""Running external command lines and collecting their exit codes and output."""

from __future__ import annotations

import os
import signal
import subprocess
from typing import IO, Any, Optional, Union

_USE_SHELL = os.name != "nt"

OutputTarget = Union[None, int, IO[Any]]


class Process:
    """A command line that can be started, waited for, killed or captured.

    On POSIX systems the command line runs through ``/bin/sh -c``; on Windows
    it is handed to the system as it is.
    """

    def __init__(self, command_line: str) -> None:
        self.command_line = command_line
        self.exit_code = 0
        self._popen: Optional[subprocess.Popen[bytes]] = None

    @property
    def pid(self) -> Optional[int]:
        """The id of the running child, or None if none is attached."""
        return self._popen.pid if self._popen is not None else None

    def start(self, output: OutputTarget = None) -> None:
        """Start the command with stdout and stderr sent to ``output``.

        ``output`` is a file object, a file descriptor, ``subprocess.PIPE``
        or None to share this process's own output.
        """
        stderr = None if output is None else subprocess.STDOUT
        self._popen = subprocess.Popen(
            self.command_line,
            shell=_USE_SHELL,
            stdout=output,
            stderr=stderr,
        )

    def _require_started(self) -> subprocess.Popen[bytes]:
        if self._popen is None:
            raise RuntimeError("process has not been started")
        return self._popen

    def wait(self) -> int:
        """Wait for the child to finish and return its exit code."""
        popen = self._require_started()
        self.exit_code = popen.wait()
        self._popen = None
        return self.exit_code

    def kill(self) -> None:
        """Stop the child: SIGUSR1 on POSIX, termination on Windows."""
        popen = self._require_started()
        if os.name == "nt":
            popen.terminate()
        else:
            popen.send_signal(signal.SIGUSR1)
        self.exit_code = popen.wait()
        self._popen = None

    def result_of(self) -> int:
        """Run the command with shared output and return its exit code."""
        self.start(None)
        return self.wait()

    def output_of(self) -> str:
        """Run the command and return its combined stdout and stderr.

        The exit code is left in ``exit_code``.
        """
        self.start(subprocess.PIPE)
        popen = self._require_started()
        data, _ = popen.communicate()
        self.wait()
        return data.decode("utf-8", errors="replace")