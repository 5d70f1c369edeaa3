"""Execution of the wrapped git process.

The child inherits the parent's stdin, stdout, stderr and environment
directly, so interactive prompts (merge messages, SSH passphrases, pagers)
keep working. Output is never captured or buffered.

Signal Handling:
    Ctrl-C reaches the child through the terminal's process group; the
    wrapper ignores the resulting KeyboardInterrupt and keeps waiting so the
    child's own exit code is reported. SIGTERM and SIGHUP sent to the wrapper
    alone are forwarded to the child.

Example:
    >>> runner = ProcessRunner("git")
    >>> exit_code = runner.run(["-c", "user.name=alice", "commit"], cwd="/src/project")
"""

import os
import signal
import subprocess
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import structlog

from gham.git.exceptions import GitLaunchError

log = structlog.get_logger(__name__)

FORWARDED_SIGNALS = ("SIGTERM", "SIGHUP")


@contextmanager
def forward_signals(process: subprocess.Popen[bytes]) -> Iterator[None]:
    """Relay termination signals received by this process to ``process``.

    Only installs handlers on POSIX from the main thread, where Python
    allows it; elsewhere default signal propagation applies.
    """
    if os.name != "posix" or threading.current_thread() is not threading.main_thread():
        yield
        return

    def relay(signum: int, _frame: object) -> None:
        if process.poll() is None:
            log.debug("forwarding_signal", signal=signum, pid=process.pid)
            process.send_signal(signum)

    previous = {}
    for name in FORWARDED_SIGNALS:
        signum = getattr(signal, name, None)
        if signum is not None:
            previous[signum] = signal.signal(signum, relay)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


def exit_status(returncode: int) -> int:
    """Map a Popen return code to a shell-style exit status.

    A child killed by signal N reports ``-N``; shells report ``128 + N``.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


class ProcessRunner:
    """Runs the git binary with inherited stdio and returns its exit code.

    Attributes:
        git_binary: Executable to launch (name on PATH or absolute path)
    """

    def __init__(self, git_binary: str = "git") -> None:
        self.git_binary = git_binary

    def run(self, args: Sequence[str], cwd: str | Path) -> int:
        """Launch git and block until it exits.

        Args:
            args: Arguments after the binary name, passed through verbatim
            cwd: Working directory for the child

        Returns:
            The child's exit status

        Raises:
            GitLaunchError: If the binary cannot be started at all
        """
        argv = [self.git_binary, *args]

        try:
            process = subprocess.Popen(argv, cwd=cwd)  # nosec B603 # argv list, no shell
        except FileNotFoundError as e:
            raise GitLaunchError(self.git_binary, "executable not found", exit_code=127) from e
        except PermissionError as e:
            raise GitLaunchError(self.git_binary, "permission denied", exit_code=126) from e
        except OSError as e:
            raise GitLaunchError(self.git_binary, str(e), exit_code=126) from e

        log.debug("git_started", pid=process.pid, cwd=str(cwd))

        with forward_signals(process):
            while True:
                try:
                    returncode = process.wait()
                    break
                except KeyboardInterrupt:
                    # The child got the same SIGINT; let it decide how to exit
                    continue

        status = exit_status(returncode)
        log.debug("git_exited", pid=process.pid, exit_code=status)
        return status
