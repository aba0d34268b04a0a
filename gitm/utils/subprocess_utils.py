"""
Subprocess Utilities

One fresh process per call for the external CLIs gitm drives (git, gh),
with consistent error handling. Output must be UTF-8.
"""

import shutil
import subprocess
import time
from typing import Optional

from gitm.configs import get_logger, get_timeout
from gitm.exceptions import CommandError

logger = get_logger("utils.subprocess")

__all__ = ["run_command", "command_stdout", "missing_tools"]


def run_command(
    command: list[str],
    cwd: Optional[str] = None,
    timeout: int | float | None = None,
    error_cls: type[CommandError] = CommandError,
) -> tuple[int, str, str]:
    """
    Low-level wrapper around subprocess.run.

    Args:
        command: Full command line (binary first)
        cwd: Working directory (defaults to the current directory)
        timeout: Timeout in seconds
        error_cls: CommandError subclass raised on failure to run

    Returns:
        Tuple of (returncode, stdout, stderr)

    Raises:
        error_cls: Binary missing, timeout, or output that is not UTF-8
    """
    if timeout is None:
        timeout = get_timeout("git_command", 10)
    start_time = time.time()
    try:
        result = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise error_cls(f"{command[0]} not found in PATH", command=command)
    except subprocess.TimeoutExpired:
        raise error_cls(f"{command[0]} timed out after {timeout}s", command=command)

    try:
        stdout = result.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise error_cls(
            f"{command[0]} produced non-UTF-8 output: {e}",
            command=command,
            returncode=result.returncode,
        ) from e
    stderr = result.stderr.decode("utf-8", errors="replace")

    elapsed = time.time() - start_time
    logger.debug(
        f"{' '.join(command[:3])} -> {result.returncode} "
        f"({len(stdout)} chars) in {elapsed*1000:.1f}ms"
    )
    return result.returncode, stdout, stderr


def command_stdout(
    command: list[str],
    cwd: Optional[str] = None,
    timeout: int | float | None = None,
    error_cls: type[CommandError] = CommandError,
) -> str:
    """
    Run a command and return stdout, raising on a non-zero exit.

    Raises:
        error_cls: Command failed to run or exited non-zero
    """
    returncode, stdout, stderr = run_command(command, cwd, timeout, error_cls)
    if returncode != 0:
        raise error_cls(
            f"{command[0]} {command[1] if len(command) > 1 else ''} failed".strip(),
            command=command,
            returncode=returncode,
            stderr=stderr.strip() or None,
        )
    return stdout


def missing_tools(names: list[str]) -> list[str]:
    """Return the names of the given executables that are not on PATH."""
    return [name for name in names if shutil.which(name) is None]
