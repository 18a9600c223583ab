"""Git helper utilities: run git pinned to a specific repository root."""

import logging
import os
from pathlib import Path
from typing import Sequence

from .errors import CommandExitError, GitCommandError
from .runners.process import CommandOutput, run_command, run_command_async

logger = logging.getLogger(__name__)

GIT_PROGRAM = "git"
GIT_DIR_NAME = ".git"


def git_dir(root: Path) -> Path:
    """Return the metadata directory of the repository rooted at *root*."""
    return Path(root) / GIT_DIR_NAME


def git_args(root: Path, args: Sequence[str]) -> list[str]:
    """
    Prefix *args* with the flags that pin git to *root*.

    Both the metadata directory and the work tree are given explicitly so the
    command behaves the same whatever the caller's working directory is.
    """
    return [f"--git-dir={git_dir(root)}", f"--work-tree={root}", *args]


def _checked_stdout(args: Sequence[str], output: CommandOutput) -> str:
    # Warnings count: anything on stderr fails the call, even with status 0.
    stderr = output.stderr.strip()
    if stderr:
        raise GitCommandError(stderr, args)
    return output.stdout.strip()


def _exit_error(args: Sequence[str], exc: CommandExitError) -> GitCommandError:
    stderr = exc.stderr.strip() or f"git exited with status {exc.returncode}"
    return GitCommandError(stderr, args)


def run_git(root: Path, args: Sequence[str]) -> str:
    """
    Run ``git <args>`` against the repository at *root* and return trimmed stdout.

    Raises GitCommandError when git exits non-zero or writes anything to
    stderr.  CommandSpawnError (git not installed) propagates unchanged.
    """
    full = git_args(root, args)
    logger.debug("git %s", " ".join(full))
    try:
        output = run_command(GIT_PROGRAM, full)
    except CommandExitError as exc:
        raise _exit_error(args, exc) from exc
    return _checked_stdout(args, output)


async def run_git_async(root: Path, args: Sequence[str]) -> str:
    """Suspending counterpart of :func:`run_git`."""
    full = git_args(root, args)
    logger.debug("git %s", " ".join(full))
    try:
        output = await run_command_async(GIT_PROGRAM, full)
    except CommandExitError as exc:
        raise _exit_error(args, exc) from exc
    return _checked_stdout(args, output)


def git_dir_readable(directory: Path) -> bool:
    """Return True if *directory* holds a readable git metadata entry."""
    # Existence and read permission only; the contents are not validated.
    # Worktrees and submodules carry a .git file rather than a directory.
    return os.access(git_dir(directory), os.R_OK)
