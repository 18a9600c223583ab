"""Exception types raised while resolving a build identifier."""

from pathlib import Path
from typing import Sequence


class BuildIdError(Exception):
    """Base class for every failure the resolver can absorb or surface."""


class CommandSpawnError(BuildIdError):
    """The external program could not be started at all."""

    def __init__(self, program: str, reason: str):
        super().__init__(f"could not run {program!r}: {reason}")
        self.program = program
        self.reason = reason


class CommandExitError(BuildIdError):
    """The external program ran and exited with a non-zero status."""

    def __init__(self, program: str, returncode: int, stdout: str, stderr: str):
        super().__init__(f"{program!r} exited with status {returncode}")
        self.program = program
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class GitCommandError(BuildIdError):
    """git ran but reported failure (stderr text or non-zero exit)."""

    def __init__(self, stderr: str, args: Sequence[str] = ()):
        super().__init__(stderr)
        self.stderr = stderr
        self.git_args = tuple(args)


class GitOutputEmptyError(BuildIdError):
    """A git command that must always print something printed nothing."""

    def __init__(self, command: str):
        super().__init__(f"Output of `git {command}` was empty!")
        self.command = command


class FileAccessError(BuildIdError):
    """A file under the git metadata directory could not be read as text."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path
        self.reason = reason
