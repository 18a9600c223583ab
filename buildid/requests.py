"""
I/O requests yielded by the resolution logic.

The locator and resolver are written as generators that yield one of these
requests and receive its result back (or have the failure thrown into them).
The runners in :mod:`buildid.runners` fulfil the requests, either blocking or
under asyncio, so the algorithm itself exists only once.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generator, Union


@dataclass(frozen=True)
class RunGit:
    """Run ``git <args>`` pinned to *root*; result is trimmed stdout."""

    root: Path
    args: tuple[str, ...]


@dataclass(frozen=True)
class ReadGitFile:
    """Read ``<root>/.git/<filename>``; result is trimmed text."""

    root: Path
    filename: str


@dataclass(frozen=True)
class ProbeGitDir:
    """Check whether ``<directory>/.git`` is readable; result is a bool."""

    directory: Path


Request = Union[RunGit, ReadGitFile, ProbeGitDir]

# A resolution step: yields requests, receives their results, returns a value.
Steps = Generator[Request, Any, Any]
