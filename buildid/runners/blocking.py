"""Fulfil resolution requests with blocking calls."""

from typing import Any, Callable

from ..errors import BuildIdError
from ..git_utils import git_dir_readable, run_git
from ..refs import read_git_file
from ..requests import ProbeGitDir, ReadGitFile, Request, RunGit, Steps


def perform(request: Request) -> Any:
    """Carry out a single request and return its result."""
    if isinstance(request, RunGit):
        return run_git(request.root, request.args)
    if isinstance(request, ReadGitFile):
        return read_git_file(request.root, request.filename)
    if isinstance(request, ProbeGitDir):
        return git_dir_readable(request.directory)
    raise TypeError(f"unknown request: {request!r}")


def drive(steps: Steps, perform: Callable[[Request], Any] = perform) -> Any:
    """
    Run *steps* to completion and return the value it returns.

    Each yielded request is performed and its result sent back; a
    BuildIdError raised while performing it is thrown into the generator,
    which either handles it or lets it escape to the caller.
    """
    try:
        request = next(steps)
        while True:
            try:
                result = perform(request)
            except BuildIdError as exc:
                request = steps.throw(exc)
            else:
                request = steps.send(result)
    except StopIteration as stop:
        return stop.value
