"""Fulfil resolution requests under asyncio."""

import asyncio
from typing import Any, Awaitable, Callable

from ..errors import BuildIdError
from ..git_utils import git_dir_readable, run_git_async
from ..refs import read_git_file_async
from ..requests import ProbeGitDir, ReadGitFile, Request, RunGit, Steps


async def perform(request: Request) -> Any:
    """Carry out a single request without blocking the event loop."""
    if isinstance(request, RunGit):
        return await run_git_async(request.root, request.args)
    if isinstance(request, ReadGitFile):
        return await read_git_file_async(request.root, request.filename)
    if isinstance(request, ProbeGitDir):
        return await asyncio.to_thread(git_dir_readable, request.directory)
    raise TypeError(f"unknown request: {request!r}")


async def drive(
    steps: Steps, perform: Callable[[Request], Awaitable[Any]] = perform
) -> Any:
    """Asyncio counterpart of :func:`buildid.runners.blocking.drive`."""
    try:
        request = next(steps)
        while True:
            try:
                result = await perform(request)
            except BuildIdError as exc:
                request = steps.throw(exc)
            else:
                request = steps.send(result)
    except StopIteration as stop:
        return stop.value
