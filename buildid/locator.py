"""Find the repository root by walking up from a starting directory."""

import logging
import os
from pathlib import Path

from .requests import ProbeGitDir, Steps
from .runners import blocking, suspending

logger = logging.getLogger(__name__)

# Upper bound on probes, for filesystems whose parents never reach a root.
MAX_ASCENT = 999


def locate_steps(start: os.PathLike | str) -> Steps:
    """
    Yield probes walking from *start* towards the filesystem root.

    Returns the first directory with a readable ``.git`` entry.  When the
    root is reached or the MAX_ASCENT-th probe is made, the absolute form of
    *start* is returned unchanged, even if that last probe hit; this never
    fails.  The filesystem root itself is not probed.
    """
    start = Path(os.path.abspath(start))
    anchor = Path(start.anchor)
    candidate = start
    for attempt in range(1, MAX_ASCENT + 1):
        if candidate == anchor:
            break
        if (yield ProbeGitDir(candidate)):
            if attempt >= MAX_ASCENT:
                break
            logger.debug("Repository root for %s: %s", start, candidate)
            return candidate
        candidate = candidate.parent
    logger.debug("No repository found above %s; using it as the root", start)
    return start


def locate(start: os.PathLike | str) -> Path:
    """Return the repository root containing *start* (or *start* itself)."""
    return blocking.drive(locate_steps(start))


async def locate_async(start: os.PathLike | str) -> Path:
    """Suspending counterpart of :func:`locate`."""
    return await suspending.drive(locate_steps(start))
