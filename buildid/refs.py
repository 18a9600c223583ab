"""Read git's ref files directly, without spawning git."""

import asyncio
from pathlib import Path, PurePath

from .errors import FileAccessError
from .git_utils import git_dir

HEAD_FILE = "HEAD"
REF_MARKER = "ref:"


def git_file_path(root: Path, filename: str) -> Path:
    """Return the path of *filename* inside the metadata directory of *root*."""
    name = PurePath(filename)
    # An absolute name stays under .git rather than replacing it.
    if name.anchor:
        name = PurePath(*name.parts[1:])
    return git_dir(root) / name


def read_git_file(root: Path, filename: str) -> str:
    """
    Return the trimmed UTF-8 contents of ``<root>/.git/<filename>``.

    Raises FileAccessError when the file is missing, unreadable or not
    valid UTF-8 text.
    """
    path = git_file_path(root, filename)
    try:
        return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        raise FileAccessError(path, str(exc)) from exc


async def read_git_file_async(root: Path, filename: str) -> str:
    """Suspending counterpart of :func:`read_git_file`."""
    return await asyncio.to_thread(read_git_file, root, filename)


def parse_head_ref(head: str) -> str:
    """
    Extract the ref path from the contents of a HEAD file.

    ``"ref: refs/heads/main"`` gives ``"refs/heads/main"``.  Without a
    marker the text is read as if one sat at offset 0, so a detached HEAD
    yields a path that does not exist and the caller falls back to git.
    """
    start = head.find(REF_MARKER)
    if start == -1:
        start = 0
    start += len(REF_MARKER)
    end = head.find("\n", start)
    return head[start:end if end != -1 else None].strip()
