"""
Environment-driven defaults for build identifier options.

  BUILDID_DIR               start directory (default: current directory)
  BUILDID_DESCRIBE_FLAGS    flags for ``git describe``, shell-split
  BUILDID_SEMVER=1          use semantic versioning
  BUILDID_FALLBACK_TO_SHA=0 fail instead of falling back to the commit hash
"""

import os
import shlex
from typing import Mapping, Optional

from .resolver import BuildIdOptions


def options_from_env(environ: Optional[Mapping[str, str]] = None) -> BuildIdOptions:
    """Build options from *environ* (``os.environ`` by default)."""
    env = os.environ if environ is None else environ
    return BuildIdOptions(
        directory=env.get("BUILDID_DIR") or None,
        describe_flags=tuple(shlex.split(env.get("BUILDID_DESCRIBE_FLAGS", ""))),
        semantic_versioning=env.get("BUILDID_SEMVER") == "1",
        fallback_to_commit_sha=env.get("BUILDID_FALLBACK_TO_SHA") != "0",
    )
