"""
Build identifier resolution.

Produces an identifier that is identical for every build made from the same
commit.  Strategies are tried in a fixed order, each with an explicit failure
policy:

  1. semantic versioning  ``<tag>.<commits since tag>-g<short hash>``
  2. ``git describe <flags>``
  3. the commit hash read straight from ``.git/HEAD`` and the ref it names
  4. ``git rev-parse HEAD``

Only one of (1) and (2) runs per call.  Their failures are absorbed when
``fallback_to_commit_sha`` is set and re-raised otherwise.  Step (3) is a
shortcut and always absorbs its failures; step (4) is the last resort and
always raises.

Usage::

    from buildid.resolver import BuildIdOptions, resolve

    build_id = resolve(BuildIdOptions(semantic_versioning=True))
"""

import enum
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from .errors import BuildIdError, GitOutputEmptyError
from .locator import locate_steps
from .refs import HEAD_FILE, parse_head_ref
from .requests import ReadGitFile, RunGit, Steps
from .runners import blocking, suspending


@dataclass(frozen=True)
class BuildIdOptions:
    """Per-call options; semantic versioning wins over describe flags."""

    directory: Optional[os.PathLike | str] = None
    describe_flags: Sequence[str] = ()
    semantic_versioning: bool = False
    fallback_to_commit_sha: bool = True

    def start_directory(self) -> str:
        return os.path.abspath(self.directory or os.getcwd())

    @property
    def has_describe_flags(self) -> bool:
        # A bare string is not a flag sequence.
        if isinstance(self.describe_flags, str):
            return False
        return any(
            isinstance(flag, str) and flag.strip()
            for flag in self.describe_flags or ()
        )


class OnFailure(enum.Enum):
    """What a failing step does to the rest of the resolution."""

    ABSORB = "absorb"
    PROPAGATE = "propagate"


Strategy = Callable[[Path, BuildIdOptions], Steps]


@dataclass(frozen=True)
class Step:
    name: str
    strategy: Strategy
    on_failure: OnFailure


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def semver_steps(root: Path, options: BuildIdOptions) -> Steps:
    """``<nearest tag>.<first-parent commits since it>-g<8-char hash>``."""
    tag = yield RunGit(root, ("describe", "--tags", "--abbrev=0"))
    if not tag:
        raise GitOutputEmptyError("describe --tags --abbrev=0")
    patch = yield RunGit(root, ("rev-list", "--count", "--first-parent", f"{tag}..HEAD"))
    short_hash = yield RunGit(root, ("rev-parse", "--short=8", "HEAD"))
    return f"{tag}.{patch}-g{short_hash}"


def describe_steps(root: Path, options: BuildIdOptions) -> Steps:
    """``git describe`` with the caller's flags, passed through unchanged."""
    flags = tuple(options.describe_flags)
    build_id = yield RunGit(root, ("describe", *flags))
    if not build_id:
        raise GitOutputEmptyError(" ".join(("describe", *flags)))
    return build_id


def ref_file_steps(root: Path, options: BuildIdOptions) -> Steps:
    """Commit hash from ``.git/HEAD`` and the ref file it points to, or None."""
    head = yield ReadGitFile(root, HEAD_FILE)
    ref = parse_head_ref(head)
    if not ref:
        return None
    commit = yield ReadGitFile(root, ref)
    return commit or None


def rev_parse_steps(root: Path, options: BuildIdOptions) -> Steps:
    commit = yield RunGit(root, ("rev-parse", "HEAD"))
    if not commit:
        raise GitOutputEmptyError("rev-parse HEAD")
    return commit


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

def plan(options: BuildIdOptions) -> list[Step]:
    """Return the ordered steps that a resolution with *options* will try."""
    primary = OnFailure.ABSORB if options.fallback_to_commit_sha else OnFailure.PROPAGATE
    steps = []
    if options.semantic_versioning:
        steps.append(Step("semver", semver_steps, primary))
    elif options.has_describe_flags:
        steps.append(Step("describe", describe_steps, primary))
    steps.append(Step("ref-file", ref_file_steps, OnFailure.ABSORB))
    steps.append(Step("rev-parse", rev_parse_steps, OnFailure.PROPAGATE))
    return steps


def resolve_steps(options: BuildIdOptions) -> Steps:
    """The whole resolution as a single request generator."""
    root = yield from locate_steps(options.start_directory())
    for step in plan(options):
        try:
            build_id = yield from step.strategy(root, options)
        except BuildIdError:
            if step.on_failure is OnFailure.PROPAGATE:
                raise
            continue
        if build_id:
            return build_id
    # rev-parse is always planned last and either returns or raises.
    raise GitOutputEmptyError("rev-parse HEAD")


def resolve(options: Optional[BuildIdOptions] = None) -> str:
    """Return the build identifier for *options*, blocking until done."""
    return blocking.drive(resolve_steps(options or BuildIdOptions()))


async def resolve_async(options: Optional[BuildIdOptions] = None) -> str:
    """Suspending counterpart of :func:`resolve`; same outcomes."""
    return await suspending.drive(resolve_steps(options or BuildIdOptions()))
