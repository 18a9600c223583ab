"""Fixtures that build throwaway git repositories."""

import shutil
import subprocess
from pathlib import Path

import pytest


def git(repo: Path, *args: str) -> str:
    """Run git inside *repo* and return trimmed stdout."""
    result = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", "-c", "tag.gpgsign=false", *args],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


def commit(repo: Path, message: str) -> str:
    git(repo, "commit", "--allow-empty", "-q", "-m", message)
    return git(repo, "rev-parse", "HEAD")


@pytest.fixture
def git_env(monkeypatch, tmp_path):
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    for var in ("GIT_AUTHOR", "GIT_COMMITTER"):
        monkeypatch.setenv(f"{var}_NAME", "Build Bot")
        monkeypatch.setenv(f"{var}_EMAIL", "build@example.com")
    # Keep the user's global config (aliases, hooks, signing) out of the tests.
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for var in ("BUILDID_DIR", "BUILDID_DESCRIBE_FLAGS", "BUILDID_SEMVER",
                "BUILDID_FALLBACK_TO_SHA", "GIT_DIR", "GIT_WORK_TREE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def repo(git_env, tmp_path) -> Path:
    """A repository with two commits and no tags."""
    path = tmp_path / "repo"
    path.mkdir()
    git(path, "init", "-q")
    commit(path, "first")
    commit(path, "second")
    return path


@pytest.fixture
def git_run():
    return git


@pytest.fixture
def git_commit():
    return commit
