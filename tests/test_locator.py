import asyncio
from pathlib import Path

from buildid import locator
from buildid.requests import ProbeGitDir


def _nested(base: Path, depth: int) -> Path:
    path = base.joinpath(*(f"level{i}" for i in range(depth)))
    path.mkdir(parents=True)
    return path


def test_finds_root_from_ten_levels_down(tmp_path):
    (tmp_path / "project" / ".git").mkdir(parents=True)
    deep = _nested(tmp_path / "project", 10)
    assert locator.locate(deep) == tmp_path / "project"


def test_start_directory_that_is_the_root(tmp_path):
    (tmp_path / ".git").mkdir()
    assert locator.locate(tmp_path) == tmp_path


def test_not_found_returns_start(tmp_path):
    start = _nested(tmp_path / "plain", 3)
    assert locator.locate(start) == start


def test_relative_start_is_made_absolute(tmp_path, monkeypatch):
    (tmp_path / ".git").mkdir()
    _nested(tmp_path, 2)
    monkeypatch.chdir(tmp_path)
    assert locator.locate(Path("level0") / "level1") == tmp_path


def test_async_matches_blocking(tmp_path):
    (tmp_path / "project" / ".git").mkdir(parents=True)
    deep = _nested(tmp_path / "project", 4)
    assert asyncio.run(locator.locate_async(deep)) == locator.locate(deep)


def test_walk_stops_at_the_filesystem_root():
    start = Path("/a/b/c")
    steps = locator.locate_steps(start)
    probed = []
    request = next(steps)
    try:
        while True:
            assert isinstance(request, ProbeGitDir)
            probed.append(request.directory)
            request = steps.send(False)
    except StopIteration as stop:
        result = stop.value
    assert probed == [Path("/a/b/c"), Path("/a/b"), Path("/a")]
    assert result == start


def test_iteration_cap_gives_up_with_start(monkeypatch):
    monkeypatch.setattr(locator, "MAX_ASCENT", 3)
    start = Path("/a/b/c/d/e/f")
    steps = locator.locate_steps(start)
    probes = 0
    request = next(steps)
    try:
        while True:
            probes += 1
            request = steps.send(False)
    except StopIteration as stop:
        result = stop.value
    assert probes == 3
    assert result == start


def _walk(monkeypatch, cap, hit_on):
    monkeypatch.setattr(locator, "MAX_ASCENT", cap)
    start = Path("/a/b/c/d/e/f")
    steps = locator.locate_steps(start)
    next(steps)
    probes = 0
    try:
        while True:
            probes += 1
            steps.send(probes == hit_on)
    except StopIteration as stop:
        return start, stop.value


def test_hit_before_the_cap_is_returned(monkeypatch):
    _, result = _walk(monkeypatch, cap=3, hit_on=2)
    assert result == Path("/a/b/c/d/e")


def test_hit_on_the_last_allowed_probe_counts_as_not_found(monkeypatch):
    start, result = _walk(monkeypatch, cap=3, hit_on=3)
    assert result == start
