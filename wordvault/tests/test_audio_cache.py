from __future__ import annotations

import os

import pytest

from wordvault.errors import ProviderError
from wordvault.services.providers.audio_cache import AudioCache, cache_key


class _Clock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class _Fetcher:
    def __init__(self, size: int = 10) -> None:
        self.size = size
        self.calls: list[str] = []

    def __call__(self, url: str) -> bytes:
        self.calls.append(url)
        return url[-1].encode("ascii") * self.size


def test_second_read_is_served_from_disk(tmp_path):
    fetch = _Fetcher()
    cache = AudioCache(fetch, directory=tmp_path, max_bytes=1000, max_age=60, clock=_Clock())

    first = cache.get("https://audio.example/a")
    second = cache.get("https://audio.example/a")

    assert first == second == b"a" * 10
    assert fetch.calls == ["https://audio.example/a"]
    assert (tmp_path / cache_key("https://audio.example/a")).exists()


def test_expired_entries_are_refetched(tmp_path):
    clock = _Clock()
    fetch = _Fetcher()
    cache = AudioCache(fetch, directory=tmp_path, max_bytes=1000, max_age=60, clock=clock)

    cache.get("https://audio.example/a")
    clock.now += 61
    cache.get("https://audio.example/a")

    assert len(fetch.calls) == 2


def test_oldest_files_are_evicted_when_over_the_cap(tmp_path):
    clock = _Clock()
    cache = AudioCache(_Fetcher(size=10), directory=tmp_path, max_bytes=25, max_age=3600, clock=clock)

    for name in ("a", "b", "c"):
        cache.get(f"https://audio.example/{name}")
        clock.now += 1

    remaining = {path.name for path in tmp_path.iterdir()}
    assert remaining == {cache_key("https://audio.example/b"), cache_key("https://audio.example/c")}


def test_cleanup_sweeps_expired_files_even_under_the_cap(tmp_path):
    clock = _Clock()
    cache = AudioCache(_Fetcher(), directory=tmp_path, max_bytes=10_000, max_age=60, clock=clock)
    cache.get("https://audio.example/old")
    clock.now += 30
    cache.get("https://audio.example/new")

    clock.now += 45
    cache.cleanup()

    assert [path.name for path in tmp_path.iterdir()] == [cache_key("https://audio.example/new")]


def test_unrelated_stale_file_is_removed(tmp_path):
    clock = _Clock()
    stray = tmp_path / "stray.audio"
    stray.write_bytes(b"x")
    os.utime(stray, (clock.now - 1000, clock.now - 1000))
    cache = AudioCache(_Fetcher(), directory=tmp_path, max_bytes=10_000, max_age=60, clock=clock)

    cache.cleanup()

    assert not stray.exists()


def test_fetch_errors_propagate_and_nothing_is_written(tmp_path):
    def failing(url: str) -> bytes:
        raise ProviderError("offline")

    cache = AudioCache(failing, directory=tmp_path, clock=_Clock())

    with pytest.raises(ProviderError):
        cache.get("https://audio.example/a")
    assert list(tmp_path.iterdir()) == []


def test_clear_empties_the_directory(tmp_path):
    cache = AudioCache(_Fetcher(), directory=tmp_path, clock=_Clock())
    cache.get("https://audio.example/a")

    cache.clear()

    assert list(tmp_path.iterdir()) == []
