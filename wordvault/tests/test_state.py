from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from wordvault import state as state_module


def test_concurrent_first_requests_share_one_state(monkeypatch, app_state):
    builds: list[int] = []
    started = threading.Event()

    def slow_build():
        builds.append(1)
        started.set()
        time.sleep(0.2)
        return app_state

    monkeypatch.setattr(state_module, "_state", None)
    monkeypatch.setattr(state_module, "build_state", slow_build)

    with ThreadPoolExecutor(max_workers=2) as pool:
        first = pool.submit(state_module.get_state)
        started.wait(timeout=5)
        second = pool.submit(state_module.get_state)
        results = [first.result(timeout=5), second.result(timeout=5)]

    assert builds == [1]
    assert all(result is app_state for result in results)
    assert state_module.current_state() is app_state


def test_init_state_replaces_the_current_state(monkeypatch, app_state):
    monkeypatch.setattr(state_module, "_state", None)

    assert state_module.init_state(app_state) is app_state
    assert state_module.get_state() is app_state
