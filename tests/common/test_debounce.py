from __future__ import annotations

import threading

from hr_portal.common.debounce import Debouncer


def test_only_the_last_call_runs():
    seen = []
    debouncer = Debouncer(seen.append, 0.05)

    for term in ("a", "ab", "abc"):
        debouncer.call(term)
    debouncer.flush()

    assert seen == ["abc"]


def test_cancel_drops_the_pending_call():
    seen = []
    debouncer = Debouncer(seen.append, 0.05)

    debouncer.call("x")
    debouncer.cancel()
    debouncer.flush()

    assert seen == []
    assert not debouncer.pending


def test_calls_spaced_beyond_the_delay_all_run():
    seen = []
    done = threading.Event()

    def record(value):
        seen.append(value)
        if len(seen) == 2:
            done.set()

    debouncer = Debouncer(record, 0.01)
    debouncer.call(1)
    debouncer.flush()
    debouncer.call(2)
    debouncer.flush()

    assert done.wait(1)
    assert seen == [1, 2]
