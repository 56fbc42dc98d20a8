"""Tests for the background bucket sweeper."""

from __future__ import annotations

import threading

from ffxiv_tracker.ratelimit.sweeper import BucketSweeper


class TestBucketSweeper:
    def test_runs_callback_periodically(self):
        calls = []
        done = threading.Event()

        def callback():
            calls.append(1)
            if len(calls) >= 3:
                done.set()

        sweeper = BucketSweeper(callback, interval_ms=5)
        sweeper.start()
        try:
            assert done.wait(2.0)
        finally:
            sweeper.stop()
        assert not sweeper.is_running

    def test_thread_is_daemon(self):
        sweeper = BucketSweeper(lambda: None, interval_ms=1000)
        sweeper.start()
        try:
            assert sweeper._thread.daemon
        finally:
            sweeper.stop()

    def test_callback_errors_do_not_kill_thread(self):
        calls = []
        done = threading.Event()

        def callback():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")
            done.set()

        sweeper = BucketSweeper(callback, interval_ms=5)
        sweeper.start()
        try:
            assert done.wait(2.0)
        finally:
            sweeper.stop()

    def test_start_twice_keeps_one_thread(self):
        sweeper = BucketSweeper(lambda: None, interval_ms=1000)
        sweeper.start()
        first = sweeper._thread
        sweeper.start()
        try:
            assert sweeper._thread is first
        finally:
            sweeper.stop()

    def test_stop_before_start_is_safe(self):
        sweeper = BucketSweeper(lambda: None, interval_ms=1000)
        sweeper.stop()
        assert not sweeper.is_running
