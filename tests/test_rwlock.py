"""
tests/test_rwlock.py — ReadWriteLock Tests
===========================================

Readers share, writers exclude, and a waiting writer blocks new readers.
Threads are joined with short timeouts so a regression can't hang the run.
"""

from __future__ import annotations

import threading
import time

import pytest

from misfire.engine.membership import MembershipStore
from misfire.engine.rwlock import ReadWriteLock


class TestReadWriteLock:

    def test_readers_share(self):
        lock = ReadWriteLock()
        lock.acquire_read()
        lock.acquire_read()
        assert lock.readers == 2
        lock.release_read()
        lock.release_read()
        assert lock.readers == 0

    def test_writer_waits_for_readers(self):
        lock = ReadWriteLock()
        lock.acquire_read()
        acquired = threading.Event()

        def writer():
            with lock.write_locked():
                acquired.set()

        t = threading.Thread(target=writer)
        t.start()
        assert not acquired.wait(0.1)
        lock.release_read()
        assert acquired.wait(2)
        t.join(2)

    def test_reader_waits_for_writer(self):
        lock = ReadWriteLock()
        lock.acquire_write()
        acquired = threading.Event()

        def reader():
            with lock.read_locked():
                acquired.set()

        t = threading.Thread(target=reader)
        t.start()
        assert not acquired.wait(0.1)
        lock.release_write()
        assert acquired.wait(2)
        t.join(2)

    def test_waiting_writer_blocks_new_readers(self):
        lock = ReadWriteLock()
        lock.acquire_read()
        writer_done = threading.Event()
        late_reader_done = threading.Event()

        def writer():
            with lock.write_locked():
                writer_done.set()

        def late_reader():
            with lock.read_locked():
                late_reader_done.set()

        w = threading.Thread(target=writer)
        w.start()
        # Give the writer time to register as waiting.
        for _ in range(50):
            if lock._writers_waiting:
                break
            time.sleep(0.01)

        r = threading.Thread(target=late_reader)
        r.start()
        assert not late_reader_done.wait(0.1)

        lock.release_read()
        assert writer_done.wait(2)
        assert late_reader_done.wait(2)
        w.join(2)
        r.join(2)

    def test_release_without_acquire_raises(self):
        lock = ReadWriteLock()
        with pytest.raises(RuntimeError):
            lock.release_read()
        with pytest.raises(RuntimeError):
            lock.release_write()

    def test_context_manager_releases_on_error(self):
        lock = ReadWriteLock()
        with pytest.raises(ValueError):
            with lock.write_locked():
                raise ValueError("boom")
        assert not lock.write_held
        with lock.read_locked():
            assert lock.readers == 1


class TestStoreLocking:

    def test_mutation_waits_while_view_is_open(self, vc_store: MembershipStore):
        done = threading.Event()

        def mutate():
            vc_store.remove_voice_presence(2)
            done.set()

        with vc_store.reading() as view:
            t = threading.Thread(target=mutate)
            t.start()
            assert not done.wait(0.1)
            assert view.voice_presence(2) == (0, 1)

        assert done.wait(2)
        t.join(2)
        assert vc_store.voice_presence(2) is None

    def test_concurrent_upserts_are_not_lost(self, store: MembershipStore):
        def worker(base: int):
            for i in range(200):
                store.upsert_channel_name(0, base + i, f"ch{base + i}")

        threads = [threading.Thread(target=worker, args=(n * 1000,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(5)

        assert store.counts() == (800, 0)
