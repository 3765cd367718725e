import threading

import pytest

from boltserve.constants import MAX_THREADS, MIN_THREADS
from boltserve.threadpool import PoolStats, ThreadPool, Worker, get_cpu_count


def _recording_handler(worker, item):
    sent, received = item
    worker.record_sent(sent)
    worker.record_received(received)
    worker.record_request()


def test_get_cpu_count_positive():
    assert get_cpu_count() >= 1


def test_default_worker_count_within_limits():
    with ThreadPool(lambda w, i: None) as pool:
        assert MIN_THREADS <= pool.num_workers <= MAX_THREADS


def test_invalid_worker_count():
    with pytest.raises(ValueError):
        ThreadPool(lambda w, i: None, num_workers=0)


def test_worker_ids_are_sequential():
    with ThreadPool(lambda w, i: None, num_workers=4) as pool:
        assert [w.worker_id for w in pool.workers] == [0, 1, 2, 3]


def test_stats_sum_all_work():
    items = [(i, 2 * i) for i in range(50)]
    with ThreadPool(_recording_handler, num_workers=3) as pool:
        for item in items:
            pool.submit(item)
        pool.join()
        stats = pool.stats()
    assert stats == PoolStats(
        total_requests=len(items),
        bytes_sent=sum(s for s, _ in items),
        bytes_received=sum(r for _, r in items),
    )


def test_empty_pool_stats_are_zero():
    with ThreadPool(lambda w, i: None, num_workers=2) as pool:
        assert pool.stats() == PoolStats()


def test_every_item_handled_once():
    seen = []
    lock = threading.Lock()

    def handler(worker, item):
        with lock:
            seen.append(item)
        worker.record_sent(item)
        worker.record_request()

    with ThreadPool(handler, num_workers=4) as pool:
        for i in range(100):
            pool.submit(i)
        pool.join()
        stats = pool.stats()
        per_worker = sum(w.requests_handled for w in pool.workers)
    assert stats.total_requests == 100
    assert stats.bytes_sent == sum(range(100))
    assert per_worker == 100
    assert sorted(seen) == list(range(100))


def test_handler_error_does_not_stop_worker():
    errors = []
    handled = []

    def handler(worker, item):
        if item == "bad":
            raise RuntimeError("boom")
        handled.append(item)
        worker.record_request()

    def on_error(worker, item, exc):
        errors.append((worker, item, str(exc)))

    with ThreadPool(handler, num_workers=1, on_error=on_error) as pool:
        pool.submit("bad")
        pool.submit("good")
        pool.join()
        stats = pool.stats()
        only_worker = pool.workers[0]
    assert stats.total_requests == 1
    assert only_worker.requests_handled == 1
    assert errors == [(only_worker, "bad", "boom")]
    assert handled == ["good"]


def test_submit_after_shutdown_raises():
    pool = ThreadPool(lambda w, i: None, num_workers=2)
    pool.shutdown()
    assert pool.closed
    with pytest.raises(RuntimeError):
        pool.submit(1)


def test_shutdown_stops_threads():
    pool = ThreadPool(lambda w, i: None, num_workers=3)
    pool.shutdown()
    assert all(not w.thread.is_alive() for w in pool.workers)
    assert all(not w.running for w in pool.workers)


def test_shutdown_twice_is_harmless():
    pool = ThreadPool(lambda w, i: None, num_workers=1)
    pool.shutdown()
    pool.shutdown()
    assert pool.closed


def test_context_manager_shuts_down():
    with ThreadPool(lambda w, i: None, num_workers=2) as pool:
        assert not pool.closed
    assert pool.closed


def test_worker_rejects_negative_counts():
    worker = Worker(worker_id=0)
    with pytest.raises(ValueError):
        worker.record_sent(-1)
    with pytest.raises(ValueError):
        worker.record_received(-5)


def test_worker_counters_accumulate():
    worker = Worker(worker_id=7)
    worker.record_sent(10)
    worker.record_sent(5)
    worker.record_received(3)
    worker.record_request()
    assert (worker.bytes_sent, worker.bytes_received, worker.requests_handled) == (15, 3, 1)