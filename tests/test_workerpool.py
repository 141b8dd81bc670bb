import threading
import time

import pytest

from qrforge.workerpool import AggregateError, JobCancelledError, WorkerPool


def test_basic_processing():
    results = WorkerPool(4).process([1, 2, 3, 4, 5], lambda j: j * 2)
    assert [r.value for r in results] == [2, 4, 6, 8, 10]
    assert [r.index for r in results] == [0, 1, 2, 3, 4]
    assert all(r.error is None for r in results)


def test_empty_jobs():
    assert WorkerPool(4).process([], lambda j: j) == []


def test_single_job():
    results = WorkerPool(2).process([42], lambda j: "ok")
    assert [(r.job, r.value) for r in results] == [(42, "ok")]


def test_worker_bound():
    lock = threading.Lock()
    state = {"current": 0, "peak": 0}

    def fn(job):
        with lock:
            state["current"] += 1
            state["peak"] = max(state["peak"], state["current"])
        time.sleep(0.01)
        with lock:
            state["current"] -= 1
        return job

    results = WorkerPool(3).process(range(20), fn)
    assert len(results) == 20
    assert 1 <= state["peak"] <= 3


def test_context_cancellation():
    cancel = threading.Event()
    timer = threading.Timer(0.005, cancel.set)
    timer.start()

    def fn(job):
        time.sleep(0.05)
        return job

    with pytest.raises(AggregateError) as info:
        WorkerPool(2).process(range(100), fn, cancel)
    timer.join()
    err = info.value
    assert len(err.errors) > 0
    assert len(err.results) == 100
    assert any(isinstance(r.error, JobCancelledError) for r in err.results)


def test_job_error():
    def fn(job):
        if job == 2:
            raise ValueError("job 2 failed")
        return job

    with pytest.raises(AggregateError) as info:
        WorkerPool(2).process([1, 2, 3], fn)
    err = info.value
    assert list(err.errors) == [1]
    assert err.total == 3
    results = err.results
    assert (results[0].value, results[0].error) == (1, None)
    assert isinstance(results[1].error, ValueError)
    assert (results[2].value, results[2].error) == (3, None)


def test_zero_workers_defaults_to_one():
    pool = WorkerPool(0)
    assert pool.workers == 1
    assert [r.value for r in pool.process([1, 2], lambda j: j)] == [1, 2]


def test_duration_tracking():
    def fn(job):
        time.sleep(0.02)
        return job

    results = WorkerPool(2, track_durations=True).process([1, 2, 3], fn)
    assert all(r.elapsed >= 0.015 for r in results)


def test_no_duration_tracking_by_default():
    results = WorkerPool(2).process([1, 2], lambda j: j)
    assert [r.elapsed for r in results] == [0.0, 0.0]


def test_workers():
    assert WorkerPool(7).workers == 7


def test_negative_workers():
    assert WorkerPool(-5).workers == 1


def test_aggregate_error_message():
    err = AggregateError({0: ValueError("err0"), 2: ValueError("err2")}, 5)
    assert str(err) == "workerpool: 2 of 5 jobs failed"
    assert err.total == 5
    assert len(err.errors) == 2


def test_aggregate_error_empty_message():
    assert str(AggregateError({}, 3)) == "workerpool: 0 of 0 jobs failed"


def test_aggregate_error_cause():
    inner = ValueError("root cause")
    assert AggregateError({1: inner}, 5).__cause__ is inner


def test_aggregate_error_first():
    second = ValueError("second")
    first = ValueError("first")
    assert AggregateError({2: second, 0: first}, 3).first() is first
    assert AggregateError({}, 2).first() is None


def test_all_failures():
    def fn(job):
        raise RuntimeError(f"job {job} failed")

    with pytest.raises(AggregateError) as info:
        WorkerPool(2).process([1, 2, 3], fn)
    assert sorted(info.value.errors) == [0, 1, 2]
    assert all(r.error is not None for r in info.value.results)


def test_backpressure():
    processed = []
    lock = threading.Lock()

    def fn(job):
        with lock:
            processed.append(job)
        time.sleep(0.001)
        return job

    results = WorkerPool(2, buffer_size=1).process(range(50), fn)
    assert sorted(processed) == list(range(50))
    assert [r.value for r in results] == list(range(50))


def test_backpressure_cancelled_before_start():
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(AggregateError) as info:
        WorkerPool(1, buffer_size=1).process(range(100), lambda j: j, cancel)
    assert len(info.value.errors) == 100
    assert all(isinstance(e, JobCancelledError) for e in info.value.errors.values())


def test_string_results():
    results = WorkerPool(3).process([1, 2], lambda j: f"item-{j}")
    assert [r.value for r in results] == ["item-1", "item-2"]


def test_concurrent_access():
    pool = WorkerPool(4)
    outcomes = []
    lock = threading.Lock()

    def run():
        values = [r.value for r in pool.process([1, 2, 3], lambda j: j)]
        with lock:
            outcomes.append(values)

    threads = [threading.Thread(target=run) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert outcomes == [[1, 2, 3]] * 20
    assert [r.value for r in pool.process([4, 5], lambda j: j)] == [4, 5]


def test_high_load_preserves_order():
    start = time.monotonic()
    results = WorkerPool(8, track_durations=True).process(range(1000), lambda j: j * 2)
    assert [r.value for r in results] == [i * 2 for i in range(1000)]
    assert time.monotonic() - start < 5


def test_partial_failures():
    def fn(job):
        if job % 2 == 0:
            raise ValueError(f"even job {job} rejected")
        return job

    with pytest.raises(AggregateError) as info:
        WorkerPool(4).process([1, 2, 3, 4, 5], fn)
    results = info.value.results
    assert sorted(info.value.errors) == [1, 3]
    assert [(results[i].value, results[i].error) for i in (0, 2, 4)] == [
        (1, None),
        (3, None),
        (5, None),
    ]


def test_buffer_size_larger_than_jobs():
    results = WorkerPool(2, buffer_size=100).process([1, 2, 3], lambda j: j)
    assert [r.value for r in results] == [1, 2, 3]