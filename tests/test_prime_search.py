import threading

import pytest

from tremolokit.prime_search import (
    PrimeSearchTask,
    find_largest_prime,
    is_prime,
    result_message,
)


@pytest.mark.parametrize("number", [2, 3, 5, 7, 13, 97])
def test_primes(number):
    assert is_prime(number) is True


@pytest.mark.parametrize("number", [-7, 0, 1, 4, 9, 25, 100])
def test_non_primes(number):
    assert is_prime(number) is False


@pytest.mark.parametrize("limit", [3, 10, 100, 1000, 1024])
def test_largest_prime_below_limit(limit):
    largest = find_largest_prime(limit)
    assert largest < limit
    assert is_prime(largest)
    assert not any(is_prime(n) for n in range(largest + 1, limit))


def test_progress_is_monotonic_and_finishes():
    reports = []
    find_largest_prime(1000, on_progress=reports.append)
    assert reports == sorted(reports)
    assert reports[-1] == 1.0
    assert all(0.0 <= r <= 1.0 for r in reports)


def test_exit_request_stops_search():
    assert find_largest_prime(1000, should_exit=lambda: True) is None


def test_limit_too_small():
    with pytest.raises(ValueError):
        find_largest_prime(2)
    with pytest.raises(ValueError):
        PrimeSearchTask(limit=1)


def test_result_message():
    assert result_message(100, 97) == "Largest prime number < 100 found: 97"


def test_task_reports_result():
    done = threading.Event()
    results = []

    def on_result(value):
        results.append(value)
        done.set()

    task = PrimeSearchTask(limit=500, on_result=on_result)
    assert task.start() is True
    assert done.wait(10)
    assert task.stop(5) is True
    assert results == [find_largest_prime(500)]


def test_task_can_be_stopped():
    results = []
    task = PrimeSearchTask(limit=10_000_000, on_result=results.append)
    assert task.start() is True
    assert task.start() is False
    assert task.stop(10) is True
    assert task.is_running() is False
    assert results == []