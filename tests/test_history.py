import numpy as np
import pytest

from starsim.helpers import Body, PositionHistory


def test_history_keeps_insertion_order():
    history = PositionHistory(3)
    history.append([1, 0, 0])
    history.append([2, 0, 0])

    assert len(history) == 2
    np.testing.assert_array_equal(history.to_array()[:, 0], [1, 2])
    np.testing.assert_array_equal(history[-1], [2, 0, 0])


def test_history_evicts_oldest_when_full():
    history = PositionHistory(3)
    for x in range(1, 6):
        history.append([x, 0, 0])

    assert len(history) == 3
    np.testing.assert_array_equal([p[0] for p in history], [3, 4, 5])
    np.testing.assert_array_equal(history[0], [3, 0, 0])


def test_history_clear_and_index_errors():
    history = PositionHistory(2)
    history.append([1, 1, 1])
    history.clear()

    assert len(history) == 0
    assert history.to_array().shape == (0, 3)
    with pytest.raises(IndexError):
        history[0]


def test_history_capacity_must_be_positive():
    with pytest.raises(ValueError):
        PositionHistory(0)


def test_body_samples_once_per_stride():
    body = Body(1.0, [0, 0, 0], [1, 0, 0], record_history=True, history_length=100, sample_rate=4)
    for _ in range(4 * 3 + 2):
        body.integrate(1.0)

    assert len(body.history) == 3
    # sampled after the velocity update, before the position update
    np.testing.assert_array_equal(body.history.to_array()[:, 0], [3, 7, 11])


def test_body_history_is_capped():
    body = Body(1.0, [0, 0, 0], [1, 0, 0], record_history=True, history_length=2, sample_rate=1)
    for _ in range(5):
        body.integrate(1.0)

    np.testing.assert_array_equal(body.history.to_array()[:, 0], [3, 4])


def test_body_without_recording_keeps_no_history():
    body = Body(1.0, [0, 0, 0], [1, 0, 0], sample_rate=1)
    for _ in range(10):
        body.integrate(1.0)

    assert len(body.history) == 0


def test_clear_history():
    body = Body(1.0, [0, 0, 0], [1, 0, 0], record_history=True, sample_rate=1)
    body.integrate(1.0)
    body.clear_history()

    assert len(body.history) == 0
