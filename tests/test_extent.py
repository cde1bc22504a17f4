import numpy as np
import pytest

from pose2track.control.extent import ExtentTracker


def test_seed_center_biases_z_forward():
    tracker = ExtentTracker()
    np.testing.assert_allclose(tracker.center(), np.array([0.0, 0.0, 500.0]))


def test_first_observation_collapses_z_seed():
    tracker = ExtentTracker()
    tracker.observe(0.0, 0.0, 0.0)
    np.testing.assert_allclose(tracker.minimum, np.zeros(3))
    np.testing.assert_allclose(tracker.maximum, np.zeros(3))
    np.testing.assert_allclose(tracker.center(), np.zeros(3))
    assert tracker.samples == 1


def test_extent_is_monotonic():
    tracker = ExtentTracker()
    rng = np.random.default_rng(0)
    prev_min = tracker.minimum
    prev_max = tracker.maximum
    for p in rng.normal(scale=1.5, size=(200, 3)):
        tracker.observe(*p)
        assert (tracker.minimum <= prev_min).all()
        assert (tracker.maximum >= prev_max).all()
        assert (tracker.minimum <= tracker.maximum).all()
        prev_min = tracker.minimum
        prev_max = tracker.maximum


def test_center_is_midpoint_of_extent():
    tracker = ExtentTracker()
    for p in [(-0.4, 0.1, 1.2), (0.6, 0.5, 2.8), (0.1, -0.3, 2.0)]:
        tracker.observe(*p)
    np.testing.assert_allclose(tracker.minimum, np.array([-0.4, -0.3, 1.2]))
    np.testing.assert_allclose(tracker.maximum, np.array([0.6, 0.5, 2.8]))
    np.testing.assert_allclose(tracker.center(), np.array([0.1, 0.1, 2.0]))


def test_center_is_repeatable_without_observe():
    tracker = ExtentTracker()
    tracker.observe(0.3, -0.2, 1.7)
    a = tracker.center()
    b = tracker.center()
    np.testing.assert_array_equal(a, b)


def test_center_returns_fresh_array():
    tracker = ExtentTracker()
    c = tracker.center()
    c[:] = 99.0
    np.testing.assert_allclose(tracker.center(), np.array([0.0, 0.0, 500.0]))


def test_non_finite_observation_is_rejected_without_mutation():
    tracker = ExtentTracker()
    tracker.observe(0.1, 0.2, 1.5)
    with pytest.raises(ValueError, match="finite"):
        tracker.observe(float("nan"), 0.0, 0.0)
    with pytest.raises(ValueError, match="finite"):
        tracker.observe(0.0, float("inf"), 0.0)
    np.testing.assert_allclose(tracker.minimum, np.array([0.0, 0.0, 1.5]))
    np.testing.assert_allclose(tracker.maximum, np.array([0.1, 0.2, 1.5]))
    assert tracker.samples == 1


def test_custom_seed():
    tracker = ExtentTracker(seed_min=(1.0, 1.0, 1.0), seed_max=(-1.0, -1.0, -1.0))
    tracker.observe(0.5, 0.5, 0.5)
    np.testing.assert_allclose(tracker.center(), np.array([0.5, 0.5, 0.5]))
