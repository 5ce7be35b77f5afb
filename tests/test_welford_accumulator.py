from __future__ import annotations

import math

import numpy as np

from binstats.accumulators import WelfordAccumulator


def _accumulate(values: list[float]) -> WelfordAccumulator:
    accumulator = WelfordAccumulator()
    for value in values:
        accumulator = accumulator.update(value)
    return accumulator


def test_welford_accumulator_empty_summary_is_undefined() -> None:
    summary = WelfordAccumulator().summary()

    assert summary.count == 0
    assert math.isnan(summary.mean)
    assert math.isnan(summary.min)
    assert math.isnan(summary.max)
    assert math.isnan(summary.variance)
    assert math.isnan(summary.std)


def test_welford_accumulator_single_value_has_no_spread() -> None:
    summary = WelfordAccumulator().update(3.5).summary()

    assert summary.count == 1
    np.testing.assert_allclose(summary.mean, 3.5)
    np.testing.assert_allclose(summary.min, 3.5)
    np.testing.assert_allclose(summary.max, 3.5)
    assert math.isnan(summary.variance)
    assert math.isnan(summary.std)


def test_welford_accumulator_matches_numpy() -> None:
    rng = np.random.default_rng(5)
    values = rng.normal(loc=10.0, scale=2.0, size=1000)

    summary = _accumulate(values.tolist()).summary()

    assert summary.count == 1000
    np.testing.assert_allclose(summary.mean, float(np.mean(values)), atol=1e-10)
    np.testing.assert_allclose(
        summary.variance, float(np.var(values, ddof=1)), rtol=1e-10
    )
    np.testing.assert_allclose(summary.std, float(np.std(values, ddof=1)), rtol=1e-10)
    np.testing.assert_allclose(summary.min, float(np.min(values)))
    np.testing.assert_allclose(summary.max, float(np.max(values)))


def test_welford_accumulator_update_returns_new_value() -> None:
    empty = WelfordAccumulator()

    first = empty.update(1.0)
    second = first.update(5.0)

    assert empty.count == 0
    assert first.count == 1
    assert second.count == 2
    np.testing.assert_allclose(first.mean, 1.0)
    np.testing.assert_allclose(second.mean, 3.0)


def test_welford_accumulator_accepts_numpy_scalars() -> None:
    summary = _accumulate([np.float32(1.5), np.int64(2)]).summary()

    assert summary.count == 2
    assert isinstance(summary.mean, float)
    np.testing.assert_allclose(summary.mean, 1.75)
