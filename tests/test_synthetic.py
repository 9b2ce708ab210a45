"""Synthetic chromatogram generator and end-to-end drift recovery."""

import numpy as np

from chromatogram.synthetic import Peak, drift_baseline, simulate_chromatogram
from whittaker.batch import smooth


def test_shapes_and_peaks_above_drift():
    time, signal, drift = simulate_chromatogram(n_samples=500)
    assert time.shape == signal.shape == drift.shape == (500,)
    assert np.all(signal >= drift)
    np.testing.assert_allclose(drift, drift_baseline(time))


def test_noise_is_reproducible():
    _, a, _ = simulate_chromatogram(noise=1.0, rng_seed=7)
    _, b, _ = simulate_chromatogram(noise=1.0, rng_seed=7)
    np.testing.assert_array_equal(a, b)


def test_custom_peaks():
    time, signal, drift = simulate_chromatogram(n_samples=201, duration=2.0, peaks=[Peak(1.0, 10.0, 0.05)])
    assert np.isclose(signal[100] - drift[100], 10.0)


def test_als_recovers_drift_of_noise_free_trace():
    _, signal, drift = simulate_chromatogram()
    baseline = smooth(signal)
    rmse = float(np.sqrt(np.mean((baseline - drift) ** 2)))
    assert rmse < 0.5
    assert np.max(np.abs(baseline - drift)) < 2.0
