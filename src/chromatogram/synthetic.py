"""Synthetic chromatograms: Gaussian peaks on a drifting baseline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Peak:
    """Gaussian elution peak."""

    center: float
    height: float
    width: float  # standard deviation, in time units


def default_peaks() -> list[Peak]:
    """Peak set used by the demo script."""
    return [
        Peak(center=4.0, height=80.0, width=0.08),
        Peak(center=7.5, height=150.0, width=0.12),
        Peak(center=8.1, height=60.0, width=0.10),
        Peak(center=13.0, height=120.0, width=0.15),
        Peak(center=17.2, height=40.0, width=0.20),
    ]


def drift_baseline(time: NDArray[np.float64], offset: float = 20.0, slope: float = 1.5, curvature: float = 8.0) -> NDArray[np.float64]:
    """Smooth drift: offset + linear ramp + one slow sinusoidal hump."""
    span = max(float(time[-1] - time[0]), 1e-12)
    u = (time - time[0]) / span
    return offset + slope * (time - time[0]) + curvature * np.sin(np.pi * u)


def simulate_chromatogram(
    n_samples: int = 2000,
    duration: float = 20.0,
    peaks: Sequence[Peak] | None = None,
    noise: float = 0.0,
    rng_seed: int | None = 0,
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """
    Simulate a single chromatographic trace.

    Args:
        n_samples: Number of samples.
        duration: Run time; samples are spread evenly over [0, duration].
        peaks: Elution peaks (defaults to ``default_peaks()``).
        noise: Standard deviation of additive Gaussian noise.
        rng_seed: Seed for the noise generator.

    Returns:
        (time, signal, true_baseline)
    """
    time = np.linspace(0.0, duration, n_samples)
    baseline = drift_baseline(time)
    signal = baseline.copy()
    for pk in peaks if peaks is not None else default_peaks():
        signal += pk.height * np.exp(-0.5 * ((time - pk.center) / pk.width) ** 2)
    if noise > 0.0:
        rng = np.random.default_rng(rng_seed)
        signal += rng.normal(0.0, noise, size=n_samples)
    return time, signal, baseline
