"""Sample records holding raw TIC/XIC traces alongside their baselines."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping

import numpy as np
from numpy.typing import ArrayLike, NDArray

from whittaker.batch import smooth
from whittaker.options import SmootherOptions

logger = logging.getLogger(__name__)

TRACE_TARGETS = ("tic", "xic", "all")


@dataclass
class Trace:
    """
    One intensity trace of a sample.

    ``backup`` is an untouched copy of the raw values taken at construction;
    ``baseline`` stays None until a baseline has been computed.
    """

    values: NDArray[np.float64]
    time: NDArray[np.float64] | None = None
    backup: NDArray[np.float64] = field(init=False)
    baseline: NDArray[np.float64] | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.values = np.array(self.values, dtype=float)
        if self.time is not None:
            self.time = np.asarray(self.time, dtype=float)
            if self.time.shape[0] != self.values.shape[0]:
                raise ValueError("time and values must have the same number of samples")
        self.backup = self.values.copy()

    def corrected(self) -> NDArray[np.float64]:
        """Return values minus the baseline."""
        if self.baseline is None:
            raise ValueError("baseline has not been computed for this trace")
        return self.values - self.baseline

    def restore(self) -> None:
        """Reset values from the backup and drop the baseline."""
        self.values = self.backup.copy()
        self.baseline = None


@dataclass
class SampleRecord:
    """Imported sample with a total-ion trace and optional extracted-ion traces (one per column)."""

    id: int
    name: str
    tic: Trace
    xic: Trace | None = None


def _selected_traces(record: SampleRecord, target: str) -> List[Trace]:
    traces: List[Trace] = []
    if target in ("tic", "all"):
        traces.append(record.tic)
    if target in ("xic", "all") and record.xic is not None:
        traces.append(record.xic)
    return traces


def apply_baseline(
    records: Iterable[SampleRecord],
    target: str = "all",
    options: SmootherOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> List[SampleRecord]:
    """
    Fill the ``baseline`` field of the selected traces of each record.

    Args:
        records: Sample records to process.
        target: "tic", "xic" or "all".
        options: Smoother options (see ``whittaker.batch.smooth``).
        **overrides: Individual smoother options.

    Returns:
        The records, with baselines set. Raw values and backups are untouched.
    """
    if target not in TRACE_TARGETS:
        raise ValueError(f"Unknown trace target: {target}")
    out = list(records)
    for record in out:
        for trace in _selected_traces(record, target):
            trace.baseline = smooth(trace.values, options, **overrides)
        logger.info("Baseline computed for sample %d (%s)", record.id, record.name)
    return out


def append_records(existing: List[SampleRecord], new: Iterable[SampleRecord]) -> List[SampleRecord]:
    """Append ``new`` records after ``existing`` ones, numbering their ids consecutively."""
    merged = list(existing)
    for offset, record in enumerate(new, start=1):
        record.id = len(existing) + offset
        merged.append(record)
    return merged


def make_record(name: str, tic: ArrayLike, xic: ArrayLike | None = None, time: ArrayLike | None = None) -> SampleRecord:
    """Convenience constructor for a record with id 0, to be numbered by ``append_records``."""
    time_arr = None if time is None else np.asarray(time, dtype=float)
    return SampleRecord(
        id=0,
        name=name,
        tic=Trace(np.asarray(tic, dtype=float), time=time_arr),
        xic=None if xic is None else Trace(np.asarray(xic, dtype=float), time=time_arr),
    )
