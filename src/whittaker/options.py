"""Options for the Whittaker baseline smoother and their validation."""

from __future__ import annotations

import json
import logging
import numbers
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

from whittaker.errors import ArgumentCountError
from whittaker.solver import SOLVER_METHODS

logger = logging.getLogger(__name__)

# Default ALS parameters
DEFAULT_SMOOTHNESS = 1e6
DEFAULT_ASYMMETRY = 1e-6
# Compatibility default: always run exactly this many solves
DEFAULT_ITERATIONS = 10
# asymmetry >= 1 is coerced to this value
MAX_ASYMMETRY = 0.99
CONFIG_SECTION = "whittaker"


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass
class SmootherOptions:
    """
    Parameters of the asymmetric least-squares baseline.

    smoothness: lambda, recommended 1e3 to 1e9.
    asymmetry: p in (0, 1), recommended 1e-1 to 1e-6; values >= 1 clamp to 0.99.
    iterations: number of reweighting solves (10 reproduces the classic scheme).
    tolerance: optional early-exit threshold on the relative baseline change.
    workers: >1 solves columns on a thread pool.
    method: "banded" or "dense" linear solver.
    """

    smoothness: float = DEFAULT_SMOOTHNESS
    asymmetry: float = DEFAULT_ASYMMETRY
    iterations: int = DEFAULT_ITERATIONS
    tolerance: float = 0.0
    workers: int = 0
    method: str = "banded"

    @classmethod
    def option_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "SmootherOptions":
        """Build options from a name -> value mapping; unknown names are rejected."""
        unknown = sorted(set(values) - set(cls.option_names()))
        if unknown:
            raise ArgumentCountError(f"Unsupported option(s): {', '.join(map(str, unknown))}")
        return cls(**dict(values))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def validated(self) -> "SmootherOptions":
        """
        Return a checked copy of these options.

        Non-numeric smoothness/asymmetry raise TypeError, out-of-range values
        raise ValueError; asymmetry >= 1 is silently clamped to 0.99.
        """
        if not _is_real(self.smoothness):
            raise TypeError(f"smoothness must be a real number, got {type(self.smoothness).__name__}")
        if not _is_real(self.asymmetry):
            raise TypeError(f"asymmetry must be a real number, got {type(self.asymmetry).__name__}")
        if not self.smoothness > 0:
            raise ValueError(f"smoothness must be positive, got {self.smoothness}")
        if not self.asymmetry > 0:
            raise ValueError(f"asymmetry must be positive, got {self.asymmetry}")
        if not _is_integer(self.iterations):
            raise TypeError("iterations must be an integer")
        if self.iterations < 1:
            raise ValueError(f"iterations must be at least 1, got {self.iterations}")
        if not _is_real(self.tolerance):
            raise TypeError("tolerance must be a real number")
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {self.tolerance}")
        if not _is_integer(self.workers):
            raise TypeError("workers must be an integer")
        if self.workers < 0:
            raise ValueError(f"workers must be non-negative, got {self.workers}")
        if self.method not in SOLVER_METHODS:
            raise ValueError(f"Unknown solver method: {self.method}")

        asymmetry = float(self.asymmetry)
        if asymmetry >= 1.0:
            logger.debug("asymmetry %s clamped to %s", asymmetry, MAX_ASYMMETRY)
            asymmetry = MAX_ASYMMETRY
        return replace(
            self,
            smoothness=float(self.smoothness),
            asymmetry=asymmetry,
            iterations=int(self.iterations),
            tolerance=float(self.tolerance),
            workers=int(self.workers),
        )


def resolve_options(options: SmootherOptions | Mapping[str, Any] | None = None, **overrides: Any) -> SmootherOptions:
    """Merge ``options`` and keyword ``overrides`` into validated SmootherOptions."""
    if options is None:
        base = SmootherOptions()
    elif isinstance(options, SmootherOptions):
        base = options
    elif isinstance(options, Mapping):
        base = SmootherOptions.from_mapping(options)
    else:
        raise ArgumentCountError(f"options must be SmootherOptions or a mapping, got {type(options).__name__}")
    if overrides:
        merged = base.to_dict()
        merged.update(overrides)
        base = SmootherOptions.from_mapping(merged)
    return base.validated()


def load_options(path: str | Path) -> SmootherOptions:
    """
    Load smoother options from a JSON file, merged over the defaults.

    The file may hold the option names at top level or inside a
    ``"whittaker"`` section. A missing file yields the defaults.
    """
    p = Path(path)
    if not p.exists():
        logger.debug("No options file at %s; using defaults", p)
        return SmootherOptions()
    with p.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"{p}: expected a JSON object")
    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ValueError(f"{p}: '{CONFIG_SECTION}' must be a JSON object")
    return SmootherOptions.from_mapping(section)
