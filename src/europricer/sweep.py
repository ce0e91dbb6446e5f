"""Sensitivity sweeps.

Re-prices a base option while one input runs over a caller-supplied grid,
holding everything else fixed.  Output order always matches input order and
repeated grid values are priced again, not deduplicated.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np

from .black_scholes import ClosedFormPricer
from .core import CALL, PUT, SWEEP_FIELDS, OptionSpec
from .exceptions import InvalidArgument
from .monte_carlo import MonteCarloPricer, _check_positive_int

logger = logging.getLogger(__name__)

__all__ = ["SweepResult", "SensitivitySweepEngine", "sweep"]


@dataclass(frozen=True)
class SweepResult:
    field: str
    values: np.ndarray
    calls: np.ndarray
    puts: np.ndarray

    def __len__(self) -> int:
        return int(self.values.size)

    def rows(self) -> list[tuple[float, float, float]]:
        """``(value, call, put)`` triples in input order."""
        return [(float(v), float(c), float(p))
                for v, c, p in zip(self.values, self.calls, self.puts)]


def _resolve_pricer(pricer):
    if pricer is None or pricer == "bs":
        return ClosedFormPricer()
    if pricer == "mc":
        return MonteCarloPricer()
    if isinstance(pricer, (ClosedFormPricer, MonteCarloPricer)):
        return pricer
    raise InvalidArgument(
        f"pricer must be 'bs', 'mc', ClosedFormPricer or MonteCarloPricer, got {pricer!r}"
    )


def _check_values(values) -> np.ndarray:
    try:
        arr = np.asarray(values, dtype=float)
    except (TypeError, ValueError):
        raise InvalidArgument(f"sweep values must be real numbers, got {values!r}") from None
    if arr.ndim != 1:
        raise InvalidArgument(f"sweep values must be a flat sequence, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidArgument("sweep values must not be empty")
    if not np.all(np.isfinite(arr)):
        raise InvalidArgument(f"sweep values must be finite, got {values!r}")
    return arr


class SensitivitySweepEngine:
    """Sweeps one ``OptionSpec`` field through a pricer.

    Parameters
    ----------
    pricer : ClosedFormPricer | MonteCarloPricer | {"bs", "mc"} | None
        Defaults to the closed form.
    n_workers : int
        Thread count for per-point pricing; the closed form is vectorised
        and ignores it.
    """

    def __init__(self, pricer=None, *, n_workers: int = 1):
        self.n_workers = _check_positive_int("n_workers", n_workers)
        self.pricer = _resolve_pricer(pricer)

    def sweep(self, base: OptionSpec, varying_field: str, values) -> SweepResult:
        if varying_field not in SWEEP_FIELDS:
            raise InvalidArgument(
                f"varying_field must be one of {SWEEP_FIELDS}, got {varying_field!r}"
            )
        grid = _check_values(values)
        # Build every point up front so an invalid value fails before pricing
        specs = [base.with_field(varying_field, float(v)) for v in grid]
        logger.debug("sweep %s over %d point(s) with %r",
                     varying_field, grid.size, self.pricer)

        if isinstance(self.pricer, ClosedFormPricer):
            calls, puts = self.pricer.price_sweep(base, varying_field, grid)
        else:
            def point(spec):
                return (self.pricer.price(spec.with_contract(CALL)),
                        self.pricer.price(spec.with_contract(PUT)))

            if self.n_workers > 1:
                with ThreadPoolExecutor(max_workers=self.n_workers) as ex:
                    pairs = list(ex.map(point, specs))
            else:
                pairs = [point(s) for s in specs]
            calls = np.array([c for c, _ in pairs], dtype=float)
            puts = np.array([p for _, p in pairs], dtype=float)

        return SweepResult(field=varying_field, values=grid,
                           calls=np.asarray(calls, dtype=float),
                           puts=np.asarray(puts, dtype=float))


def sweep(base: OptionSpec, varying_field: str, values, pricer=None, *,
          n_workers: int = 1) -> SweepResult:
    """Price call and put across ``values`` of ``varying_field``."""
    return SensitivitySweepEngine(pricer, n_workers=n_workers).sweep(
        base, varying_field, values
    )
