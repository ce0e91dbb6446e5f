"""Stable call surface for collaborators such as a charting layer."""

from __future__ import annotations

import numpy as np

from .black_scholes import ClosedFormPricer, price as _bs_price
from .core import (
    DEFAULT_MATURITY, DEFAULT_PATHS, DEFAULT_RATE, DEFAULT_SPOT,
    DEFAULT_STRIKE, DEFAULT_VOLATILITY, CALL, OptionSpec,
)
from .exceptions import InvalidArgument
from .monte_carlo import euro_price_mc

__all__ = ["monte_carlo_price", "black_scholes_price"]

# positional name -> OptionSpec field
_FIELDS = {"S": "spot", "K": "strike", "T": "maturity", "v": "volatility", "r": "rate"}


def monte_carlo_price(m: int = DEFAULT_PATHS, contract_type=CALL,
                      S: float = DEFAULT_SPOT, K: float = DEFAULT_STRIKE,
                      T: float = DEFAULT_MATURITY, v: float = DEFAULT_VOLATILITY,
                      r: float = DEFAULT_RATE, *, seed=None) -> float:
    """Monte Carlo price with ``m`` trials; pass ``seed`` for reproducibility."""
    spec = OptionSpec(contract_type, S, K, T, v, r)
    return euro_price_mc(spec, m, seed=seed).price


def black_scholes_price(contract_type=CALL, S=DEFAULT_SPOT, K=DEFAULT_STRIKE,
                        T=DEFAULT_MATURITY, v=DEFAULT_VOLATILITY, r=DEFAULT_RATE):
    """Closed-form price.

    Exactly one of ``S, K, T, v, r`` may be a sequence, in which case the
    result is an array parallel to it (sweep mode); otherwise a ``float``.
    """
    given = {"S": S, "K": K, "T": T, "v": v, "r": r}
    seqs = [name for name, x in given.items() if np.ndim(x) > 0]
    if len(seqs) > 1:
        raise InvalidArgument(
            f"at most one of S, K, T, v, r may be a sequence, got {', '.join(seqs)}"
        )
    if not seqs:
        return _bs_price(OptionSpec(contract_type, S, K, T, v, r))

    name = seqs[0]
    scalars = {_FIELDS[k]: x for k, x in given.items() if k != name}
    # the swept field keeps its default in the base spec and is overridden below
    base = OptionSpec(contract_type=contract_type, **scalars)
    try:
        values = np.asarray(given[name], dtype=float)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{name} must be a sequence of reals, got {given[name]!r}") from None
    if values.ndim != 1 or values.size == 0:
        raise InvalidArgument(f"{name} must be a non-empty flat sequence, got {given[name]!r}")
    calls, puts = ClosedFormPricer().price_sweep(base, _FIELDS[name], values)
    return calls if base.contract_type is CALL else puts
