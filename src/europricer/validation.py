"""Model validation helpers.

Cross-checks the Monte Carlo pricer against the closed form, measures its
convergence rate as the path count grows, and checks put-call parity.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from .core import CALL, PUT, OptionSpec
from .exceptions import InvalidArgument

__all__ = [
    "cross_validate",
    "convergence_analysis",
    "put_call_parity_gap",
]


# ---------------------------------------------------------------------------
# Cross-model benchmarking
# ---------------------------------------------------------------------------

def cross_validate(
    spec: OptionSpec,
    *,
    n_paths: int = 100_000,
    seed: int = 42,
) -> dict:
    """Compare the Monte Carlo estimate with the closed form.

    Returns
    -------
    dict
        ``"bs"``, ``"mc"`` (price, stderr), ``"discrepancy"`` (mc - bs) and
        ``"z_score"`` (discrepancy in units of the MC standard error).
    """
    from .black_scholes import price as bs_price
    from .monte_carlo import euro_price_mc

    ref = bs_price(spec)
    res = euro_price_mc(spec, n_paths, seed=seed)
    diff = res.price - ref
    z = diff / res.stderr if res.stderr > 0 else float("nan")
    return {"bs": ref, "mc": (res.price, res.stderr), "discrepancy": diff, "z_score": z}


# ---------------------------------------------------------------------------
# Convergence analysis
# ---------------------------------------------------------------------------

def convergence_analysis(
    spec: OptionSpec,
    path_counts: list | np.ndarray,
    *,
    seed: int = 42,
    reference: Optional[float] = None,
) -> dict:
    """Analyse Monte Carlo convergence as the number of paths grows.

    Parameters
    ----------
    path_counts : array-like of int
        Path counts to test, e.g. ``[1_000, 10_000, 100_000]``.
    reference : float, optional
        True price for error computation.  Default: Black-Scholes.

    Returns
    -------
    dict
        ``"params"``, ``"prices"``, ``"stderrs"``, ``"errors"``,
        ``"reference"``, ``"order"`` (estimated; ~0.5 for plain MC).
    """
    from .black_scholes import price as bs_price
    from .monte_carlo import euro_price_mc

    path_counts = [int(m) for m in path_counts]
    if not path_counts:
        raise InvalidArgument("path_counts must not be empty")

    if reference is None:
        reference = bs_price(spec)

    prices, stderrs = [], []
    for m in path_counts:
        res = euro_price_mc(spec, m, seed=seed)
        prices.append(res.price)
        stderrs.append(res.stderr)

    errors = [abs(p - reference) for p in prices]

    # Estimate convergence order from log-log regression
    order = float("nan")
    valid = [(m, e) for m, e in zip(path_counts, errors) if e > 0]
    if len(valid) >= 2:
        log_m = np.log([m for m, _ in valid])
        log_e = np.log([e for _, e in valid])
        # error ~ C / m^order  => log(e) = -order * log(m) + const
        coeffs = np.polyfit(log_m, log_e, 1)
        order = -float(coeffs[0])

    return {
        "params": path_counts,
        "prices": prices,
        "stderrs": stderrs,
        "errors": errors,
        "reference": float(reference),
        "order": order,
    }


# ---------------------------------------------------------------------------
# Put-call parity
# ---------------------------------------------------------------------------

def put_call_parity_gap(spec: OptionSpec) -> float:
    """``C - P - (S - K e^{-rT})`` from the closed form; zero up to rounding."""
    from .black_scholes import price as bs_price

    c = bs_price(spec.with_contract(CALL))
    p = bs_price(spec.with_contract(PUT))
    return c - p - (spec.spot - spec.strike * math.exp(-spec.rate * spec.maturity))
