# processes.py
# Terminal-price model for Monte Carlo pricing.
# Risk-neutral GBM, sampled exactly at maturity (no time stepping).

from __future__ import annotations
import numpy as np


__all__ = ["gbm_terminal"]


def gbm_terminal(S, T: float, sigma: float, r: float, eps) -> np.ndarray:
    """
    Exact GBM terminal price under Q:
        S_T = S * exp((r - 0.5*sigma^2) T + sigma * sqrt(T) * eps)

    At T == 0 the result is S for every draw, exactly.
    """
    eps = np.asarray(eps, dtype=float)
    if T == 0:
        return np.full(eps.shape, float(S))
    drift = (r - 0.5 * sigma * sigma) * T
    vol = sigma * np.sqrt(T)
    return S * np.exp(drift + vol * eps)
