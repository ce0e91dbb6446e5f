"""Terminal payoffs of European calls and puts."""

from __future__ import annotations

import math

import numpy as np

from .core import CALL, PUT, ContractType
from .exceptions import NumericDegenerate

__all__ = ["payoff", "discount_factor"]


def payoff(ST, K: float, contract_type):
    """Call ``max(ST - K, 0)`` or put ``max(K - ST, 0)``, element-wise.

    Scalar input gives a ``float``; array input gives an ``ndarray``.
    """
    kind = ContractType.parse(contract_type)
    ST_arr = np.asarray(ST, dtype=float)
    if kind is CALL:
        out = np.maximum(ST_arr - K, 0.0)
    elif kind is PUT:
        out = np.maximum(K - ST_arr, 0.0)
    else:  # pragma: no cover - ContractType has exactly two members
        raise AssertionError(f"unhandled contract type {kind!r}")
    return float(out) if out.ndim == 0 else out


def discount_factor(r: float, T: float) -> float:
    try:
        return math.exp(-r * T)
    except OverflowError:
        raise NumericDegenerate(f"discount factor exp(-r*T) overflows for r={r}, T={T}") from None
