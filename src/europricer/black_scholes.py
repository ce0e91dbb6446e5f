# black_scholes.py
# Closed-form Black-Scholes pricing (no dividends).
# The vectorised function accepts scalars *or* NumPy arrays and broadcasts.

from __future__ import annotations
import logging
import numpy as np
from scipy.stats import norm

from .core import CALL, PUT, OptionSpec, ContractType, SWEEP_FIELDS
from .exceptions import InvalidArgument, NumericDegenerate

logger = logging.getLogger(__name__)

_N = norm.cdf   # vectorised standard-normal CDF

__all__ = ["price", "bs_price_vec", "ClosedFormPricer"]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _call_put(S, K, T, sigma, r):
    """Call and put arrays with the T == 0 / sigma == 0 limits applied.

    d1 is only evaluated where sigma * sqrt(T) > 0; elsewhere the price is
    the deterministic limit max(S - K e^{-rT}, 0) (max(S - K, 0) at T == 0).
    """
    S, K, T, sigma, r = np.broadcast_arrays(
        *(np.asarray(x, dtype=float) for x in (S, K, T, sigma, r))
    )
    sig_sqrt_T = sigma * np.sqrt(T)
    live = sig_sqrt_T > 0.0
    denom = np.where(live, sig_sqrt_T, 1.0)

    d1 = (np.log(S / K) + (r + 0.5 * sigma * sigma) * T) / denom
    d2 = d1 - sig_sqrt_T
    disc_K = K * np.exp(-r * T)

    call_px = S * _N(d1) - disc_K * _N(d2)
    put_px = disc_K * _N(-d2) - S * _N(-d1)

    if not np.all(live):
        logger.debug("closed form: %d degenerate point(s) priced at the zero-vol limit",
                     int(np.size(live) - np.count_nonzero(live)))
        call_px = np.where(live, call_px, np.maximum(S - disc_K, 0.0))
        put_px = np.where(live, put_px, np.maximum(disc_K - S, 0.0))

    # Rounding can leave deep out-of-the-money prices a hair below zero
    call_px = np.maximum(call_px, 0.0)
    put_px = np.maximum(put_px, 0.0)

    if not (np.all(np.isfinite(call_px)) and np.all(np.isfinite(put_px))):
        raise NumericDegenerate(
            f"non-finite Black-Scholes price for S={S}, K={K}, T={T}, sigma={sigma}, r={r}"
        )
    return call_px, put_px


def _check_inputs(S, K, T, sigma, r):
    # strict: > 0, False: >= 0, None: any finite real
    for name, x, strict in (("spot", S, True), ("strike", K, True),
                            ("maturity", T, False), ("volatility", sigma, False),
                            ("rate", r, None)):
        x = np.asarray(x, dtype=float)
        if not np.all(np.isfinite(x)):
            raise InvalidArgument(f"{name} must be finite, got {x}")
        if strict is None:
            continue
        bad = (x <= 0) if strict else (x < 0)
        if np.any(bad):
            rule = "positive" if strict else "non-negative"
            raise InvalidArgument(f"{name} must be {rule}, got {x[bad].ravel()[0]}")


# ---------------------------------------------------------------------------
# Prices
# ---------------------------------------------------------------------------
def bs_price_vec(S, K, T, sigma, r, kind) -> np.ndarray:
    """Vectorised Black-Scholes price.

    Parameters accept scalars or arrays; NumPy broadcasting rules apply.
    ``kind`` is a single contract type for the whole batch.

    Returns
    -------
    np.ndarray
        Option prices (same shape as broadcasted inputs).
    """
    kind = ContractType.parse(kind)
    _check_inputs(S, K, T, sigma, r)
    call_px, put_px = _call_put(S, K, T, sigma, r)
    return call_px if kind is CALL else put_px


def price(spec: OptionSpec) -> float:
    """Black-Scholes present value of ``spec``."""
    call_px, put_px = _call_put(spec.spot, spec.strike, spec.maturity,
                                spec.volatility, spec.rate)
    if spec.contract_type is CALL:
        return float(call_px)
    elif spec.contract_type is PUT:
        return float(put_px)
    raise InvalidArgument(f"unrecognised contract type {spec.contract_type!r}")


class ClosedFormPricer:
    """Object form of the closed-form pricer, for use with sweeps."""

    def price(self, spec: OptionSpec) -> float:
        return price(spec)

    def price_sweep(self, base: OptionSpec, field: str, values) -> tuple[np.ndarray, np.ndarray]:
        """Call and put prices with ``field`` taking each of ``values``."""
        if field not in SWEEP_FIELDS:
            raise InvalidArgument(f"field must be one of {SWEEP_FIELDS}, got {field!r}")
        values = np.asarray(values, dtype=float)
        args = {
            "spot": base.spot, "strike": base.strike, "maturity": base.maturity,
            "volatility": base.volatility, "rate": base.rate,
        }
        args[field] = values
        _check_inputs(args["spot"], args["strike"], args["maturity"],
                      args["volatility"], args["rate"])
        return _call_put(args["spot"], args["strike"], args["maturity"],
                         args["volatility"], args["rate"])

    def __repr__(self):
        return "ClosedFormPricer()"
