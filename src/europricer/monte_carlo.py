# europricer/monte_carlo.py

from __future__ import annotations
import logging
import math
import numbers
import numpy as np
from dataclasses import dataclass
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from .core import DEFAULT_PATHS, OptionSpec
from .exceptions import InvalidArgument
from .payoff import discount_factor, payoff
from .processes import gbm_terminal
from .sampler import NormalSampler, as_sampler

logger = logging.getLogger(__name__)

__all__ = ["SimulationTrialSet", "MonteCarloResult", "MonteCarloPricer", "euro_price_mc"]


@dataclass(frozen=True)
class SimulationTrialSet:
    """Raw trials behind one Monte Carlo estimate, row-aligned."""
    normals: np.ndarray
    terminal_prices: np.ndarray
    payoffs: np.ndarray

    def __len__(self) -> int:
        return int(self.normals.size)

    def summary(self) -> dict[str, float]:
        ST = self.terminal_prices
        return {
            "n": len(self),
            "st_min": float(ST.min()),
            "st_max": float(ST.max()),
            "st_mean": float(ST.mean()),
            "payoff_mean": float(self.payoffs.mean()),
        }

    def sample_rows(self, n: int = 10, seed: Optional[int] = None) -> np.ndarray:
        """Random subsample of ``(eps, S_T, payoff)`` rows, shape ``(n, 3)``."""
        if n <= 0:
            raise InvalidArgument(f"n must be positive, got {n}")
        n = min(int(n), len(self))
        idx = np.random.default_rng(seed).choice(len(self), size=n, replace=False)
        idx.sort()
        return np.column_stack(
            [self.normals[idx], self.terminal_prices[idx], self.payoffs[idx]]
        )


@dataclass(frozen=True)
class MonteCarloResult:
    price: float
    stderr: float
    n_paths: int
    trials: Optional[SimulationTrialSet] = None

    def confidence_interval(self, z: float = 1.96) -> tuple[float, float]:
        return self.price - z * self.stderr, self.price + z * self.stderr


# ---- helper: one simulation chunk (terminal S_T only) ----

def _mc_chunk(n: int, spec: OptionSpec, sampler: NormalSampler, keep: bool):
    """
    Simulate `n` terminal prices and their undiscounted payoffs.
    Return sufficient statistics (n, sum, sum of squares) plus the raw
    trial arrays when `keep` is set.
    """
    Z = sampler.sample(n)
    ST = gbm_terminal(spec.spot, spec.maturity, spec.volatility, spec.rate, Z)
    PO = payoff(ST, spec.strike, spec.contract_type)
    stats = (n, float(PO.sum()), float((PO * PO).sum()))
    return stats, ((Z, ST, PO) if keep else None)


def _plan_chunks(n_paths: int, chunk_size: int) -> list[int]:
    chunks = []
    remaining = n_paths
    while remaining > 0:
        m = min(chunk_size, remaining)
        chunks.append(m)
        remaining -= m
    return chunks


def _check_positive_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidArgument(f"{name} must be positive, got {value}")
    return int(value)


def euro_price_mc(
    spec: OptionSpec,
    n_paths: int = DEFAULT_PATHS,
    *,
    seed=None,
    chunk_size: int = 100_000,
    n_workers: int = 1,
    return_trials: bool = False,
) -> MonteCarloResult:
    """
    Plain Monte Carlo price of a European option (terminal-only GBM).

    estimate = exp(-rT) * mean(payoff_i), stderr = exp(-rT) * s / sqrt(m).

    - Streams in chunks to cap memory; each chunk draws from its own child
      stream spawned from `seed`, so a fixed seed gives the same trials
      whatever `n_workers` is.
    - `n_workers > 1` runs chunks on a thread pool; NumPy releases the GIL
      inside the heavy array kernels.
    - `return_trials=True` attaches the full `SimulationTrialSet`; the
      estimate itself is unaffected.
    """
    n_paths = _check_positive_int("n_paths", n_paths)
    chunk_size = _check_positive_int("chunk_size", chunk_size)
    n_workers = _check_positive_int("n_workers", n_workers)

    chunks = _plan_chunks(n_paths, chunk_size)
    samplers = as_sampler(seed).spawn(len(chunks))
    logger.debug("MC %s: %d paths in %d chunk(s), %d worker(s)",
                 spec.contract_type.value, n_paths, len(chunks), n_workers)

    if n_workers <= 1 or len(chunks) == 1:
        results = [_mc_chunk(m, spec, s, return_trials) for m, s in zip(chunks, samplers)]
    else:
        with ThreadPoolExecutor(max_workers=n_workers) as ex:
            results = list(ex.map(
                lambda args: _mc_chunk(args[0], spec, args[1], return_trials),
                zip(chunks, samplers),
            ))

    # aggregate
    n = sum(s[0] for s, _ in results)
    sumX = sum(s[1] for s, _ in results)
    sumX2 = sum(s[2] for s, _ in results)

    df = discount_factor(spec.rate, spec.maturity)
    meanX = sumX / n
    if n > 1:
        varX = max(0.0, (sumX2 - n * meanX * meanX) / (n - 1))
        se = df * math.sqrt(varX / n)
    else:
        se = 0.0

    trials = None
    if return_trials:
        Z, ST, PO = (np.concatenate(parts) for parts in zip(*(t for _, t in results)))
        trials = SimulationTrialSet(normals=Z, terminal_prices=ST, payoffs=PO)

    return MonteCarloResult(price=float(df * meanX), stderr=float(se),
                            n_paths=n, trials=trials)


class MonteCarloPricer:
    """Reusable Monte Carlo pricer configuration.

    Every call to ``price`` restarts from ``seed``, so repeated calls with a
    fixed seed reuse the same normals (common random numbers across a sweep).
    """

    def __init__(self, n_paths: int = DEFAULT_PATHS, seed=None, *,
                 chunk_size: int = 100_000, n_workers: int = 1):
        self.n_paths = _check_positive_int("n_paths", n_paths)
        self.chunk_size = _check_positive_int("chunk_size", chunk_size)
        self.n_workers = _check_positive_int("n_workers", n_workers)
        if isinstance(seed, NormalSampler):
            seed = seed.seed_sequence
        self.seed = seed

    def _seed(self):
        # SeedSequence.spawn is stateful; restart from a pristine copy
        ss = self.seed
        if isinstance(ss, np.random.SeedSequence):
            return np.random.SeedSequence(ss.entropy, spawn_key=ss.spawn_key,
                                          pool_size=ss.pool_size)
        return ss

    def run(self, spec: OptionSpec, return_trials: bool = False) -> MonteCarloResult:
        return euro_price_mc(spec, self.n_paths, seed=self._seed(),
                             chunk_size=self.chunk_size, n_workers=self.n_workers,
                             return_trials=return_trials)

    def price(self, spec: OptionSpec) -> float:
        return self.run(spec).price

    def __repr__(self):
        return f"MonteCarloPricer(n_paths={self.n_paths}, seed={self.seed!r})"
