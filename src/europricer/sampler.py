# sampler.py
# Standard-normal variate source. Randomness always comes from an explicitly
# seeded numpy Generator; nothing touches numpy's global RNG.

from __future__ import annotations

import numbers
from typing import Optional, Union

import numpy as np

from .exceptions import InvalidArgument

__all__ = ["NormalSampler", "as_sampler"]


class NormalSampler:
    """Draws independent N(0, 1) variates from its own ``Generator``.

    Parameters
    ----------
    seed : int | SeedSequence | None
        Root of the random stream.  ``None`` pulls fresh OS entropy, so
        results vary run to run.
    """

    def __init__(self, seed: Union[int, np.random.SeedSequence, None] = None):
        if isinstance(seed, np.random.SeedSequence):
            self._seq = seed
        else:
            self._seq = np.random.SeedSequence(seed)
        self._rng = np.random.default_rng(self._seq)

    @property
    def seed_sequence(self) -> np.random.SeedSequence:
        return self._seq

    def sample(self, m: int) -> np.ndarray:
        """Return ``m`` independent standard-normal draws."""
        if isinstance(m, bool) or not isinstance(m, numbers.Integral):
            raise InvalidArgument(f"sample size must be an integer, got {m!r}")
        if m <= 0:
            raise InvalidArgument(f"sample size must be positive, got {m}")
        return self._rng.standard_normal(int(m))

    def spawn(self, n: int) -> list["NormalSampler"]:
        """Independent child samplers, one per chunk or worker."""
        if n <= 0:
            raise InvalidArgument(f"number of child streams must be positive, got {n}")
        return [NormalSampler(ss) for ss in self._seq.spawn(n)]


def as_sampler(
    source: Union[NormalSampler, int, np.random.SeedSequence, None] = None,
) -> NormalSampler:
    """Coerce a seed (or an existing sampler) into a ``NormalSampler``."""
    if isinstance(source, NormalSampler):
        return source
    if source is None or isinstance(source, np.random.SeedSequence):
        return NormalSampler(source)
    if isinstance(source, numbers.Integral) and not isinstance(source, bool):
        if source < 0:
            raise InvalidArgument(f"seed must be non-negative, got {source}")
        return NormalSampler(int(source))
    raise InvalidArgument(f"seed must be an int, SeedSequence or NormalSampler, got {source!r}")
