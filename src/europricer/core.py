from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum

from .exceptions import InvalidArgument

# ---------------------------------------------------------------------------
# Defaults shared by the API functions and the CLI
# ---------------------------------------------------------------------------
DEFAULT_SPOT = 52.0
DEFAULT_STRIKE = 50.0
DEFAULT_MATURITY = 0.5      # years
DEFAULT_VOLATILITY = 0.20
DEFAULT_RATE = 0.10         # continuous risk-free
DEFAULT_PATHS = 100_000

SWEEP_FIELDS = ("spot", "strike", "maturity", "volatility", "rate")


class ContractType(str, Enum):
    CALL = "call"
    PUT = "put"

    @classmethod
    def parse(cls, value) -> "ContractType":
        """Coerce an enum member or a string such as ``"call"``/``"p"``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("call", "c"):
                return cls.CALL
            if s in ("put", "p"):
                return cls.PUT
        raise InvalidArgument(
            f"contract_type must be 'call' or 'put', got {value!r}"
        )


CALL = ContractType.CALL
PUT = ContractType.PUT


def _check_finite(name: str, value) -> float:
    try:
        x = float(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{name} must be a real number, got {value!r}") from None
    if not math.isfinite(x):
        raise InvalidArgument(f"{name} must be finite, got {value!r}")
    return x


@dataclass(frozen=True)
class OptionSpec:
    """A single European option on a non-dividend-paying underlying.

    ``maturity == 0`` and ``volatility == 0`` are accepted as degenerate
    cases; both pricers reduce them to a deterministic payoff.
    """
    contract_type: ContractType = CALL
    spot: float = DEFAULT_SPOT
    strike: float = DEFAULT_STRIKE
    maturity: float = DEFAULT_MATURITY      # years
    volatility: float = DEFAULT_VOLATILITY
    rate: float = DEFAULT_RATE              # continuous risk-free

    def __post_init__(self):
        object.__setattr__(self, "contract_type", ContractType.parse(self.contract_type))
        for name in SWEEP_FIELDS:
            object.__setattr__(self, name, _check_finite(name, getattr(self, name)))
        if self.spot <= 0:
            raise InvalidArgument(f"spot must be positive, got {self.spot}")
        if self.strike <= 0:
            raise InvalidArgument(f"strike must be positive, got {self.strike}")
        if self.maturity < 0:
            raise InvalidArgument(f"maturity must be non-negative, got {self.maturity}")
        if self.volatility < 0:
            raise InvalidArgument(f"volatility must be non-negative, got {self.volatility}")

    def with_field(self, name: str, value: float) -> "OptionSpec":
        """Copy of this spec with one sweepable field replaced."""
        if name not in SWEEP_FIELDS:
            raise InvalidArgument(
                f"field must be one of {SWEEP_FIELDS}, got {name!r}"
            )
        return replace(self, **{name: value})

    def with_contract(self, kind) -> "OptionSpec":
        return replace(self, contract_type=ContractType.parse(kind))

    def intrinsic_value(self) -> float:
        if self.contract_type is CALL:
            return max(self.spot - self.strike, 0.0)
        return max(self.strike - self.spot, 0.0)
