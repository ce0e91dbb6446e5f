# europricer — European option pricing: Monte Carlo, Black-Scholes, sweeps
# Public API

from .core import OptionSpec, ContractType, CALL, PUT, SWEEP_FIELDS
from .exceptions import PricingError, InvalidArgument, NumericDegenerate

# Building blocks
from .sampler import NormalSampler
from .processes import gbm_terminal
from .payoff import payoff, discount_factor

# Pricers
from .black_scholes import price as bs_price, bs_price_vec, ClosedFormPricer
from .monte_carlo import (
    euro_price_mc, MonteCarloPricer, MonteCarloResult, SimulationTrialSet,
)

# Sensitivity sweeps
from .sweep import sweep, SensitivitySweepEngine, SweepResult

# Stable call surface
from .api import monte_carlo_price, black_scholes_price

# Model validation
from .validation import cross_validate, convergence_analysis, put_call_parity_gap

__all__ = [
    "OptionSpec", "ContractType", "CALL", "PUT", "SWEEP_FIELDS",
    "PricingError", "InvalidArgument", "NumericDegenerate",
    "NormalSampler", "gbm_terminal", "payoff", "discount_factor",
    "bs_price", "bs_price_vec", "ClosedFormPricer",
    "euro_price_mc", "MonteCarloPricer", "MonteCarloResult", "SimulationTrialSet",
    "sweep", "SensitivitySweepEngine", "SweepResult",
    "monte_carlo_price", "black_scholes_price",
    "cross_validate", "convergence_analysis", "put_call_parity_gap",
]

__version__ = "0.1.0"
