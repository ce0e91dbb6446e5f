"""Tests for the stable monte_carlo_price / black_scholes_price surface."""

import numpy as np
import pytest
from europricer import monte_carlo_price, black_scholes_price, OptionSpec, PUT
from europricer.exceptions import InvalidArgument, NumericDegenerate


class TestBlackScholesPrice:
    def test_defaults(self):
        assert abs(black_scholes_price() - 5.565) < 0.01
        assert abs(black_scholes_price("put") - 1.126) < 0.01

    def test_returns_float(self):
        assert isinstance(black_scholes_price(), float)

    def test_sweep_mode(self):
        vols = [0.1, 0.2, 0.3]
        prices = black_scholes_price("call", v=vols)
        assert prices.shape == (3,)
        for i, v in enumerate(vols):
            assert abs(prices[i] - black_scholes_price("call", v=v)) < 1e-12

    def test_sweep_mode_put_over_strike(self):
        strikes = np.array([40.0, 50.0, 60.0])
        prices = black_scholes_price(PUT, K=strikes)
        assert np.all(np.diff(prices) > 0)

    def test_two_sequences_rejected(self):
        with pytest.raises(InvalidArgument, match="at most one"):
            black_scholes_price(S=[50, 52], K=[50, 52])

    @pytest.mark.parametrize("bad", [float("inf"), float("nan")])
    def test_non_finite_rate_in_sequence_rejected(self, bad):
        with pytest.raises(InvalidArgument, match="rate"):
            black_scholes_price("call", r=[0.1, bad])

    def test_empty_sequence_rejected(self):
        with pytest.raises(InvalidArgument):
            black_scholes_price(T=[])

    def test_zero_maturity(self):
        assert black_scholes_price("call", T=0) == 2.0
        assert black_scholes_price("put", S=45, T=0) == 5.0

    def test_bad_contract_type(self):
        with pytest.raises(InvalidArgument):
            black_scholes_price("swaption")


class TestMonteCarloPrice:
    def test_default_scenario_with_seed(self):
        assert abs(monte_carlo_price(seed=2024) - black_scholes_price()) < 0.1
        assert abs(monte_carlo_price(contract_type="put", seed=2024)
                   - black_scholes_price("put")) < 0.1

    def test_seeded_reproducible(self):
        assert monte_carlo_price(10_000, seed=1) == monte_carlo_price(10_000, seed=1)

    def test_bad_trial_count(self):
        with pytest.raises(InvalidArgument):
            monte_carlo_price(0)

    def test_overflowing_discount_matches_closed_form(self):
        with pytest.raises(NumericDegenerate):
            monte_carlo_price(1_000, "call", r=-1500.0, T=1.0, seed=1)
        with pytest.raises(NumericDegenerate):
            black_scholes_price("call", r=-1500.0, T=1.0)

    def test_non_positive_spot(self):
        with pytest.raises(InvalidArgument, match="spot"):
            monte_carlo_price(100, S=-1.0)


def test_put_call_parity_via_api():
    spec = OptionSpec()
    c = black_scholes_price("call")
    p = black_scholes_price("put")
    assert abs(c - p - (spec.spot - spec.strike * np.exp(-spec.rate * spec.maturity))) < 1e-9
