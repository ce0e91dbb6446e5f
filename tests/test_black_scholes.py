"""Tests for the closed-form Black-Scholes pricer."""

import math
import numpy as np
import pytest
from europricer.core import OptionSpec, CALL, PUT
from europricer.black_scholes import price, bs_price_vec, ClosedFormPricer
from europricer.exceptions import InvalidArgument


def test_bs_known_values():
    # Hull, Options Futures and Other Derivatives: S=42, K=40, r=10%, sigma=20%, T=0.5
    assert abs(price(OptionSpec(CALL, 42, 40, 0.5, 0.2, 0.1)) - 4.76) < 0.01
    assert abs(price(OptionSpec(PUT, 42, 40, 0.5, 0.2, 0.1)) - 0.81) < 0.01


def test_default_scenario():
    assert abs(price(OptionSpec(CALL)) - 5.565) < 0.01
    assert abs(price(OptionSpec(PUT)) - 1.126) < 0.01


class TestPutCallParity:
    @pytest.mark.parametrize("S,K,T,sigma,r", [
        (52, 50, 0.5, 0.2, 0.1),
        (100, 120, 2.0, 0.35, 0.03),
        (10, 5, 0.1, 0.9, -0.01),
        (75, 75, 0.0, 0.3, 0.05),
        (75, 80, 1.0, 0.0, 0.05),
    ])
    def test_parity(self, S, K, T, sigma, r):
        c = price(OptionSpec(CALL, S, K, T, sigma, r))
        p = price(OptionSpec(PUT, S, K, T, sigma, r))
        assert abs((c - p) - (S - K * math.exp(-r * T))) < 1e-9


class TestDegenerate:
    @pytest.mark.parametrize("S,K", [(52, 50), (50, 52), (50, 50)])
    def test_zero_maturity_is_intrinsic(self, S, K):
        assert price(OptionSpec(CALL, S, K, 0.0, 0.2, 0.1)) == max(S - K, 0.0)
        assert price(OptionSpec(PUT, S, K, 0.0, 0.2, 0.1)) == max(K - S, 0.0)

    def test_zero_maturity_and_vol(self):
        assert price(OptionSpec(CALL, 52, 50, 0.0, 0.0, 0.1)) == 2.0

    def test_zero_vol_is_discounted_forward_intrinsic(self):
        c = price(OptionSpec(CALL, 52, 50, 0.5, 0.0, 0.1))
        assert abs(c - (52 - 50 * math.exp(-0.05))) < 1e-12
        assert price(OptionSpec(PUT, 52, 50, 0.5, 0.0, 0.1)) == 0.0

    def test_no_nan_in_vector_mode(self):
        px = bs_price_vec(52, 50, np.array([0.0, 0.25, 0.5]), 0.2, 0.1, CALL)
        assert np.all(np.isfinite(px))
        assert px[0] == 2.0


class TestMonotonicity:
    def test_in_spot(self):
        spots = np.linspace(20, 90, 40)
        assert np.all(np.diff(bs_price_vec(spots, 50, 0.5, 0.2, 0.1, CALL)) >= 0)
        assert np.all(np.diff(bs_price_vec(spots, 50, 0.5, 0.2, 0.1, PUT)) <= 0)

    def test_in_strike(self):
        strikes = np.linspace(20, 90, 40)
        assert np.all(np.diff(bs_price_vec(52, strikes, 0.5, 0.2, 0.1, CALL)) <= 0)
        assert np.all(np.diff(bs_price_vec(52, strikes, 0.5, 0.2, 0.1, PUT)) >= 0)

    def test_in_vol(self):
        vols = np.linspace(0.0, 1.0, 41)
        for kind in (CALL, PUT):
            assert np.all(np.diff(bs_price_vec(52, 50, 0.5, vols, 0.1, kind)) >= -1e-12)


class TestVectorised:
    def test_matches_scalar(self):
        spots = np.array([40.0, 52.0, 65.0])
        got = bs_price_vec(spots, 50, 0.5, 0.2, 0.1, PUT)
        for i, S in enumerate(spots):
            assert abs(got[i] - price(OptionSpec(PUT, S, 50, 0.5, 0.2, 0.1))) < 1e-12

    def test_rejects_non_positive_spot(self):
        with pytest.raises(InvalidArgument, match="spot"):
            bs_price_vec(np.array([10.0, 0.0]), 50, 0.5, 0.2, 0.1, CALL)

    def test_rejects_negative_vol(self):
        with pytest.raises(InvalidArgument, match="volatility"):
            bs_price_vec(52, 50, 0.5, -0.1, 0.1, CALL)

    def test_non_negative(self):
        strikes = np.linspace(1, 500, 200)
        for kind in (CALL, PUT):
            assert np.all(bs_price_vec(52, strikes, 3.0, 0.05, 0.2, kind) >= 0)


class TestClosedFormPricer:
    def test_price_sweep_order_and_parity(self):
        rates = np.array([0.05, -0.02, 0.1, 0.05])
        calls, puts = ClosedFormPricer().price_sweep(OptionSpec(), "rate", rates)
        assert calls.shape == puts.shape == (4,)
        assert calls[0] == calls[3]
        np.testing.assert_allclose(calls - puts, 52 - 50 * np.exp(-rates * 0.5), atol=1e-9)

    def test_price_sweep_rejects_non_finite_rate(self):
        with pytest.raises(InvalidArgument, match="rate"):
            ClosedFormPricer().price_sweep(OptionSpec(), "rate", [0.1, np.inf])

    def test_price_sweep_unknown_field(self):
        with pytest.raises(InvalidArgument):
            ClosedFormPricer().price_sweep(OptionSpec(), "q", [0.1])
