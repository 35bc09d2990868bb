"""Tests for RSIIndicator.

Verifies:
- Output is aligned 1:1 with the input dates and never missing
- Leading positions are the neutral 50.0
- Flat prices (0/0) resolve to 50.0, one-way trends to 100 / 0
- Signed down-average division keeps IEEE-754 results
- get_last agrees with the last training value
"""
import math
import pickle
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from indicator_engine.data.timeseries import TimeSeries
from indicator_engine.indicators import ConfigurationError, RSIIndicator


class TestRSIContract:

    def test_default_period_and_window(self):
        rsi = RSIIndicator()
        assert rsi.rsi_period == 14
        assert rsi.min_window_size == 15
        assert rsi.name == "RSI_14"

    @pytest.mark.parametrize("period", [0, -3, 1.5, True, "14"])
    def test_invalid_period(self, period):
        with pytest.raises(ConfigurationError):
            RSIIndicator(period)

    @pytest.mark.parametrize("period", [1, 2, 14, 30])
    def test_total_fill_same_length(self, period, random_walk_log_prices):
        out = RSIIndicator(period).get_training(random_walk_log_prices)
        assert out.index == random_walk_log_prices.index
        assert not out.has_missing

    @pytest.mark.parametrize("period", [3, 14])
    def test_leading_positions_are_neutral(self, period, random_walk_log_prices):
        out = RSIIndicator(period).get_training(random_walk_log_prices)
        assert out.values[:period].tolist() == [50.0] * period
        assert out.values[period] != 50.0

    def test_random_walk_values_are_finite(self, random_walk_log_prices):
        out = RSIIndicator().get_training(random_walk_log_prices)
        assert np.all(np.isfinite(out.values))

    def test_input_not_mutated(self, random_walk_log_prices):
        before = np.array(random_walk_log_prices.values)
        RSIIndicator().get_training(random_walk_log_prices)
        np.testing.assert_array_equal(random_walk_log_prices.values, before)


class TestRSIValues:

    def test_constant_gain_end_to_end(self, trending_log_prices):
        out = RSIIndicator().get_training(trending_log_prices)
        assert len(out) == 20
        assert out.values[:14].tolist() == [50.0] * 14
        # Up moves only: RS = up / 0 = +inf, RSI = 100 - 100 / inf = 100
        assert out.values[14:].tolist() == [100.0] * 6

    def test_constant_loss_gives_zero(self, make_series):
        out = RSIIndicator(3).get_training(make_series([5.0 - 0.1 * i for i in range(8)]))
        assert out.values[:3].tolist() == [50.0] * 3
        assert out.values[3:].tolist() == [0.0] * 5

    def test_flat_prices_resolve_to_neutral(self, make_series):
        # up and down means are both 0 -> RS = 0/0 = NaN -> filled with 50.0
        out = RSIIndicator(5).get_training(make_series([4.6] * 12))
        assert out.values.tolist() == [50.0] * 12

    def test_signed_down_average_hand_computed(self, make_series):
        # deltas +1.0, -0.5: up mean 0.5, down mean -0.25, RS = -2
        out = RSIIndicator(2).get_training(make_series([0.0, 1.0, 0.5]))
        assert out.values.tolist() == [50.0, 50.0, 200.0]

    def test_balanced_window_divides_by_zero(self, make_series):
        # up mean 0.5, down mean -0.5: RS = -1, 1 + RS = 0, RSI = -inf
        out = RSIIndicator(2).get_training(make_series([0.0, 1.0, 0.0]))
        assert np.isneginf(out.values[2])

    def test_matches_formula_on_random_walk(self, random_walk_log_prices):
        period = 14
        lp = random_walk_log_prices.values
        delta = np.diff(lp)
        up = np.where(delta > 0, delta, 0.0)
        down = np.where(delta < 0, delta, 0.0)
        i = len(lp) - 1
        rs = up[i - period:i].mean() / down[i - period:i].mean()
        expected = 100.0 - 100.0 / (1.0 + rs)
        out = RSIIndicator(period).get_training(random_walk_log_prices)
        assert out.values[-1] == pytest.approx(expected, rel=1e-12)

    def test_missing_prices_count_as_no_movement(self, make_series):
        values = [0.0, 0.1, float("nan"), 0.3, 0.4, 0.5]
        out = RSIIndicator(2).get_training(make_series(values))
        assert not out.has_missing
        # window over deltas at positions 2 and 3 is all NaN -> filled 0.0 -> 0/0
        assert out.values[3] == 50.0
        assert out.values[5] == 100.0


class TestRSIGetLast:

    def test_get_last_matches_training(self, random_walk_log_prices):
        rsi = RSIIndicator()
        expected = rsi.get_training(random_walk_log_prices).last()
        assert rsi.get_last(random_walk_log_prices) == pytest.approx(expected, rel=1e-12)

    def test_get_last_on_min_window(self, random_walk_log_prices):
        rsi = RSIIndicator(10)
        window = random_walk_log_prices.tail(rsi.min_window_size)
        assert rsi.get_last(window) == pytest.approx(
            rsi.get_last(random_walk_log_prices), rel=1e-12,
        )
        assert rsi.get_last(window) != 50.0

    def test_short_input_returns_neutral(self, make_series):
        assert RSIIndicator().get_last(make_series([0.1 * i for i in range(10)])) == 50.0

    def test_empty_input(self):
        rsi = RSIIndicator()
        assert len(rsi.get_training(TimeSeries.empty())) == 0
        assert rsi.get_last(TimeSeries.empty()) == 50.0

    def test_all_missing_input(self, make_series):
        out = RSIIndicator(3).get_training(make_series([float("nan")] * 6))
        assert out.values.tolist() == [50.0] * 6


class TestRSISharing:

    def test_pickle_round_trip(self):
        rsi = RSIIndicator(9)
        clone = pickle.loads(pickle.dumps(rsi))
        assert clone == rsi
        assert clone.min_window_size == 10

    def test_concurrent_use_is_deterministic(self, random_walk_log_prices):
        rsi = RSIIndicator()
        expected = rsi.get_training(random_walk_log_prices)
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(rsi.get_training, [random_walk_log_prices] * 8))
        assert all(r.equals(expected) for r in results)

    def test_last_value_is_float(self, trending_log_prices):
        value = RSIIndicator().get_last(trending_log_prices)
        assert isinstance(value, float)
        assert math.isclose(value, 100.0)
