"""
Unit tests for Series
Tests buffering until bootstrap, state trace, residuals and forecasts
"""
import pytest
import numpy as np

from winters.series import Series


@pytest.fixture
def series():
    return Series('shoes', cycle_length=7, n_cycles_init=3, sca=.8, scb=.8, scc=.3)


class TestBootstrap:
    """Test buffering of observations before the forecaster exists"""

    def test_not_initialised_before_three_cycles(self, series, sales_volumes):
        """Test no forecaster until 21 observations"""
        for value in sales_volumes[:-1]:
            series.new_observation(value)

        assert series.n_samples == 20
        assert not series.initialised
        assert series.forecaster is None
        assert series.model['level'] == []

    def test_initialised_on_last_bootstrap_observation(self, series, sales_volumes):
        """Test forecaster bootstrapped from the buffered history"""
        for value in sales_volumes:
            series.new_observation(value)

        assert series.initialised
        assert series.forecaster.cycle_position == 0
        assert series.forecaster.get_next_forecast() == pytest.approx(7440., abs=1.)
        assert len(series.model['level']) == 1
        assert series.forecast['residual'] == []

    def test_forecast_empty_before_initialised(self, series):
        """Test forecast is nan until initialised"""
        series.new_observation(1.)

        timestamp, value = series.get_forecast(3)

        assert np.isnan(timestamp).all()
        assert np.isnan(value).all()


class TestUpdates:
    """Test observations after bootstrap"""

    @pytest.fixture
    def running(self, series, sales_volumes):
        for value in sales_volumes:
            series.new_observation(value)
        return series

    def test_residuals(self, running, fourth_week):
        """Test one-step-ahead forecasts are scored before updating"""
        observations, next_forecasts = fourth_week

        for x in observations:
            running.new_observation(x)

        expected = [7440.] + next_forecasts
        np.testing.assert_allclose(running.forecast['value'], expected, atol=1.)
        np.testing.assert_allclose(
            running.forecast['residual'],
            np.array(observations) - np.array(running.forecast['value']))
        assert running.forecaster.cycle_position == 0

    def test_trace(self, running):
        """Test state is recorded after every update"""
        running.new_observation(8152.)

        assert len(running.model['level']) == 2
        assert running.model['level'][-1] == running.forecaster.trend_level
        assert running.model['slope'][-1] == running.forecaster.trend_slope
        assert running.model['coefficient'][-1] == running.forecaster.seasonal_coefficients[0]

    def test_errors(self, running):
        """Test mean absolute and percentage errors"""
        running.new_observation(8152.)

        residual = running.forecast['residual'][0]
        assert running.mean_absolute_error == pytest.approx(abs(residual))
        assert running.mean_absolute_percentage_error == pytest.approx(abs(residual) / 8152. * 100)

    def test_errors_without_residuals(self, series):
        """Test errors are nan without scored forecasts"""
        assert np.isnan(series.mean_absolute_error)
        assert np.isnan(series.mean_absolute_percentage_error)

    def test_forecast_period_index(self, running):
        """Test timestamps continue the period index"""
        assert not running.has_unixtime
        timestamp, value = running.get_forecast(14)

        np.testing.assert_array_equal(timestamp, np.arange(21, 35))
        np.testing.assert_allclose(value, running.forecaster.get_forecasts(14))

    def test_forecast_unixtime(self, sales_volumes):
        """Test timestamps are extrapolated by the mean step"""
        day = 24*60*60
        series = Series('shoes', cycle_length=7, n_cycles_init=3)

        for i, value in enumerate(sales_volumes):
            series.new_observation(value, timestamp=1600000000 + i*day)

        assert series.has_unixtime
        timestamp, _ = series.get_forecast(2)

        np.testing.assert_allclose(timestamp, [1600000000 + 21*day, 1600000000 + 22*day])
