# packages
import logging
import numpy as np

# project
import winters.config.parameters as prm
from   winters.forecaster        import WintersForecaster

logger = logging.getLogger(__name__)


class Series():
    """
    Follows one observed time series.
    Buffers observations until enough whole cycles exist to bootstrap a
    forecaster, then updates the forecaster with every new observation.
    """

    def __init__(self, name, cycle_length=prm.cycle_length, n_cycles_init=prm.n_cycles_init,
                 sca=prm.sca, scb=prm.scb, scc=prm.scc):
        # give to self
        self.name          = name
        self.cycle_length  = cycle_length
        self.n_cycles_init = n_cycles_init
        self.smoothing     = (sca, scb, scc)

        # contains observations and modelled state once initialised
        self.model = {
            'timestamp':   [], # shared unixtime or period index timeaxis
            'value':       [], # observed values
            'level':       [], # trend level after each update
            'slope':       [], # trend slope after each update
            'coefficient': [], # seasonal coefficient of the observed phase
        }

        # contains all previous one-step-ahead forecasts
        self.forecast = {
            'timestamp': [], # forecasted period timeaxis
            'value':     [], # forecast made before the observation
            'residual':  [], # observation minus forecast
        }

        # variables
        self.n_samples    = 0 # number of observations received
        self.initialised  = False
        self.forecaster   = None
        self.has_unixtime = False # timeaxis is unixtime, not period index


    def new_observation(self, value, timestamp=None):
        """
        Receive new observation and iterate the forecaster.

        Parameters
        ----------
        value : float
            Observed value.
        timestamp : int
            Observation unixtime. The period index is used if None.

        """

        # timeaxis kind is set by the first observation
        if self.n_samples == 0:
            self.has_unixtime = timestamp is not None

        if timestamp is None:
            timestamp = self.n_samples

        # append new value
        self.model['timestamp'].append(timestamp)
        self.model['value'].append(float(value))
        self.n_samples += 1

        if self.n_samples < self.cycle_length * self.n_cycles_init:
            return
        elif not self.initialised:
            self.__initialise_forecaster()
        else:
            self.__iterate_forecaster(value, timestamp)

        self.__record_state()


    def __initialise_forecaster(self):
        """Bootstrap forecaster from every observation received so far."""

        sca, scb, scc = self.smoothing
        self.forecaster = WintersForecaster.from_history(
            np.array(self.model['value']), self.cycle_length, sca, scb, scc)

        # the buffer is whole cycles, next observation is phase 0
        self.initialised = True
        logger.info('Initialised %s from %d observations: %r', self.name, self.n_samples, self.forecaster)


    def __iterate_forecaster(self, value, timestamp):
        """Score the pending forecast, then update the forecaster."""

        forecast = self.forecaster.get_next_forecast()
        self.forecast['timestamp'].append(timestamp)
        self.forecast['value'].append(forecast)
        self.forecast['residual'].append(value - forecast)

        self.forecaster.add_observation(value)


    def __record_state(self):
        # coefficient of the phase just observed
        position = (self.forecaster.cycle_position - 1) % self.cycle_length
        self.model['level'].append(self.forecaster.trend_level)
        self.model['slope'].append(self.forecaster.trend_slope)
        self.model['coefficient'].append(self.forecaster.seasonal_coefficients[position])


    def step_length(self):
        """Mean step between timestamps in the last cycle."""

        tax = np.array(self.model['timestamp'][-(self.cycle_length + 1):], dtype=float)
        if len(tax) < 2:
            return 1.0
        return float(np.mean(tax[1:] - tax[:-1]))


    def get_forecast(self, n):
        """
        Forecast n periods into the future using current state.

        Parameters
        ----------
        n : int
            Number of periods to forecast.

        Returns
        -------
        timestamp : ndarray
            Extrapolated timestamps of forecasted periods.
        value : ndarray
            Forecasted values.

        """

        # initialise empty
        timestamp = np.zeros(n)*np.nan
        value     = np.zeros(n)*np.nan

        if self.initialised:
            step = self.step_length()
            for t in range(n):
                timestamp[t] = self.model['timestamp'][-1] + (t+1)*step
            value[:] = self.forecaster.get_forecasts(n)

        return timestamp, value


    @property
    def mean_absolute_error(self):
        if len(self.forecast['residual']) == 0:
            return np.nan
        return float(np.mean(np.abs(self.forecast['residual'])))


    @property
    def mean_absolute_percentage_error(self):
        residual = np.array(self.forecast['residual'])
        observed = np.array(self.model['value'][len(self.model['value']) - len(residual):])

        # skip zero observations
        mask = observed != 0
        if not np.any(mask):
            return np.nan
        return float(np.mean(np.abs(residual[mask] / observed[mask])) * 100)
