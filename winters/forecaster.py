# packages
import logging
import numpy as np

# project
from winters.bootstrap import bootstrap

logger = logging.getLogger(__name__)


class WintersForecaster():
    """
    Winter's method for seasonal sales forecasting.
    Observations are modelled as x_t = (a + b*t) * c_t + noise, where a and b
    are linear trend parameters and c_t is the seasonal coefficient of the
    phase of t. Every new observation updates a, b and the coefficient of its
    phase by exponential smoothing.

    Reference: H. Meyr, Forecast Methods, in Supply Chain Management and
    Advanced Planning, H. Stadtler and C. Kilger (eds.), Springer (2008).
    """

    def __init__(self, a, b, c, sca, scb, scc):
        """
        Parameters
        ----------
        a : float
            Initial trend level.
        b : float
            Initial trend slope.
        c : array_like
            Initial seasonal coefficients, one per phase. The length sets the
            cycle length. The forecaster keeps its own copy.
        sca : float
            Smoothing constant for a in ]0, 1[, typically [0.002, 0.51].
        scb : float
            Smoothing constant for b in ]0, 1[, typically [0.005, 0.176].
        scc : float
            Smoothing constant for c in ]0, 1[, typically [0.05, 0.5].

        """

        self.__initialise_parameters(a, b, c, sca, scb, scc)


    @classmethod
    def from_history(cls, sample, cycle_length, sca, scb, scc):
        """
        Create a forecaster with parameters bootstrapped from history.

        Parameters
        ----------
        sample : array_like
            Observed values, one per consecutive time period. The next
            observation is expected in phase 0, so use whole cycles.
        cycle_length : int
            Number of phases in one seasonal cycle.
        sca, scb, scc : float
            Smoothing constants, see __init__.

        """

        a, b, c = bootstrap(sample, cycle_length)
        return cls(a, b, c, sca, scb, scc)


    def __initialise_parameters(self, a, b, c, sca, scb, scc):
        """Validate smoothing constants in order a, b, c and set the state."""

        self.__check_smoothing_constant('sca', sca)
        self.__check_smoothing_constant('scb', scb)
        self.__check_smoothing_constant('scc', scc)
        self._smoothing = (float(sca), float(scb), float(scc))

        # private copy, never the caller's array
        coefficients = np.array(c, dtype=float).ravel()
        if len(coefficients) == 0:
            raise ValueError('At least one seasonal coefficient is required.')

        self._a = float(a)
        self._b = float(b)
        self._c = coefficients
        self._position = 0


    @staticmethod
    def __check_smoothing_constant(name, value):
        # also rejects nan
        if not (0 < value < 1):
            raise ValueError('Smoothing constant {} should be a value between 0 and 1, but was {}.'.format(name, value))


    @property
    def trend_level(self):
        return self._a

    @property
    def trend_slope(self):
        return self._b

    @property
    def seasonal_coefficients(self):
        return self._c.copy()

    @property
    def cycle_position(self):
        return self._position

    @property
    def cycle_length(self):
        return len(self._c)

    @property
    def smoothing_constants(self):
        return self._smoothing


    def add_observation(self, x):
        """
        Update trend parameters and the current seasonal coefficient with the
        next observed value, then advance the cycle position.

        Parameters
        ----------
        x : float
            Observed value for the next time period.

        """

        sca, scb, scc = self._smoothing
        c = self._c[self._position]

        # level (a), slope (b) and seasonal coefficient (c) of current phase
        a_new = sca*x/c + (1 - sca)*(self._a + self._b)
        b_new = scb*(a_new - self._a) + (1 - scb)*self._b
        c_new = scc*x/a_new + (1 - scc)*c

        self._a = a_new
        self._b = b_new
        self._c[self._position] = c_new
        self._position = (self._position + 1) % len(self._c)


    def get_forecast(self, horizon):
        """
        Forecast value horizon periods ahead, where 1 is the next period.
        A horizon of 0 is accepted and uses the previous phase.

        Parameters
        ----------
        horizon : int
            Number of periods ahead.

        Returns
        -------
        forecast : float
            Forecasted value.

        """

        if horizon < 0:
            raise ValueError('Forecast horizon must be non-negative, but was {}.'.format(horizon))

        return (self._a + self._b*horizon) * self._c[(self._position + horizon - 1) % len(self._c)]


    def get_next_forecast(self):
        """Forecast value for the next period."""

        return self.get_forecast(1)


    def get_forecasts(self, n):
        """Forecasts for the next n periods as an array."""

        return np.array([self.get_forecast(t + 1) for t in range(n)])


    def __repr__(self):
        return '{}(a={:.4f}, b={:.4f}, cycle_length={}, cycle_position={})'.format(
            self.__class__.__name__, self._a, self._b, len(self._c), self._position)
