# packages
import logging
import numpy as np

logger = logging.getLogger(__name__)


def moving_average(sample, period):
    """
    Centered moving average of sample with a running sum.

    Parameters
    ----------
    sample : array_like
        Observed values, one per consecutive time period.
    period : int
        Number of values in each averaging window.

    Returns
    -------
    ma : MaskedArray
        Moving averages, same length as sample. Positions outside the band
        [period//2, len(sample) - period//2 - 1] are masked.

    """

    sample = np.asarray(sample, dtype=float)
    n_samples = len(sample)

    if period < 1:
        raise ValueError('Moving average period must be positive, but was {}.'.format(period))
    if n_samples < period:
        raise ValueError('Sample of length {} is shorter than period {}.'.format(n_samples, period))

    # everything undefined until a window is placed on it
    ma = np.ma.masked_all(n_samples, dtype=float)
    half_period = period // 2

    # sum of the first window
    moving_sum = np.sum(sample[:period])

    for i in range(half_period, n_samples - half_period):
        ma[i] = moving_sum / period

        # slide window one step
        if i - half_period + period < n_samples:
            moving_sum = moving_sum - sample[i - half_period] + sample[i - half_period + period]

    return ma


def observed_seasonal_coefficients(sample, moving_averages, cycle_length):
    """
    Ratio between each observation and its moving average.
    Masked moving averages give masked coefficients.

    Parameters
    ----------
    sample : array_like
        Observed values.
    moving_averages : MaskedArray
        Output of moving_average() for the same sample.
    cycle_length : int
        Seasonal cycle length. Not used in the ratio.

    Returns
    -------
    osc : MaskedArray
        Observed seasonal coefficients.

    """

    return np.ma.asarray(sample, dtype=float) / np.ma.asarray(moving_averages)


def average_seasonal_coefficients(observed, cycle_length):
    """
    Average the defined observed coefficients of each phase in the cycle.

    Parameters
    ----------
    observed : MaskedArray
        Observed seasonal coefficients.
    cycle_length : int
        Number of phases in one seasonal cycle.

    Returns
    -------
    asc : ndarray
        One average coefficient per phase.

    """

    observed = np.ma.asarray(observed)
    asc = np.zeros(cycle_length)

    for t in range(cycle_length):
        # every value in phase t
        phase = observed[t::cycle_length]

        if phase.count() == 0:
            raise ValueError('No defined seasonal coefficient for phase {} of {}.'.format(t, cycle_length))
        asc[t] = phase.mean()

    return asc


def normalize(coefficients):
    """Return coefficients scaled so that their sum equals their length."""

    coefficients = np.asarray(coefficients, dtype=float)
    return coefficients * len(coefficients) / np.sum(coefficients)


def trend_parameters(sample, seasonal_coefficients):
    """
    Regress the deseasonalised sample on time.

    The denominator sums (i + mean_t)^2, not (i - mean_t)^2.

    Parameters
    ----------
    sample : array_like
        Observed values.
    seasonal_coefficients : array_like
        One coefficient per phase, phase 0 aligned with sample[0].

    Returns
    -------
    a : float
        Trend level.
    b : float
        Trend slope.

    """

    sample = np.asarray(sample, dtype=float)
    seasonal_coefficients = np.asarray(seasonal_coefficients, dtype=float)

    # deseasonalise
    tax = np.arange(len(sample))
    deseasonalised = sample / seasonal_coefficients[tax % len(seasonal_coefficients)]

    # centered time and mean value
    mean_t = (1 - len(sample)) / 2
    mean_x = np.mean(deseasonalised)

    numerator   = np.sum((tax - mean_t) * (deseasonalised - mean_x))
    denominator = np.sum(np.square(tax + mean_t))

    b = numerator / denominator
    a = mean_x - b*mean_t

    return float(a), float(b)


def bootstrap(sample, cycle_length):
    """
    Estimate initial trend and seasonal parameters from a historical sample.

    Parameters
    ----------
    sample : array_like
        Observed values, one per consecutive time period, sample[0] in phase 0.
    cycle_length : int
        Number of phases in one seasonal cycle.

    Returns
    -------
    a : float
        Trend level.
    b : float
        Trend slope.
    c : ndarray
        Normalised seasonal coefficients.

    """

    sample = np.asarray(sample, dtype=float)
    if len(sample) < 2*cycle_length:
        logger.warning('Bootstrapping from %d samples, fewer than two cycles of %d.', len(sample), cycle_length)

    # seasonal coefficients
    ma  = moving_average(sample, cycle_length)
    osc = observed_seasonal_coefficients(sample, ma, cycle_length)
    c   = normalize(average_seasonal_coefficients(osc, cycle_length))

    # trend
    a, b = trend_parameters(sample, c)

    logger.debug('Bootstrapped a=%.4f, b=%.4f, c=%s from %d samples.', a, b, np.round(c, 6).tolist(), len(sample))

    return a, b, c
