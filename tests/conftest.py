"""
Shared fixtures: shoe store example from Meyr (2008), three weeks of daily
sales volumes and the parameters estimated from them.
"""
import matplotlib
import pytest
import numpy as np

matplotlib.use('Agg')


@pytest.fixture
def sales_volumes():
    return np.array([
        4419.,     3821., 3754., 3910., 4363., 4518., 27.3333,
        6190.4761, 5755., 5352., 5540., 5650., 6143., 30.4666,
        5158.,     4779., 5464., 5828., 6714., 7872., 42.,
    ])


@pytest.fixture
def shoe_store_parameters():
    """a, b, c for Monday to Sunday."""
    return 5849.0, 123.3, [1.245693, 1.115265, 1.088853, 1.135378, 1.178552, 1.229739, 0.006520]


@pytest.fixture
def fourth_week():
    """Observed sales of week 4 and the next forecast after each of them."""
    observations = [8152., 7986., 8891., 11107., 12478., 14960., 81.]
    next_forecasts = [7717., 8445., 10206., 13008., 14515., 88.]
    return observations, next_forecasts
