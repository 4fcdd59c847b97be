# packages
import sys
import json
import logging
import numpy  as np
import pandas as pd


def setup_logging(level=logging.INFO):
    """
    Send log records to stdout with a shared format.

    Parameters
    ----------
    level : int
        Root logger level.

    """

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # avoid stacking handlers on repeated calls
    for handler in root_logger.handlers:
        if getattr(handler, 'name', None) == 'winters':
            root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name('winters')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root_logger.addHandler(handler)


def convert_timestamp(ts):
    """
    Convert a timestamp to Pandas and unixtime format.

    Parameters
    ----------
    ts : str or datetime
        Timestamp in any format understood by pandas.

    Returns
    -------
    timestamp : datetime
        Pandas Timestamp object format.
    unixtime : int
        Integer number of seconds since 1 January 1970.

    """

    timestamp = pd.to_datetime(ts)
    unixtime  = int(timestamp.value // 10**9)

    return timestamp, unixtime


def ux2tx(ux):
    """
    Convert unixtime to datetime format.

    Parameters
    ----------
    ux : int or array_like
        Time in number of seconds since 01-01-1970.

    Returns
    -------
    dt : datetime
        Time in Pandas datetime format.

    """

    return pd.to_datetime(ux, unit='s')


def print_error(text, terminate=True):
    """
    Print an error message and terminate as desired.

    Parameters
    ----------
    text : str
        Error message.
    terminate : bool
        Terminate execution if True.

    """

    print('ERROR: {}'.format(text))
    if terminate:
        sys.exit(1)


def loop_progress(i_track, i, n_max, n_steps, name=None):
    """
    Print loop progress to console.

    Parameters
    ----------
    i_track : int
        Number of progress steps printed so far.
    i : int
        Current index in loop.
    n_max : int
        Loop length.
    n_steps : int
        Number of steps in the progress bar.
    name : str
        Title of progress print.

    Returns
    -------
    i_track : int
        Updated number of printed steps.

    """

    if i_track == 0:
        print('    |')
        print('    └── {}:'.format('Progress' if name is None else name))
        i_track = 1

    # steps reached at index i
    reached = int((i + 1) * n_steps / max(n_max, 1))
    if reached > i_track:
        i_track = reached
        print('        ├── [ ' + i_track*'#' + (n_steps - i_track)*'-' + ' ]')

    return i_track


def import_history(path):
    """
    Import csv file of observations.

    Parameters
    ----------
    path : str
        Path to file with column 'value' and, optionally, 'timestamp'.

    Returns
    -------
    unixtime : ndarray or None
        Observation unixtimes, None if the file has no timestamps.
    values : ndarray
        Observed values in file order.

    """

    df = pd.read_csv(path)

    # verify columns existance
    if 'value' not in df.columns:
        print_error('Imported file should have column \'value\'.')

    values = df['value'].to_numpy(dtype=float)
    if np.isnan(values).any():
        print_error('Imported file has missing values in column \'value\'.')

    unixtime = None
    if 'timestamp' in df.columns:
        tx = pd.to_datetime(df['timestamp'], utc=True)
        unixtime = ((tx - pd.Timestamp(0, tz='UTC')) // pd.Timedelta(seconds=1)).to_numpy()

    return unixtime, values


def parse_event(data):
    """
    Extract observation from a stream event payload.

    Parameters
    ----------
    data : str
        Event json, {"value": float, "timestamp": str (optional)}.

    Returns
    -------
    value : float
        Observed value.
    unixtime : int or None
        Observation unixtime, None if event has no timestamp.

    """

    event = json.loads(data)

    unixtime = None
    if event.get('timestamp') is not None:
        _, unixtime = convert_timestamp(event['timestamp'])

    return float(event['value']), unixtime
