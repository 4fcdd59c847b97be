# packages
import os
import time
import logging
import argparse
import requests
import sseclient
import numpy             as np
import matplotlib.pyplot as plt

# project
import winters.config.styling    as stl
import winters.config.parameters as prm
import winters.helpers           as hlp
from   winters.series            import Series


class Director():
    """
    Feeds observations of one series from a local csv file and/or a
    server-sent event stream to a Series object, and reports the forecast.
    """

    def __init__(self, argv=None):
        # parse system arguments
        self.__parse_sysargs(argv)

        # configure logging
        hlp.setup_logging(logging.DEBUG if self.args['verbose'] else logging.WARNING)

        # spawn series
        name = os.path.basename(self.args['path']) if self.args['path'] else 'stream'
        self.series = Series(
            name,
            cycle_length  = self.args['cycle_length'],
            n_cycles_init = self.args['n_cycles_init'],
            sca = self.args['sca'],
            scb = self.args['scb'],
            scc = self.args['scc'],
        )

        # use local file
        self.history = None
        if self.args['path']:
            # verify valid path
            if not os.path.exists(self.args['path']):
                hlp.print_error('Path [{}] is not valid.'.format(self.args['path']))

            # import file as observation history
            self.history = hlp.import_history(self.args['path'])

        # some cout
        self.print_series_information()


    def __parse_sysargs(self, argv):
        """
        Parse for command line arguments.

        Parameters
        ----------
        argv : list
            Arguments to parse. Defaults to sys.argv[1:] if None.

        """

        # create parser object
        parser = argparse.ArgumentParser(description='Winter\'s method forecast on file history and event stream.')

        # general arguments
        parser.add_argument('--path',          metavar='', help='Path to local .csv file with columns value[,timestamp].', required=False, default=None)
        parser.add_argument('--stream',        metavar='', help='Url of server-sent event stream of observations.',       required=False, default=None)
        parser.add_argument('--cycle-length',  metavar='', help='Number of periods in a seasonal cycle.',                 required=False, default=prm.cycle_length,  type=int)
        parser.add_argument('--n-cycles-init', metavar='', help='Number of cycles used in bootstrap.',                    required=False, default=prm.n_cycles_init, type=int)
        parser.add_argument('--sca',           metavar='', help='Trend level smoothing constant.',                        required=False, default=prm.sca,           type=float)
        parser.add_argument('--scb',           metavar='', help='Trend slope smoothing constant.',                        required=False, default=prm.scb,           type=float)
        parser.add_argument('--scc',           metavar='', help='Seasonal coefficient smoothing constant.',               required=False, default=prm.scc,           type=float)

        # boolean flags
        parser.add_argument('--plot',       action='store_true', help='Plot the resulting forecast.')
        parser.add_argument('--plot-debug', action='store_true', help='Plot algorithm operation.')
        parser.add_argument('--verbose',    action='store_true', help='Log debug information.')

        # convert to dictionary
        self.args = vars(parser.parse_args(argv))

        # reject before any observation is buffered
        for key in ['sca', 'scb', 'scc']:
            if not 0 < self.args[key] < 1:
                hlp.print_error('Smoothing constant --{} should be in ]0, 1[, but was {}.'.format(key, self.args[key]))

        if self.args['cycle_length'] < 1:
            hlp.print_error('Cycle length must be positive, but was {}.'.format(self.args['cycle_length']))

        # every phase needs a defined moving average in the bootstrap sample
        if self.args['n_cycles_init'] < 2:
            hlp.print_error('Bootstrap needs at least 2 cycles, but --n-cycles-init was {}.'.format(self.args['n_cycles_init']))


    def run_history(self):
        """
        Iterate historic observations.

        """

        # do nothing if no file is given
        if self.history is None:
            return

        # initialise debug plot
        if self.args['plot_debug']:
            self.initialise_debug_plot()

        unixtime, values = self.history

        cc = 0
        for i, value in enumerate(values):
            cc = hlp.loop_progress(cc, i, len(values), 25, name='history')

            # serve observation to series
            timestamp = None if unixtime is None else int(unixtime[i])
            self.__new_observation(value, timestamp, cout=False)

            # plot debug
            if self.args['plot_debug']:
                self.plot_debug()

        self.print_summary()

        # initialise plot
        if self.args['plot']:
            if self.args['stream']:
                print('\nClose the blocking plot to start stream.')
            self.initialise_plot()
            self.plot_progress(blocking=True)


    def run_stream(self, n_reconnects=5):
        """
        Stream observations for series.

        Parameters
        ----------
        n_reconnects : int
            Number of retries if connection lost.

        """

        # don't run without stream
        if not self.args['stream']:
            return

        # cout
        print("Listening for events... (press CTRL-C to abort)")

        # reinitialise plot
        if self.args['plot']:
            self.initialise_plot()
            self.plot_progress(blocking=False)

        # loop until too many failed reconnects
        nth_reconnect = 0
        while nth_reconnect < n_reconnects:
            try:
                # get response, closed on leaving the block
                with requests.get(self.args['stream'], headers={'accept': 'text/event-stream'}, stream=True) as response:
                    response.raise_for_status()
                    client = sseclient.SSEClient(response)

                    # reset reconnect counter
                    nth_reconnect = 0

                    # listen for events
                    print('Connected.')
                    for event in client.events():
                        # serve observation to series
                        value, timestamp = hlp.parse_event(event.data)
                        self.__new_observation(value, timestamp)

                        # plot progress
                        if self.args['plot']:
                            self.plot_progress(blocking=False)

                # server closed stream
                return

            except requests.exceptions.HTTPError as e:
                # server refused, counts as a failed attempt
                nth_reconnect += 1
                print('Status Code: {}, reconnection attempt {}/{}'.format(e.response.status_code if e.response is not None else '?', nth_reconnect, n_reconnects))
            except requests.exceptions.ConnectionError:
                nth_reconnect += 1
                print('Connection lost, reconnection attempt {}/{}'.format(nth_reconnect, n_reconnects))
            except requests.exceptions.ChunkedEncodingError:
                nth_reconnect += 1
                print('An error occured, reconnection attempt {}/{}'.format(nth_reconnect, n_reconnects))

            # wait 1s before attempting to reconnect
            time.sleep(1)


    def __new_observation(self, value, timestamp, cout=True):
        """Pass an observation to the series and, if cout, print the next forecast."""

        self.series.new_observation(value, timestamp)
        if cout:
            if self.series.initialised:
                print('-- {:<30} {:>12.2f} next: {:>12.2f}'.format(self.series.name, value, self.series.forecaster.get_next_forecast()))
            else:
                print('-- {:<30} {:>12.2f} bootstrap: {}/{}'.format(self.series.name, value, self.series.n_samples, self.series.cycle_length*self.series.n_cycles_init))


    def print_series_information(self):
        """Print information about the followed series."""

        print('\nDirector initialised for series:')
        print('-- {:<30}'.format(self.series.name))
        print('   cycle length {}, bootstrap cycles {}, smoothing {}'.format(
            self.series.cycle_length, self.series.n_cycles_init, self.series.smoothing))
        print()


    def print_summary(self):
        """Print model state, forecast errors and the coming forecast."""

        series = self.series
        print('\nSummary for {}:'.format(series.name))

        if not series.initialised:
            print('-- not initialised, {} of {} observations needed'.format(series.n_samples, series.cycle_length*series.n_cycles_init))
            return

        print('-- {}'.format(series.forecaster))
        print('-- seasonal coefficients: {}'.format(np.round(series.forecaster.seasonal_coefficients, 4)))
        print('-- MAE:  {:.4f}'.format(series.mean_absolute_error))
        print('-- MAPE: {:.2f}%'.format(series.mean_absolute_percentage_error))

        _, fv = series.get_forecast(prm.n_forecast)
        for t, value in enumerate(fv):
            print('   t+{:<3} {:>12.2f}'.format(t+1, value))


    def timeaxis(self, tax):
        """Convert series timestamps to datetime when they are unixtimes."""

        if self.series.has_unixtime:
            return hlp.ux2tx(np.asarray(tax))
        return np.asarray(tax)


    def initialise_plot(self):
        """Create figure and axis objects for progress plot."""

        self.hfig, self.hax = plt.subplots(1, 1)


    def initialise_debug_plot(self):
        """Create figure and axis objects for debug plot."""

        self.dfig, self.dax = plt.subplots(4, 1, sharex=True)


    def plot_progress(self, blocking=False):
        """Plot data and forecast from most recent observation.

        parameters:
            blocking -- Will block execution if True. Required for interaction.
        """

        series = self.series
        self.hax.cla()

        if series.n_samples > 1:
            # get timeaxes and forecast
            tx = self.timeaxis(series.model['timestamp'])
            fx, fv = series.get_forecast(prm.n_forecast)
            fx = self.timeaxis(fx)

            self.hax.plot(tx, series.model['value'], color=stl.OBSERVED, linewidth=stl.lw, label='Observed')
            self.hax.axvline(tx[-1], color=stl.NOW, linestyle='--', label='Time Now')
            if series.initialised:
                self.hax.plot(self.timeaxis(series.forecast['timestamp']), series.forecast['value'], color=stl.FORECAST, alpha=0.5, label='One-step Forecast')
                self.hax.plot(fx, fv, color=stl.FORECAST, linestyle='--', linewidth=stl.lw, label='Forecast')
            self.hax.legend(loc='upper left')
            self.hax.set_xlabel('Time')
            self.hax.set_ylabel('Value')

        if blocking:
            plt.show()
        else:
            plt.pause(0.01)


    def plot_debug(self):
        """Plot data and model state, once per cycle."""

        series = self.series
        if not series.initialised or series.n_samples % series.cycle_length != 0:
            return

        # state is recorded from the bootstrap observation onwards
        n_state = len(series.model['level'])
        tax = self.timeaxis(series.model['timestamp'][-n_state:])
        panels = [
            (series.model['value'][-n_state:], 'Observed'),
            (series.model['level'],            'Level'),
            (series.model['slope'],            'Slope'),
            (series.model['coefficient'],      'Coefficient'),
        ]

        for ax, color, (y, label) in zip(self.dax, stl.panels, panels):
            ax.cla()
            ax.plot(tax, y, color=color, label=label)
            ax.legend(loc='upper left')
            ax.set_ylabel(label)
        self.dax[-1].set_xlabel('Time')

        plt.waitforbuttonpress()


def main(argv=None):
    d = Director(argv)

    # iterate historic observations
    d.run_history()

    # stream realtime observations
    d.run_stream(n_reconnects=5)
