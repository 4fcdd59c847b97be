# project
from winters.director import Director


if __name__ == '__main__':

    # initialise Director instance from command line arguments
    d = Director()

    # iterate historic observations
    d.run_history()

    # stream realtime observations
    d.run_stream(n_reconnects=5)
