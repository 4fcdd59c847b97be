
# Winter's method
sca = 0.8       # trend level smoothing constant
scb = 0.8       # trend slope smoothing constant
scc = 0.3       # seasonal coefficient smoothing constant

# data related
cycle_length  = 7      # number of periods in a seasonal cycle
n_cycles_init = 3      # number of cycles used in bootstrap

# forecast
n_forecast = cycle_length*2     # number of periods to forecast
