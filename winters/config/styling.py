
# plot colours
OBSERVED = '#3C6F8A'
FORECAST = '#FD7E54'
TREND    = '#616C6E'
NOW      = '#232D33'

# debug plot panels, top to bottom
panels = [
    OBSERVED,
    TREND,
    TREND,
    FORECAST,
]

# default linewidth
lw = 2
