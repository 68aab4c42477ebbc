from starsim.frontends.matplotlib.matplotlib_frontend import Frontend, marker_sizes
