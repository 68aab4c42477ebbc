from starsim.backends.backend import Backend
