from starsim.frontends.frontend import Frontend
