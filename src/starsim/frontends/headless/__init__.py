from starsim.frontends.headless.headless_frontend import Frontend
