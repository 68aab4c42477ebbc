from starsim.backends.cpu.brute_force import BruteForceUpdater
