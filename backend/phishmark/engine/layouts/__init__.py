"""Curve layouts: grid, uniform random, Poisson-disc, evenly spaced streamlines."""
