"""Kalman, ensemble and particle filters, stochastic models, timers and a simulated order book."""

__version__ = "0.1.0"