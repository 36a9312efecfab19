"""Wavefetch — bounded-concurrency fetch engine for paginated HTTP read APIs."""

__version__ = "0.1.0"
