"""ifsctl — iterated function system fractal generator and rule editor."""

__version__ = "0.1.0"
