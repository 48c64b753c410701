"""Crop growth processes, soil water balance, N, P, K dynamics and parameter file readers."""

__version__ = "0.1.0"