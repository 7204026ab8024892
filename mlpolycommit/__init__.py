"""Multilinear polynomials, Pedersen and Hyrax polynomial commitments over ristretto255."""

__version__ = "0.1.0"