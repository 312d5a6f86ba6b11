"""Canonical URL normalization and collision-free short key generation."""

__version__ = '0.1.0'
