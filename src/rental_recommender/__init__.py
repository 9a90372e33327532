"""Personalized rental property recommendation service."""

__version__ = "1.0.0"
