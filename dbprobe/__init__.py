"""Connectivity diagnostics for relational databases."""

__version__ = "0.1.0"
