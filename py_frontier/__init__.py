"""Frontier logistics planning for computer-controlled empires."""

__version__ = "0.1.0"
