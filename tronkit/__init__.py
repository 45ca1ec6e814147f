"""Tron addresses, ABI encoding, settings files and argument helpers for network operations."""

__version__ = "0.1.0"