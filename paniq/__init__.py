"""Primitives for an obfuscated UDP/QUIC proxy transport: replay filters, rate limiting, padded payloads, encrypted timestamps and wire formats."""

__version__ = "0.1.0"

__all__ = ["__version__"]