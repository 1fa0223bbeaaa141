"""Byte string utilities: lossy UTF-8 decoding and Two-Way substring search."""

__version__ = "0.1.0"
__all__ = ["prefilter", "shift", "suffix", "twoway", "utf8"]