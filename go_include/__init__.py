"""Embed files into generated Go source as string or base64 constants."""

__version__ = "0.1.0"
