"""SIP, Lumpsum and SWP projection engine with a small JSON API."""

__version__ = "0.1.0"
