"""Console task dashboard backed by a REST record store."""

__version__ = "0.1.0"
