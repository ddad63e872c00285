"""Deal-economics engine for real-estate listings."""

__version__ = "0.1.0"
