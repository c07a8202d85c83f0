"""Live earthquake feed: normalization, filtering and summary statistics."""

__version__ = "0.1.0"
