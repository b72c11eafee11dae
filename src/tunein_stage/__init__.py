"""TUNE-IN Stage: clubs, posts, votes and feeds."""

__version__ = "0.1.0"
