"""HTTP API for the TUNE-IN service."""
