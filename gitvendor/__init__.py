"""Vendor files from remote git repositories: URL parsing, sync, update checks and output records."""

__version__ = "0.1.0"