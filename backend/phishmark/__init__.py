"""phishmark — unique, reproducible abstract images from UUIDs."""

__version__ = "0.1.0"
