"""Upload a Stremio addon configuration file and sync it to a Stremio account."""

__version__ = "0.1.0"
