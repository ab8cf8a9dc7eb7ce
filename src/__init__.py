"""sitesync - live content synchronization and optimistic mutations for the marketing site."""

__version__ = "0.1.0"
