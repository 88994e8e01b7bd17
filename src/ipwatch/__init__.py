"""ipwatch - Log changes to this host's external IP address."""

__version__ = "0.1.0"
