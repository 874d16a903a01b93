"""Todo and user account REST API."""

__version__ = "1.0.0"
