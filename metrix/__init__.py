"""Record metrics and their values through a small WSGI web application."""

__version__ = "0.1.0"