"""Admin panel backend for the couples question game."""

__version__ = "1.0.0"
