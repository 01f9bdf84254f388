"""
Core infrastructure for the admin panel: database session handling,
logging, exceptions, error handlers, pagination and shared constants.
"""
