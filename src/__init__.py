"""
EstateHub - Core Package

This package contains the property listing backend: persistence, authentication,
the REST API, and the client used by the web frontend.
"""

__version__ = "0.1.0"
