"""
Application package initializer.

The API is organised in layers: ``api`` holds the HTTP routes,
``services`` the domain service, ``repositories`` the SQLite data
access and ``models``/``schemas`` the storage entity and the wire
format respectively.  ``core`` carries configuration, logging,
database plumbing and the exception hierarchy.
"""

from .main import app, create_app  # noqa: F401
