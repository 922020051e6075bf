"""
Service layer.

Services sit between the HTTP routes and the repositories and own the
transaction boundary for writes.
"""
