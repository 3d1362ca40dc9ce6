"""
Integrations for external services and APIs.

This package contains the GitHub REST integration used to read the
reviewer configuration, look up team membership and request reviews.
"""
