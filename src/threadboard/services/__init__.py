"""Business logic services for the Threadboard application.

Each public mutation runs as one transaction and raises a
:class:`threadboard.core.errors.ThreadboardError` subtype on failure.
"""
