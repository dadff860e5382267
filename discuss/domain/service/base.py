"""Marker base for domain services."""


class Service:
    """A domain service.

    Services check preconditions on entities, run the matching repository
    statements in one transaction and hand side effects to the dispatcher.
    """
