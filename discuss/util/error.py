"""Errors raised while wiring the application together."""


class UtilError(Exception):
    """Base utility error."""


class DependencyInjectionError(UtilError):
    """The container cannot be assembled.

    Raised for unknown components, a missing production or mock variant,
    or an unmocked component whose dependencies stay mocked.
    """
