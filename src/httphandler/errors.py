"""Exceptions raised by httphandler itself."""


class ConfigurationError(Exception):
    """
    A component was invoked with a required presenter left unconfigured.

    This is a programming error in how the handler tree was assembled, not
    a per-request failure, so it is raised rather than turned into a
    response.
    """
