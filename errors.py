"""
errors: failures that abort an integration run.

Every one of these is fatal; main() turns them into a non-zero exit status.
"""


class IntegrationError(RuntimeError):
    pass


class ConfigError(IntegrationError):
    """The configuration file could not be opened or decoded."""


class NetworkError(IntegrationError):
    """An HTTP request to a source or target failed."""


class FileIOError(IntegrationError):
    """A local file source or target could not be read or written."""


class NotificationError(IntegrationError):
    """The completion email could not be sent."""
