"""
Scylla exceptions
"""


class ScyllaError(Exception):
    """Base exception for all Scylla errors"""

    pass


class SourceError(ScyllaError):
    """Raised when the agent store cannot be read"""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class TerminalError(ScyllaError):
    """Raised when the terminal cannot be acquired or restored"""

    pass


class ConfigError(ScyllaError):
    """Raised when the configuration file is malformed"""

    pass
