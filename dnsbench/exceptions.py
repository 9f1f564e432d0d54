"""Custom exceptions for DNS benchmarking."""


class DNSBenchError(Exception):
    """Base class for all dnsbench errors."""
    pass


class InputValidationError(DNSBenchError):
    """Raised when a server or domain list is missing, empty, or malformed."""
    pass


class ConfigurationError(DNSBenchError):
    """Raised when run configuration values are out of range."""
    pass
