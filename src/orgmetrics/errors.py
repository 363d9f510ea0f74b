"""Custom exception types for the GitHub org metrics generator."""


class MetricsGeneratorError(Exception):
    """Base exception for all recoverable metrics generator errors."""


class ConfigurationError(MetricsGeneratorError):
    """Raised when runtime configuration values are missing or invalid."""


class AuthenticationError(MetricsGeneratorError):
    """Raised when the GitHub token is unavailable."""


class ApiError(MetricsGeneratorError):
    """Raised when a GitHub API request or document fetch fails."""


class DataValidationError(MetricsGeneratorError):
    """Raised when API payloads do not carry the fields metrics are computed from."""
