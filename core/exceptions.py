"""Custom exceptions for the application."""


class JobTrackerError(Exception):
    """Base exception for job tracker errors."""
    pass


class ValidationError(JobTrackerError):
    """Required field empty or malformed payload."""
    pass


class NotFoundError(JobTrackerError):
    """Job with the given id does not exist."""
    pass


class StoreError(JobTrackerError):
    """Error reading from or writing to the job store."""
    pass


class ConfigurationError(JobTrackerError):
    """Error in application configuration."""
    pass
