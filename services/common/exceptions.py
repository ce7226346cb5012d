"""
Custom exceptions for the database setup service.
"""

class SetupError(Exception):
    """Base exception for all setup errors."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.details = details or {}

class ConfigurationError(SetupError):
    """Raised when there is a configuration issue."""
    pass

class ValidationError(SetupError):
    """Raised when a setup request fails validation."""
    pass
