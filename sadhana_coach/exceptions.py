"""
Custom exceptions for Sadhana Coach.

Provides specific exception types for better error handling and logging.
"""


class SadhanaError(Exception):
    """Base exception for all Sadhana Coach errors."""
    pass


class ValidationError(SadhanaError):
    """Input validation failed."""
    pass


class IncompleteAnswerError(ValidationError):
    """Tried to advance the dosha assessment without answering the current question."""
    pass


class UnknownPoseError(SadhanaError):
    """Requested asana does not exist in the catalog."""
    pass


class AnalysisError(SadhanaError):
    """Pose analysis failed."""
    pass


class ConfigurationError(SadhanaError):
    """Application configuration error."""
    pass
