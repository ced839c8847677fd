"""
Translation Service Exceptions

Custom exceptions for remote translation errors.
"""


class TranslationServiceError(Exception):
    """Base exception for translation service errors"""
    pass


class TranslationCancelledError(TranslationServiceError):
    """Raised when an in-flight request was cancelled on purpose"""
    pass


class MalformedResponseError(TranslationServiceError):
    """Raised when a structured response does not match its schema"""
    pass


class ServiceConfigurationError(TranslationServiceError):
    """Raised when the API key is missing"""
    pass


class InvalidLanguageError(ValueError):
    """Raised when a language code is not in the registry"""
    pass
