class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MalformedInputError(DomainError):
    """Raised when a punch or shift cannot be interpreted (bad time-of-day, missing timestamp)."""


class DataFetchError(DomainError):
    """Raised when punches or reference data cannot be loaded. Fatal for a run."""


class PersistenceError(DomainError):
    """Raised when the result of a single punch cannot be written back."""
