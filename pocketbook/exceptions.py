"""Domain-specific exceptions for the pocketbook ledger."""

class ValidationError(ValueError):
    """Raised when user input does not meet validation requirements."""


class RecordNotFoundError(LookupError):
    """Raised when an expense or goal addressed by a request cannot be located."""


class PersistenceError(IOError):
    """Raised when the storage layer cannot read or write a value."""
