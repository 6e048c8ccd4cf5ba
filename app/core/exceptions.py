class BaseServiceError(Exception):
    """Base exception for all service-related errors."""
    pass

class ValidationError(BaseServiceError):
    """Raised when required input is missing or malformed."""
    pass

class UnavailableError(BaseServiceError):
    """Raised when an external collaborator (geocoder, blob store, database) cannot be reached."""
    pass

class NotFoundError(BaseServiceError):
    """Raised when a requested document does not exist."""
    pass

class OutOfStockError(BaseServiceError):
    """Raised when a product has no remaining stock to add to a cart."""
    pass
