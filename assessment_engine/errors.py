# Custom Error Classes

class CatalogValidationError(ValueError):
    """Raised for catalog or quiz definition problems not covered by Pydantic."""
    pass


class InvalidSubmissionError(ValueError):
    """Custom exception for invalid submission data (e.g., non-integer answer indices)."""
    pass
