"""B2 API errors and classification."""
from .api_errors import B2APIError, ErrorClassifier, ErrorKind

__all__ = [
    'B2APIError',
    'ErrorClassifier',
    'ErrorKind',
]
