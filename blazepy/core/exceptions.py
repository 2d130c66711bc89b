"""
Base exceptions for blazepy.

Every failure raised by the library derives from BlazeException, so callers
can catch the whole family with a single except clause.
"""
from typing import Optional


class BlazeException(Exception):
    """Base exception for all blazepy errors."""
    
    def __init__(self, message: str, status: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            status: HTTP status code (if available)
        """
        self.status = status
        super().__init__(message)
