"""
Application exceptions raised below the route layer.
Routes translate them into HTTP responses.
"""
from typing import Optional


class PortfolioError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(PortfolioError):
    """
    Raised when a referenced row does not exist.

    Attributes:
        resource: Human-readable resource name (e.g. "Album")
        resource_id: Identifier that was looked up
    """

    def __init__(self, resource: str = "Resource", resource_id: Optional[int] = None):
        self.resource = resource
        self.resource_id = resource_id
        if resource_id is None:
            message = f"{resource} not found"
        else:
            message = f"{resource} {resource_id} not found"
        super().__init__(message)
