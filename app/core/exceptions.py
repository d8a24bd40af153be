"""
Simple exception classes for the application.
"""

from fastapi import HTTPException, status


class BadRequestError(HTTPException):
    """Raised when request input is missing or malformed."""

    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


class NotFoundError(HTTPException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id):
        self.resource_id = resource_id
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource_type} not found"
        )


class UpstreamServiceError(HTTPException):
    """Raised when a call to an external service fails."""

    def __init__(self, message: str, upstream_message: str):
        self.upstream_message = upstream_message
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message
        )
