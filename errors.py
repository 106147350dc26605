# errors.py
from fastapi import status


class MarketplaceError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Request rejected"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(MarketplaceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid input"


class DuplicateIdentity(MarketplaceError):
    status_code = status.HTTP_409_CONFLICT
    message = "Username already taken"


class AuthenticationFailed(MarketplaceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid username or password"


class Unauthorized(MarketplaceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class NotFound(MarketplaceError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"
