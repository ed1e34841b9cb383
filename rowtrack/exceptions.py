from fastapi import HTTPException, status
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class ErrorCode:
    # Authentication (1000-1999)
    INVALID_CREDENTIALS = "AUTH_1001"

    # Resources (2000-2999)
    NOT_FOUND = "RES_2001"
    ALREADY_EXISTS = "RES_2002"
    VALIDATION_ERROR = "RES_2003"

    # System (9000-9999)
    DATABASE_ERROR = "SYS_9003"


class AppException(HTTPException):
    def __init__(
            self,
            status_code: int,
            error_code: str,
            message: str,
            details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        content = {
            "success": False,
            "error": {
                "code": error_code,
                "message": message,
                "details": self.details
            }
        }
        super().__init__(status_code=status_code, detail=content)

        logger.error(f"AppException: {error_code} - {message} | Details: {details}")


class StoreError(Exception):
    """Raised by a repository when the backing store rejects or fails a call."""


class LoginRequired(Exception):
    """Raised by view gating when the request must go back to the login page."""

    def __init__(self, clear_session: bool = False):
        self.clear_session = clear_session
        super().__init__("Login required")


def validation_error(message: str, **details) -> AppException:
    return AppException(
        status_code=status.HTTP_400_BAD_REQUEST,
        error_code=ErrorCode.VALIDATION_ERROR,
        message=message,
        details=details or None
    )


def not_found(resource: str, resource_id: Any) -> AppException:
    return AppException(
        status_code=status.HTTP_404_NOT_FOUND,
        error_code=ErrorCode.NOT_FOUND,
        message=f"{resource} not found",
        details={"id": resource_id}
    )


def already_exists(message: str, **details) -> AppException:
    return AppException(
        status_code=status.HTTP_409_CONFLICT,
        error_code=ErrorCode.ALREADY_EXISTS,
        message=message,
        details=details or None
    )


def invalid_credentials() -> AppException:
    # Same error for unknown user and wrong password
    return AppException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        error_code=ErrorCode.INVALID_CREDENTIALS,
        message="Invalid credentials"
    )


def store_unavailable(error: Exception) -> AppException:
    return AppException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        error_code=ErrorCode.DATABASE_ERROR,
        message="The data store could not complete the request",
        details={"reason": str(error)}
    )
