from fastapi import HTTPException, status
from crm.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details


class ValidationError(AppException):
    """Malformed or missing input, or a request the quotation lifecycle forbids."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict | None = None,
    ):
        super().__init__(status.HTTP_400_BAD_REQUEST, message, error_code, details)


class AuthenticationError(AppException):
    """Missing, malformed, expired or revoked credential."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ):
        super().__init__(status.HTTP_401_UNAUTHORIZED, message, error_code)
        self.headers = {"WWW-Authenticate": "Bearer"}


class AuthorizationError(AppException):
    """Valid credential, insufficient role or ownership."""

    def __init__(
        self,
        message: str = "Permission denied",
        error_code: ErrorCode = ErrorCode.PERMISSION_DENIED,
    ):
        super().__init__(status.HTTP_403_FORBIDDEN, message, error_code)


class NotFoundError(AppException):
    def __init__(
        self,
        message: str = "Resource not found",
        error_code: ErrorCode = ErrorCode.NOT_FOUND,
    ):
        super().__init__(status.HTTP_404_NOT_FOUND, message, error_code)


class StorageError(AppException):
    """The persistence layer failed. Never retried here."""

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            message,
            ErrorCode.STORAGE_ERROR,
        )
