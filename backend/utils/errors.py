# backend/utils/errors.py
from fastapi import status


# Base for failures that map onto a JSON {"error": message} response
class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


# Duplicate unique key; reported as a bad request like other input problems
class ConflictError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


# Missing credential is 401, a present but invalid/expired one is 403
class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
