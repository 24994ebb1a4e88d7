"""
Typed application errors.

Every error carries the HTTP status it maps to and an ``AppStatusCode`` so
the exception handlers can render a ``JsonOutResult`` failure without
inspecting messages. CRUD and service functions raise these; routers never
build error responses by hand.
"""
from typing import Any, Optional

from shared.utils.app_status_code import AppStatusCode


class AppError(Exception):
    http_status: int = 500
    status_code: str = AppStatusCode.OPERATION_FAILED

    def __init__(self, message: str, data: Optional[Any] = None, status_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.data = data
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    http_status = 400
    status_code = AppStatusCode.REQUIRED_VALIDATION_ERROR


class AuthenticationError(AppError):
    http_status = 401
    status_code = AppStatusCode.AUTHENTICATION_TOKEN_INVALID


class AuthorizationError(AppError):
    http_status = 403
    status_code = AppStatusCode.UNAUTHORIZED_ACTION


class NotFoundError(AppError):
    http_status = 404
    status_code = AppStatusCode.RECORD_NOT_FOUND


class ConflictError(AppError):
    http_status = 409
    status_code = AppStatusCode.DUPLICATE_ADD_ERROR


class ImmutableRecordError(ConflictError):
    status_code = AppStatusCode.RECORD_IMMUTABLE

    def __init__(self, entity_type: str, entity_id: Any, reason: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(f"{entity_type} {entity_id} is immutable: {reason}")


class StorageError(AppError):
    http_status = 500
    status_code = AppStatusCode.STORAGE_ERROR

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.details = details
