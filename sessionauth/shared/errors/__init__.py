from .base import (
    AppError,
    DomainError,
    DuplicateKeyError,
    InfrastructureError,
    StoreUnavailableError,
    ValidationError,
    ValidationFailedError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "DuplicateKeyError",
    "InfrastructureError",
    "StoreUnavailableError",
    "ValidationError",
    "ValidationFailedError",
    "handle_app_error",
    "register_error_handler",
]
