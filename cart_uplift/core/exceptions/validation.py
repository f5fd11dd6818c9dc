"""
Payload validation errors
"""

from typing import Any, List, Optional

from .base import CartUpliftException


class ValidationError(CartUpliftException):
    code = "VALIDATION_ERROR"


class DataValidationError(ValidationError):
    """An inbound payload that does not match its model"""

    code = "DATA_VALIDATION_ERROR"

    def __init__(self, message: str, validation_errors: Optional[List[Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.validation_errors = list(validation_errors or [])
        self.details["validation_errors"] = self.validation_errors
