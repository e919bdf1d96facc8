"""
Error taxonomy for the pricing core

Every error carries an ErrorKind so callers can branch on ``err.kind``
without matching on exception classes.

Author: BBltZen
Date: 2026-10-19
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    DEPENDENCY_CONFLICT = "dependency_conflict"
    DUPLICATE = "duplicate"


class BubbleTeaError(Exception):
    """Base class for all errors raised by repositories and services"""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str, kind: Optional[ErrorKind] = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}


class NotFoundError(BubbleTeaError):
    """Referenced product, tax rate, order or order item does not exist"""

    kind = ErrorKind.NOT_FOUND


class ValidationError(BubbleTeaError):
    """Malformed input, rejected before any computation"""

    kind = ErrorKind.VALIDATION


class DependencyConflictError(BubbleTeaError):
    """Entity is still referenced by other rows and cannot be deleted"""

    kind = ErrorKind.DEPENDENCY_CONFLICT


class DuplicateError(BubbleTeaError):
    """An equivalent entity already exists"""

    kind = ErrorKind.DUPLICATE
