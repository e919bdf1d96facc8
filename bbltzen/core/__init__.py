"""
Core - configuration, database session handling, logging and errors
"""
from bbltzen.core.exceptions import (
    BubbleTeaError,
    DependencyConflictError,
    DuplicateError,
    ErrorKind,
    NotFoundError,
    ValidationError,
)

__all__ = [
    'BubbleTeaError',
    'DependencyConflictError',
    'DuplicateError',
    'ErrorKind',
    'NotFoundError',
    'ValidationError',
]
