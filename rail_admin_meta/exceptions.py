"""
Custom exceptions for model decorators.

This module defines the exception types raised while deriving field
metadata from a model's schema.
"""

from typing import Optional


class ModelDecoratorError(Exception):
    """Base exception for model decorator errors."""

    def __init__(self, message: str, model_name: Optional[str] = None):
        self.model_name = model_name
        super().__init__(message)


class SchemaUnavailableError(ModelDecoratorError):
    """Raised when the database backing a model cannot be reached."""

    def __init__(
        self,
        message: str,
        model_name: Optional[str] = None,
        database: Optional[str] = None,
    ):
        self.database = database
        super().__init__(message, model_name)


__all__ = ["ModelDecoratorError", "SchemaUnavailableError"]
