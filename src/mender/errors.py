# src/mender/errors.py
"""Exceptions raised by the repair loop."""

from typing import Any, Dict, Optional


class MenderError(Exception):
    """Base exception for mender operations."""

    def __init__(self, message: str, error_details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class SpawnFailure(MenderError):
    """Raised when the target program's interpreter cannot be launched."""


class MalformedPatch(MenderError):
    """Raised when an LLM response is not a valid patch document."""


class PatchRequestError(MenderError):
    """Raised when the patch request to the LLM fails in transport."""


class ConfigError(MenderError):
    """Raised when configuration or credentials are missing or invalid."""
