"""Base exception for funcsift."""

from typing import Any, Dict, Optional


class FuncsiftError(Exception):
    """Base exception for all funcsift errors.

    ``details`` carries flat string context (paths, keys, return codes) that
    is rendered after the message and included in JSON error output.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"

    def to_dict(self) -> Dict[str, Any]:
        """Machine-readable form used by ``funcsift extract --format json``."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": dict(self.details),
        }
