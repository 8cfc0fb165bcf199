"""
Exception classes for registry access.

A missing record is not an error; lookups return ``None`` for that case.
These exceptions cover failures to reach or read the registry itself.
"""

from typing import Optional


class RegistryError(Exception):
    """Base exception for all registry errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class RegistryConnectionError(RegistryError):
    """Raised when the registry store cannot be reached."""

    pass


class RegistryTimeoutError(RegistryError):
    """Raised when a registry lookup exceeds its deadline."""

    pass


class RegistryDataError(RegistryError):
    """Raised when a stored row cannot be turned into a domain record."""

    pass
