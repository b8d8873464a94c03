"""Exceptions raised by Plugin Bridge."""

from pathlib import Path
from typing import Any, Dict, Optional


class BridgeError(Exception):
    """Base exception for all Plugin Bridge errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.details = details or {}


class SyncError(BridgeError):
    """A filesystem operation failed while writing a target."""

    def __init__(self, path: Path, operation: str, cause: Optional[BaseException] = None) -> None:
        reason = f": {cause}" if cause else ""
        super().__init__(
            f"Failed to {operation} {path}{reason}",
            details={"path": str(path), "operation": operation},
        )
        self.path = Path(path)
        self.operation = operation
        self.cause = cause


class ConfigError(BridgeError):
    """User configuration file is unreadable or malformed."""


class SourceError(BridgeError):
    """Source configuration tree could not be read."""


class UnknownTargetError(BridgeError):
    """Requested sync target is not registered."""
