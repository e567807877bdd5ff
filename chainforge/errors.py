"""
Error types shared by the console services
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ValidationError:
    """A single problem with operator input, reported before any network call"""
    field: str
    code: str  # missing, invalid, out_of_range, not_allowed, unknown
    message: str

    def __str__(self):
        return self.message


class ConfigurationError(ValueError):
    """Raised when the console cannot start with the given configuration"""


class PolicyError(LookupError):
    """Raised for a token standard that has no policy entry"""


class LifecycleError(RuntimeError):
    """Raised for a verification transition the lifecycle does not allow"""


class TransportError(Exception):
    """Network failure or non-2xx response from the backend"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status
