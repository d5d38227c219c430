"""Exception hierarchy for skysep"""

from typing import Any, Dict, List, Optional


class SkysepError(Exception):
    """Base exception for trajectory analysis errors."""
    pass


class FlightValidationError(SkysepError, ValueError):
    """Raised when an uploaded flight batch is malformed or violates the schema.

    The whole batch is rejected; ``errors`` holds the individual problems.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class RouteParseError(SkysepError, ValueError):
    """Raised when a route string contains a malformed waypoint token."""

    def __init__(self, message: str, token: str = ""):
        super().__init__(message)
        self.token = token


class ConfigError(SkysepError):
    """Raised when a configuration file cannot be read or is invalid."""
    pass
