from __future__ import annotations


class LatLngError(Exception):
    """Base exception for latlng errors."""


class InvalidArgumentError(LatLngError, ValueError):
    """Raised when a coordinate, delta or length argument is unusable."""

    def __init__(self, argument: str, message: str):
        self.argument = argument
        self.message = message
        super().__init__(f"{argument}: {message}")
