"""Exceptions raised by the report query layer.

Each exception knows its HTTP status and the JSON body it is rendered as;
``error_handlers`` turns them into responses.
"""
from fastapi import status


class ReportsError(Exception):
    """Base class for errors surfaced to API clients."""

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": self.message}


class InvalidParameterError(ReportsError):
    """A required query parameter is missing or malformed."""

    http_status = status.HTTP_400_BAD_REQUEST


class ReportsNotFoundError(ReportsError):
    """The filter matched nothing, or the requested page does not exist."""

    http_status = status.HTTP_404_NOT_FOUND

    def to_response(self) -> dict:
        return {"error": {"message": self.message}}


INTERNAL_ERROR_MESSAGE = "Internal server error."
