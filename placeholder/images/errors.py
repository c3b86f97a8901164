"""Errors raised while serving an image request."""

from __future__ import annotations


class ImageRequestError(Exception):
    """Base class for failures answered with a bare HTTP status code."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DimensionTooLarge(ImageRequestError):
    status_code = 403


class InvalidDimension(ImageRequestError):
    status_code = 400


class ImagerFailure(ImageRequestError):
    """Raised when the image generator fails to produce a response."""

    status_code = 500
