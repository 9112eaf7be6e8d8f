"""Utilities for formatting structured HTTP error responses.

Every failure leaves the proxy as a flat ``{"error": "<message>"}`` object,
which is the shape the browser client reads.
"""

from __future__ import annotations

from typing import Dict

from core.exceptions import (
    ConfigurationError,
    ProviderError,
    ServiceError,
    ValidationError,
)


def _build_error_payload(message: str, *, prefix: str | None = None) -> Dict[str, str]:
    if prefix:
        message = f"{prefix}: {message}"
    return {"error": message}


def format_validation_error(exc: ValidationError) -> Dict[str, str]:
    """Return a standard payload for :class:`ValidationError`."""

    return _build_error_payload(exc.message)


def format_configuration_error(exc: ConfigurationError) -> Dict[str, str]:
    """Return a standard payload for :class:`ConfigurationError`."""

    return _build_error_payload(exc.message, prefix="Configuration error")


def format_provider_error(exc: ProviderError, *, prefix: str) -> Dict[str, str]:
    """Return a standard payload for :class:`ProviderError`.

    ``prefix`` names the failed operation, e.g. ``"Failed to fetch voices"``.
    """

    return _build_error_payload(exc.message, prefix=prefix)


def format_service_error(exc: ServiceError, *, prefix: str) -> Dict[str, str]:
    """Return a standard payload for generic service errors."""

    return _build_error_payload(str(exc), prefix=prefix)


__all__ = [
    "format_configuration_error",
    "format_provider_error",
    "format_service_error",
    "format_validation_error",
]
