"""Field injection exceptions."""
from __future__ import annotations


class InjectionError(Exception):
    """Base exception for field injection."""


class DocumentDecodeError(InjectionError):
    """The input bytes are not a readable PDF. Fatal for the whole call."""


class DocumentEncodeError(InjectionError):
    """The modified document could not be serialized. Fatal for the whole call."""


class ImageDecodeError(InjectionError):
    """One field's image payload is unreadable. Absorbed per field by the injector."""
