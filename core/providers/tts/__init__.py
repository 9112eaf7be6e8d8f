"""Text-to-speech provider implementations."""

from .iam import IAMTokenManager
from .watson import WatsonTTSProvider

__all__ = [
    "IAMTokenManager",
    "WatsonTTSProvider",
]
