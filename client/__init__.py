"""Python client for the TTS proxy: session state, HTTP calls and CLI."""

from .api import ProxyClient, ProxyRequestError
from .audio import AudioClip
from .session import ClientSession, GenerationBlockedError, NoAudioError
from .state import GenerationInProgressError, GenerationState, GenerationStateMachine

__all__ = [
    "AudioClip",
    "ClientSession",
    "GenerationBlockedError",
    "GenerationInProgressError",
    "GenerationState",
    "GenerationStateMachine",
    "NoAudioError",
    "ProxyClient",
    "ProxyRequestError",
]
