from .requests import GenerateSpeechRequest
from .responses import ErrorResponse, VoiceDescriptor

__all__ = ["ErrorResponse", "GenerateSpeechRequest", "VoiceDescriptor"]
