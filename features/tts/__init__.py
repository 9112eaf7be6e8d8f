"""Package initialisation for text-to-speech feature."""

from .routes import router
from .service import TTSService

__all__ = ["router", "TTSService"]
