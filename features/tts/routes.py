"""REST routes exposing the voice catalog and speech synthesis."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask

from config.server import API_PREFIX
from config.tts import DEFAULT_ACCEPT, RESPONSE_FILENAME
from core.exceptions import ProviderError, ServiceError, ValidationError
from core.http.errors import (
    format_provider_error,
    format_service_error,
    format_validation_error,
)
from features.tts.dependencies import get_tts_service
from features.tts.schemas.responses import ErrorResponse, VoiceDescriptor
from features.tts.service import TTSService, parse_generate_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix=API_PREFIX, tags=["TTS"])

VOICES_ERROR_PREFIX = "Failed to fetch voices"
GENERATE_ERROR_PREFIX = "Error generating speech"


@router.get(
    "/voices",
    summary="List available voices",
    response_model=List[VoiceDescriptor],
    responses={500: {"model": ErrorResponse}},
)
async def list_voices_endpoint(
    service: TTSService = Depends(get_tts_service),
) -> Response:
    """Return the provider's voice catalog in provider order."""

    try:
        voices = await service.list_voices()
    except ProviderError as exc:
        logger.error("Error fetching voices: %s", exc)
        payload = format_provider_error(exc, prefix=VOICES_ERROR_PREFIX)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)
    except ServiceError as exc:
        logger.error("Voice catalog service error: %s", exc)
        payload = format_service_error(exc, prefix=VOICES_ERROR_PREFIX)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)
    except Exception as exc:  # pragma: no cover - unexpected failure
        logger.exception("Unexpected error fetching voices: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": f"{VOICES_ERROR_PREFIX}: {exc}"},
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=[voice.model_dump() for voice in voices],
    )


@router.post(
    "/generate-speech",
    summary="Synthesise speech from text",
    response_class=StreamingResponse,
    responses={
        200: {"content": {DEFAULT_ACCEPT: {}}},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def generate_speech_endpoint(
    request: Request,
    service: TTSService = Depends(get_tts_service),
) -> Response:
    """Stream the provider's MPEG audio back to the caller unmodified."""

    try:
        payload = parse_generate_request(await request.body())
        stream = await service.generate_speech(payload)
    except ValidationError as exc:
        logger.warning("Speech generation validation error: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=format_validation_error(exc),
        )
    except ProviderError as exc:
        logger.error("Error generating speech: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=format_provider_error(exc, prefix=GENERATE_ERROR_PREFIX),
        )
    except ServiceError as exc:
        logger.error("Speech generation service error: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=format_service_error(exc, prefix=GENERATE_ERROR_PREFIX),
        )
    except Exception as exc:  # pragma: no cover - unexpected failure
        logger.exception("Unexpected error generating speech: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": f"{GENERATE_ERROR_PREFIX}: {exc}"},
        )

    headers = {"Content-Disposition": f'attachment; filename="{RESPONSE_FILENAME}"'}
    return StreamingResponse(
        stream,
        media_type=DEFAULT_ACCEPT,
        headers=headers,
        background=BackgroundTask(stream.aclose),
    )


__all__ = ["router"]
