"""API key loading for the remote speech provider."""

from __future__ import annotations

import os
from typing import Dict

from config.tts.providers import watson


def load_api_keys() -> Dict[str, str]:
    """Read provider credentials from the environment at call time."""

    return {
        "ibm_tts_api_key": os.getenv(watson.API_KEY_ENV, ""),
        "ibm_tts_url": os.getenv(watson.SERVICE_URL_ENV, ""),
    }


__all__ = ["load_api_keys"]
