"""IBM Watson Text to Speech configuration."""

from __future__ import annotations

PROVIDER_NAME = "watson"

# Credential environment variables
API_KEY_ENV = "IBM_TTS_API_KEY"
SERVICE_URL_ENV = "IBM_TTS_URL"
DISABLE_SSL_VERIFICATION_ENV = "IBM_TTS_DISABLE_SSL_VERIFICATION"
TIMEOUT_ENV = "IBM_TTS_TIMEOUT"

# IAM token exchange
IAM_TOKEN_URL = "https://iam.cloud.ibm.com/identity/token"
IAM_GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"
TOKEN_REFRESH_MARGIN = 60  # seconds before expiry to fetch a fresh token

# REST paths relative to the service instance URL
VOICES_PATH = "/v1/voices"
SYNTHESIZE_PATH = "/v1/synthesize"

DEFAULT_TIMEOUT = 60.0  # seconds
BUFFER_SIZE = 4096  # bytes per relayed audio chunk

__all__ = [
    "PROVIDER_NAME",
    "API_KEY_ENV",
    "SERVICE_URL_ENV",
    "DISABLE_SSL_VERIFICATION_ENV",
    "TIMEOUT_ENV",
    "IAM_TOKEN_URL",
    "IAM_GRANT_TYPE",
    "TOKEN_REFRESH_MARGIN",
    "VOICES_PATH",
    "SYNTHESIZE_PATH",
    "DEFAULT_TIMEOUT",
    "BUFFER_SIZE",
]
