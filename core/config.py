# =============================================================================
# core/config.py  -  Environment-driven settings
# =============================================================================
#
# Everything comes from environment variables.  The entry point calls
# load_dotenv() first, so a local .env file works too.
#
#   GEMINI_API_KEY       required, sent as the ?key= query credential
#   GEMINI_API_ENDPOINT  base URL of the models collection
#   GEMINI_MODEL_ID      model used for every tool
#   GEMINI_TIMEOUT       seconds; unset means no timeout at all
#   LOG_LEVEL            stderr log level (default INFO)
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import ConfigError

DEFAULT_API_ENDPOINT = "https://generativelanguage.googleapis.com/v1alpha/models"
DEFAULT_MODEL_ID = "gemini-2.0-flash-exp"


@dataclass(frozen=True)
class Settings:
    api_key: str
    api_endpoint: str = DEFAULT_API_ENDPOINT
    model_id: str = DEFAULT_MODEL_ID
    timeout: Optional[float] = None
    log_level: str = "INFO"

    @property
    def generate_url(self) -> str:
        """generateContent URL for the configured model, without the key."""
        return f"{self.api_endpoint.rstrip('/')}/{self.model_id}:generateContent"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Raises:
        ConfigError: GEMINI_API_KEY is missing or GEMINI_TIMEOUT is not a
            positive number.
    """
    env = os.environ if environ is None else environ

    api_key = env.get("GEMINI_API_KEY", "").strip()
    if not api_key:
        raise ConfigError("GEMINI_API_KEY environment variable is required")

    timeout: Optional[float] = None
    raw_timeout = env.get("GEMINI_TIMEOUT", "").strip()
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"GEMINI_TIMEOUT must be a number, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ConfigError(f"GEMINI_TIMEOUT must be positive, got {raw_timeout!r}")

    return Settings(
        api_key=api_key,
        api_endpoint=env.get("GEMINI_API_ENDPOINT") or DEFAULT_API_ENDPOINT,
        model_id=env.get("GEMINI_MODEL_ID") or DEFAULT_MODEL_ID,
        timeout=timeout,
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )
