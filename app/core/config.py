import os
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Remote model used when nothing is configured
DEFAULT_INFERENCE_URL = "https://api-inference.huggingface.co/models/Xenova/titanic-survival-prediction"


class Settings(BaseModel):
    """
    Service configuration, read from environment variables once at startup
    """
    model_config = ConfigDict(frozen=True)

    inference_url: str = DEFAULT_INFERENCE_URL
    inference_token: Optional[str] = None
    inference_timeout: float = 30.0

    # Confidence assigned to responses that carry no score
    text_response_confidence: float = Field(0.75, ge=0, le=1)
    unknown_response_confidence: float = Field(0.5, ge=0, le=1)

    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"


def load_settings() -> Settings:
    origins = os.getenv("CORS_ORIGINS", "*")

    return Settings(
        inference_url=os.getenv("INFERENCE_API_URL", DEFAULT_INFERENCE_URL),
        inference_token=os.getenv("INFERENCE_API_TOKEN") or None,
        inference_timeout=float(os.getenv("INFERENCE_TIMEOUT", "30")),
        text_response_confidence=float(os.getenv("TEXT_RESPONSE_CONFIDENCE", "0.75")),
        unknown_response_confidence=float(os.getenv("UNKNOWN_RESPONSE_CONFIDENCE", "0.5")),
        cors_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper()
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
