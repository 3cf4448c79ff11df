import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Union

import httpx

# Core depends on the api layer here: the encoder is shared with the /features preview router
from app.api.data import encode_passenger, serialize_features
from app.core.config import Settings
from app.models.passenger import PassengerAttributes
from app.models.prediction import (
    DID_NOT_SURVIVE,
    SURVIVED,
    UNABLE_TO_DETERMINE,
    PredictionResult,
)

logger = logging.getLogger(__name__)

SURVIVED_LABEL = "SURVIVED"
NOT_SURVIVED_LABEL = "NOT_SURVIVED"


class InferenceTransportError(Exception):
    """
    The remote model could not be reached or answered with garbage:
    network failure, timeout, non-2xx status or malformed JSON
    """


# Known shapes of the remote response

@dataclass(frozen=True)
class LabelListShape:
    """[{"label": "SURVIVED", "score": 0.95}, ...]"""
    label: Any
    score: Any


@dataclass(frozen=True)
class LabelObjectShape:
    """{"label": "SURVIVED", "score": 0.95}"""
    label: Any
    score: Any


@dataclass(frozen=True)
class TextShape:
    """Plain string answer, carries no score"""
    text: str


@dataclass(frozen=True)
class UnrecognizedShape:
    body: Any


ResponseShape = Union[LabelListShape, LabelObjectShape, TextShape, UnrecognizedShape]


def _present(value: Any) -> bool:
    # Falsy JSON scalars count as absent; empty arrays and objects do not
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == value and value != 0
    return True


def _has_label(item: Any) -> bool:
    return isinstance(item, dict) and _present(item.get("label"))


def match_label_list(body: Any) -> Optional[LabelListShape]:
    if isinstance(body, list) and body and _has_label(body[0]):
        return LabelListShape(label=body[0]["label"], score=body[0].get("score"))
    return None


def match_label_object(body: Any) -> Optional[LabelObjectShape]:
    if _has_label(body):
        return LabelObjectShape(label=body["label"], score=body.get("score"))
    return None


def match_text(body: Any) -> Optional[TextShape]:
    if isinstance(body, str):
        return TextShape(text=body)
    return None


# Order matters: the first matching predicate wins
SHAPE_MATCHERS: List[Callable[[Any], Optional[ResponseShape]]] = [
    match_label_list,
    match_label_object,
    match_text,
]


def classify_response(body: Any) -> ResponseShape:
    for matcher in SHAPE_MATCHERS:
        shape = matcher(body)
        if shape is not None:
            return shape
    return UnrecognizedShape(body=body)


def label_to_prediction(label: Any) -> str:
    return SURVIVED if label == SURVIVED_LABEL else DID_NOT_SURVIVE


def _valid_score(score: Any) -> bool:
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return False
    try:
        value = float(score)
    except OverflowError:
        return False
    return math.isfinite(value) and 0 <= value <= 1


def normalize_response(body: Any, settings: Settings) -> PredictionResult:
    """
    Reconciling the possible shapes of the remote answer into one result.
    Unknown shapes degrade to "Unable to determine" instead of failing.
    """
    shape = classify_response(body)

    if isinstance(shape, (LabelListShape, LabelObjectShape)):
        probability = shape.score
        if not _valid_score(probability):
            logger.warning("Remote model returned label %r without a usable score: %r", shape.label, shape.score)
            probability = settings.unknown_response_confidence
        return PredictionResult(
            prediction=label_to_prediction(shape.label),
            probability=float(probability)
        )

    if isinstance(shape, TextShape):
        label = SURVIVED_LABEL if SURVIVED_LABEL in shape.text else NOT_SURVIVED_LABEL
        return PredictionResult(
            prediction=label_to_prediction(label),
            probability=settings.text_response_confidence
        )

    logger.warning("Unexpected response format from remote model: %s", json.dumps(shape.body))
    return PredictionResult(
        prediction=UNABLE_TO_DETERMINE,
        probability=settings.unknown_response_confidence
    )


class InferenceGateway:
    """
    Bridge between the passenger form and the remote classification model.
    One outbound call per prediction: no retries, no caching.
    """

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        self.client = client
        self.settings = settings

    async def fetch(self, payload: str) -> Any:
        try:
            response = await self.client.post(
                self.settings.inference_url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.settings.inference_timeout
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise InferenceTransportError(f"Request to remote model timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise InferenceTransportError(
                f"Remote model responded with status {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise InferenceTransportError(f"Request to remote model failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise InferenceTransportError(f"Remote model returned invalid JSON: {e}") from e

    async def predict(self, passenger: PassengerAttributes) -> PredictionResult:
        features = encode_passenger(passenger)
        payload = serialize_features(features)

        body = await self.fetch(payload)
        logger.debug("Remote model response: %r", body)

        return normalize_response(body, self.settings)
