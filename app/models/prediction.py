import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SURVIVED = "Survived"
DID_NOT_SURVIVE = "Did Not Survive"

# Sentinels: not model outputs
UNABLE_TO_DETERMINE = "Unable to determine"
UNABLE_TO_MAKE_PREDICTION = "Unable to make prediction"
PREDICTION_FAILED = "Prediction failed"

PredictionText = Literal[
    "Survived",
    "Did Not Survive",
    "Unable to determine",
    "Unable to make prediction",
    "Prediction failed"
]


class PredictionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    prediction: PredictionText
    probability: float = Field(..., ge=0, le=1) # Model confidence

    @property
    def confidence_percent(self) -> int:
        """
        Confidence as shown to the user: 0.87 -> 87, halves round up
        """
        return math.floor(self.probability * 100 + 0.5)


class PredictionFailure(BaseModel):
    """
    Terminal failure of a prediction call, never mixed with a result
    """
    model_config = ConfigDict(frozen=True)

    error: str
    details: str
