from decimal import Decimal
from typing import List, Union

from fastapi import APIRouter

from app.models.passenger import PassengerAttributes

router = APIRouter()

Number = Union[int, float]

# Fixed divisors expected by the remote model
AGE_SCALE = 100
FAMILY_SCALE = 10


def encode_passenger(passenger: PassengerAttributes) -> List[Number]:
    """
    Turning passenger attributes into the model's feature vector:
    [age, sex, class, siblings, parents]
    """
    return [
        passenger.age / AGE_SCALE,
        1 if passenger.sex == "male" else 0,
        int(passenger.passengerClass),
        passenger.siblings / FAMILY_SCALE,
        passenger.parents / FAMILY_SCALE
    ]


def format_feature(value: Number) -> str:
    """
    Number formatting of the model's reference client:
    0.0 -> "0", 0.00001 -> "0.00001", 1e-07 -> "1e-7"
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text

    mantissa, exponent = text.split("e")
    if int(exponent) >= -6:
        return format(Decimal(text), "f")
    return f"{mantissa}e{int(exponent)}"


def serialize_features(features: List[Number]) -> str:
    return " ".join(format_feature(value) for value in features)


@router.post("/features")
def data_features(passenger: PassengerAttributes):
    """
    Returns the feature vector and the payload sent to the model,
    without calling it
    """
    features = encode_passenger(passenger)
    return {
        "features": features,
        "payload": serialize_features(features)
    }
