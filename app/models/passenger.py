from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PassengerAttributes(BaseModel):
    """
    Passenger data submitted by the prediction form
    """
    model_config = ConfigDict(frozen=True)

    age: float = Field(..., ge=0, le=100)
    sex: Literal["male", "female"]
    passengerClass: Literal["1", "2", "3"] # 1 - highest class
    siblings: int = Field(..., ge=0, le=10) # Siblings / spouses aboard
    parents: int = Field(..., ge=0, le=10) # Parents / children aboard
