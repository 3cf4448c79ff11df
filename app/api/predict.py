import logging

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.client import get_http_client
from app.core.config import Settings, get_settings
from app.core.inference import InferenceGateway, InferenceTransportError
from app.models.passenger import PassengerAttributes
from app.models.prediction import PredictionFailure, PredictionResult

logger = logging.getLogger(__name__)

router = APIRouter()


def get_gateway(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings)
) -> InferenceGateway:
    return InferenceGateway(client, settings)


@router.get("/status")
def predict_status(settings: Settings = Depends(get_settings)):
    if not settings.inference_url:
        return {
            "status": "unavailable",
            "message": "Remote model endpoint is not configured"
        }

    return {
        "status": "available",
        "message": "Prediction service is ready",
        "endpoint": settings.inference_url,
        "authenticated": settings.inference_token is not None
    }


@router.post(
    "/",
    response_model=PredictionResult,
    responses={500: {"model": PredictionFailure}}
)
async def make_prediction(passenger: PassengerAttributes, gateway: InferenceGateway = Depends(get_gateway)):
    """
    Making prediction for one passenger through the remote model
    """
    try:
        return await gateway.predict(passenger)
    except InferenceTransportError as e:
        logger.error("Prediction error: %s", e)
        failure = PredictionFailure(error="Failed to make prediction", details=str(e))
        return JSONResponse(status_code=500, content=failure.model_dump())
    except Exception as e:
        logger.exception("Unexpected prediction error")
        failure = PredictionFailure(error="Failed to make prediction", details=str(e))
        return JSONResponse(status_code=500, content=failure.model_dump())
