import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import data, predict
from app.core.client import create_http_client
from app.core.config import get_settings

settings = get_settings()

logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One client for the whole process, shared by all requests
    app.state.http_client = create_http_client(get_settings())
    logger.info("Remote model endpoint: %s", get_settings().inference_url)
    try:
        yield
    finally:
        await app.state.http_client.aclose()


app = FastAPI(
    title="Titanic Survival Gateway",
    description="Survival prediction through a remote hosted model",
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"]
)

# Simple handler errors and validation
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Get first error from list
    error = exc.errors()[0]

    # Get the field name (it is always at the end of the 'loc' list)
    field_name = error.get("loc")[-1]
    error_message = error.get("msg")

    # Rejected before any call to the remote model
    return JSONResponse(
        status_code=422,
        content={
            "error": "Invalid passenger attributes",
            "details": f"Error in field '{field_name}': {error_message}"
        }
    )

# API routers
app.include_router(data.router, prefix="/api/data", tags=["Data"])
app.include_router(predict.router, prefix="/api/predict", tags=["Predict"])


@app.get("/health")
def health():
    return {"status": "ok"}
