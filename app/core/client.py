import httpx
from fastapi import Request

from app.core.config import Settings


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """
    Build the client shared by all requests to the remote model.
    Created once in the app lifespan and closed on shutdown.
    """
    headers = {"Content-Type": "application/json"}
    if settings.inference_token:
        headers["Authorization"] = f"Bearer {settings.inference_token}"

    return httpx.AsyncClient(
        headers=headers,
        timeout=httpx.Timeout(settings.inference_timeout)
    )


# Function for getting client in API (Dependency Injection)
async def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client
