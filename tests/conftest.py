import anyio
import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.client import get_http_client
from app.core.config import Settings, get_settings
from app.main import app
from app.models.passenger import PassengerAttributes

TEST_URL = "https://inference.test/models/titanic-survival-prediction"


class FakeRemoteModel:
    """
    Stands in for the hosted model: records every request and
    answers through a replaceable handler
    """

    def __init__(self):
        self.requests = []
        self.handler = lambda request: httpx.Response(200, json=[{"label": "SURVIVED", "score": 0.87}])

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    return Settings(inference_url=TEST_URL)


@pytest.fixture
def remote():
    return FakeRemoteModel()


@pytest.fixture
def passenger():
    return PassengerAttributes(age=30, sex="male", passengerClass="2", siblings=0, parents=0)


@pytest.fixture
def passenger_json():
    return {"age": 30, "sex": "male", "passengerClass": "2", "siblings": 0, "parents": 0}


@pytest.fixture
def api(settings, remote):
    mock_client = httpx.AsyncClient(transport=httpx.MockTransport(remote))

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = lambda: mock_client

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
    anyio.run(mock_client.aclose)
