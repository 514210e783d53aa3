import json
import uuid

import httpx
import pytest

from manyrows import ManyRowsClient

BASE_URL = "https://api.example.com"
API_KEY = "secret-key"
PROJECT = "acme"
KIND = "orders"
ENTITY_ID = uuid.UUID("aaaaaaaa-1111-bbbb-2222-cccccccccccc")
COLLECTION_ID = uuid.UUID("dddddddd-3333-eeee-4444-ffffffffffff")


class Recorder:
    """Fake transport that records requests and replays a canned response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.response = httpx.Response(200)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    def reply(self, status_code: int = 200, **kwargs) -> None:
        self.response = httpx.Response(status_code, **kwargs)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def http_client(recorder):
    with httpx.Client(transport=httpx.MockTransport(recorder)) as c:
        yield c


@pytest.fixture
def client(http_client):
    return ManyRowsClient(BASE_URL, API_KEY, http_client=http_client)


@pytest.fixture
def gzip_client(http_client):
    return ManyRowsClient(BASE_URL, API_KEY, http_client=http_client, accept_gzip=True)
