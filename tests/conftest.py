import sys
from pathlib import Path

import httpx
import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from ballou_gateway.factory import make


def build_ballou_xml(status: str, errors=()) -> bytes:
    error_nodes = "".join(f"<error>{e}</error>" for e in errors)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        "<ballou_smls_response><response>"
        f'<message id="1" status="{status}">{error_nodes}</message>'
        "</response></ballou_smls_response>"
    ).encode()


class Recorder:
    """Serves a canned reply and keeps every request the gateway sent."""

    def __init__(self):
        self.requests = []
        self.reply = httpx.Response(200, content=build_ballou_xml("1"))
        self.raise_exc = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_exc is not None:
            raise self.raise_exc
        return self.reply

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture()
def recorder():
    return Recorder()


@pytest.fixture()
def http_client(recorder):
    client = httpx.Client(transport=httpx.MockTransport(recorder))
    yield client
    client.close()


@pytest.fixture()
def gateway(http_client):
    return make({"token": "tok", "UN": "user", "PW": "secret"}, client=http_client)


@pytest.fixture()
def ballou_xml():
    return build_ballou_xml
